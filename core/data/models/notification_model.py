"""SQLAlchemy ORM model for notifications."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String, Text

from .base import Base, utcnow


class NotificationModel(Base):
    """SQLAlchemy ORM model for notifications table."""

    __tablename__ = "notifications"

    id = Column(String(36), primary_key=True)
    targeted_user = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    type = Column(String(10), nullable=False, default="email")
    is_read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
