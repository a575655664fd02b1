"""SQLAlchemy ORM model for deliveries."""

from sqlalchemy import Column, DateTime, ForeignKey, String, UniqueConstraint

from .base import Base, utcnow


class DeliveryModel(Base):
    """SQLAlchemy ORM model for deliveries table.

    ``order_id`` is unique: at most one delivery per order.
    """

    __tablename__ = "deliveries"
    __table_args__ = (UniqueConstraint("order_id", name="uq_deliveries_order_id"),)

    id = Column(String(36), primary_key=True)
    order_id = Column(String(36), ForeignKey("orders.id"), nullable=False)
    address = Column(String(255), nullable=False)
    courier = Column(String(100), nullable=True)
    status = Column(String(20), nullable=False, default="pending")
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
