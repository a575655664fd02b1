"""Data layer - infrastructure persistence and mapping."""

from .models import Base
from .uow import UnitOfWork, create_uow

__all__ = ["Base", "UnitOfWork", "create_uow"]
