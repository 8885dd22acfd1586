"""SQLAlchemy ORM models for WanderWise."""

from .airport import Airport
from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin
from .flight import FlightRecord

__all__ = [
    "Airport",
    "Base",
    "FlightRecord",
    "TimestampMixin",
    "UUIDPrimaryKeyMixin",
]
