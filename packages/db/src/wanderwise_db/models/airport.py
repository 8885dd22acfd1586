"""Airport model."""

from __future__ import annotations

from sqlalchemy import Index, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Airport(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Airports table - reference data used to resolve destination countries."""

    __tablename__ = "airports"

    code: Mapped[str] = mapped_column(String(3), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str] = mapped_column(String(255), nullable=False)
    country: Mapped[str] = mapped_column(String(100), nullable=False)

    __table_args__ = (Index("ix_airports_country", "country"),)

    def __repr__(self) -> str:
        return f"<Airport {self.code} ({self.city})>"
