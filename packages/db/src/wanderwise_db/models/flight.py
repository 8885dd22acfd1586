"""Historical flight price model."""

from __future__ import annotations

from datetime import date, datetime  # noqa: TC003

from sqlalchemy import Date, DateTime, Index, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class FlightRecord(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Flights table - one row per offer seen by a trip lookup.

    Rows are append-only; they feed the historical average / lowest price
    per route.
    """

    __tablename__ = "flights"

    offer_id: Mapped[str] = mapped_column(String(64), nullable=False)
    origin: Mapped[str] = mapped_column(String(3), nullable=False)
    destination: Mapped[str] = mapped_column(String(3), nullable=False)
    departure_date: Mapped[date] = mapped_column(Date, nullable=False)
    price: Mapped[float] = mapped_column(Numeric(12, 2), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="USD")
    airline: Mapped[str] = mapped_column(String(3), nullable=False)
    duration_minutes: Mapped[int] = mapped_column(Integer, nullable=False)
    departure_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    arrival_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )

    __table_args__ = (
        Index("ix_flights_origin_destination", "origin", "destination"),
        Index("ix_flights_departure_date", "departure_date"),
    )

    def __repr__(self) -> str:
        return f"<FlightRecord {self.origin}-{self.destination} {self.price}>"
