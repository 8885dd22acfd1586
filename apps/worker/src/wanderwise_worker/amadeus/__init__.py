"""Amadeus Self-Service flight search."""

from .source import AmadeusFlightSource

__all__ = ["AmadeusFlightSource"]
