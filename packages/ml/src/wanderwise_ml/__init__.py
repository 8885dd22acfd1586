"""WanderWise ML - AI travel opinions."""

from .opinion import get_travel_opinion

__all__ = ["get_travel_opinion"]
