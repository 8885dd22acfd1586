"""Core schemas for WanderWise."""

from .flight import FlightOffer
from .progress import ProgressEvent
from .search import SearchRequest

__all__ = [
    "FlightOffer",
    "ProgressEvent",
    "SearchRequest",
]
