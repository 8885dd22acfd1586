"""Airport reference data loaded by ``init-db --seed``."""

from __future__ import annotations

AIRPORTS: list[dict[str, str]] = [
    {"code": "TPE", "name": "Taiwan Taoyuan International", "city": "Taipei", "country": "Taiwan"},
    {"code": "TSA", "name": "Taipei Songshan", "city": "Taipei", "country": "Taiwan"},
    {"code": "KHH", "name": "Kaohsiung International", "city": "Kaohsiung", "country": "Taiwan"},
    {"code": "LAX", "name": "Los Angeles International", "city": "Los Angeles", "country": "United States"},
    {"code": "SFO", "name": "San Francisco International", "city": "San Francisco", "country": "United States"},
    {"code": "JFK", "name": "John F. Kennedy International", "city": "New York", "country": "United States"},
    {"code": "SEA", "name": "Seattle-Tacoma International", "city": "Seattle", "country": "United States"},
    {"code": "NRT", "name": "Narita International", "city": "Tokyo", "country": "Japan"},
    {"code": "HND", "name": "Haneda", "city": "Tokyo", "country": "Japan"},
    {"code": "KIX", "name": "Kansai International", "city": "Osaka", "country": "Japan"},
    {"code": "ICN", "name": "Incheon International", "city": "Seoul", "country": "South Korea"},
    {"code": "HKG", "name": "Hong Kong International", "city": "Hong Kong", "country": "Hong Kong"},
    {"code": "SIN", "name": "Singapore Changi", "city": "Singapore", "country": "Singapore"},
    {"code": "BKK", "name": "Suvarnabhumi", "city": "Bangkok", "country": "Thailand"},
    {"code": "LHR", "name": "Heathrow", "city": "London", "country": "United Kingdom"},
    {"code": "CDG", "name": "Charles de Gaulle", "city": "Paris", "country": "France"},
    {"code": "FRA", "name": "Frankfurt", "city": "Frankfurt", "country": "Germany"},
    {"code": "AMS", "name": "Amsterdam Schiphol", "city": "Amsterdam", "country": "Netherlands"},
    {"code": "SYD", "name": "Sydney Kingsford Smith", "city": "Sydney", "country": "Australia"},
    {"code": "YVR", "name": "Vancouver International", "city": "Vancouver", "country": "Canada"},
]


async def seed_airports() -> int:
    """Load :data:`AIRPORTS` into the database; returns rows added."""
    from .database import async_session_factory
    from .repositories import AirportRepository

    async with async_session_factory() as session:
        added = await AirportRepository(session).upsert_many(AIRPORTS)
        await session.commit()
    return added
