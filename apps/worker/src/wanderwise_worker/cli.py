"""CLI for running the flight worker pieces by hand."""

from __future__ import annotations

import asyncio
import json
import sys
from datetime import date

import click

from wanderwise_core.log_config import configure_logging
from wanderwise_core.schemas import FlightOffer, SearchRequest

from .config import settings


def _build_search_request(
    origin: str, destination: str, departure_date: str, adults: int
) -> SearchRequest:
    return SearchRequest(
        origin_code=origin,
        destination_code=destination,
        departure_date=date.fromisoformat(departure_date),
        passenger_count=adults,
    )


def _print_results(flights: list[FlightOffer]) -> None:
    if not flights:
        click.echo("No flights found.")
        return
    click.echo(f"\nFound {len(flights)} flight(s):\n")
    for i, f in enumerate(flights, 1):
        click.echo(
            f"  {i}. {f.airline} | {f.origin} → {f.destination} | "
            f"{f.departure_time:%H:%M} - {f.arrival_time:%H:%M} | "
            f"{f.duration_minutes}min | {f.stops} stop(s) | "
            f"{f.price:.2f} {f.currency}"
        )


@click.group()
@click.option("--log-level", default=None, help="Override WORKER_LOG_LEVEL")
def cli(log_level: str | None) -> None:
    """WanderWise worker CLI."""
    configure_logging(log_level or settings.log_level)


@cli.command("fetch")
@click.argument("origin")
@click.argument("destination")
@click.argument("departure_date")
@click.option("--adults", default=1, show_default=True, help="Passenger count")
@click.option("--json-output", is_flag=True, help="Output as JSON")
def fetch(
    origin: str, destination: str, departure_date: str, adults: int, json_output: bool
) -> None:
    """Query the flight provider directly (no cache, no queue)."""
    from .amadeus import AmadeusFlightSource

    request = _build_search_request(origin, destination, departure_date, adults)

    async def _run() -> list[FlightOffer]:
        source = AmadeusFlightSource()
        try:
            return await source.find(request)
        finally:
            await source.close()

    flights = asyncio.run(_run())
    if json_output:
        click.echo(json.dumps([f.model_dump(mode="json") for f in flights], indent=2))
    else:
        _print_results(flights)


@cli.command("process")
@click.argument("origin")
@click.argument("destination")
@click.argument("departure_date")
@click.option("--adults", default=1, show_default=True, help="Passenger count")
def process(origin: str, destination: str, departure_date: str, adults: int) -> None:
    """Run one job through the worker, writing to the shared cache."""
    from .tasks import run_job

    request = _build_search_request(origin, destination, departure_date, adults)
    outcome = asyncio.run(run_job(request))
    click.echo(f"{type(outcome).__name__}: {outcome.key}")


@cli.command("health")
def health_check() -> None:
    """Check that the flight provider is reachable."""
    from .amadeus import AmadeusFlightSource

    async def _run() -> bool:
        source = AmadeusFlightSource()
        try:
            return await source.health_check()
        finally:
            await source.close()

    ok = asyncio.run(_run())
    click.echo(f"  Amadeus: {'OK' if ok else 'FAIL'}")
    if not ok:
        sys.exit(1)


@cli.command("init-db")
@click.option("--seed/--no-seed", default=True, help="Load airport reference data")
def init_db(seed: bool) -> None:
    """Create database tables (and seed airports)."""
    from wanderwise_db.database import create_tables
    from wanderwise_db.seed import seed_airports

    async def _run() -> int:
        await create_tables()
        return await seed_airports() if seed else 0

    added = asyncio.run(_run())
    click.echo(f"Tables ready; {added} airport(s) added.")


if __name__ == "__main__":
    cli()
