"""Prompt templates for the AI travel opinion."""

from __future__ import annotations

import calendar

SYSTEM_PROMPT = """\
You are a travel advisor. Given a destination, a travel month, the typical \
airfare on the route and a list of recent news headlines about the \
destination, give a short, balanced opinion (at most 120 words) on whether \
it is a good time to travel there.

Rules:
- Comment on whether the quoted price looks reasonable for the route.
- Mention safety only if the headlines give a concrete reason to.
- Do not invent facts that are not in the headlines.
- Answer in plain prose, no markdown.
"""


def build_user_prompt(
    origin: str,
    destination: str,
    month: int,
    average_price: float | None,
    headlines: list[str],
) -> str:
    """Build the per-request user message."""
    month_name = calendar.month_name[month] if 1 <= month <= 12 else str(month)
    if average_price is None:
        price_line = f"There is no price history yet for flights from {origin} to {destination}."
    else:
        price_line = (
            f"Based on historical data, the average price for a flight from "
            f"{origin} to {destination} is ${average_price:.2f}."
        )
    news = "\n".join(f"- {h}" for h in headlines) if headlines else "- (none found)"
    return (
        f"What is your opinion on travelling to {destination} in {month_name}?\n"
        f"{price_line}\n"
        "Does the average price seem reasonable? Does it seem safe based on "
        f"these recent news headlines:\n{news}"
    )
