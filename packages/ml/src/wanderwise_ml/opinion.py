"""AI opinion on a trip, generated with Claude."""

from __future__ import annotations

import logging

import anthropic

from wanderwise_core.errors import ProviderError
from wanderwise_ml.prompts import SYSTEM_PROMPT, build_user_prompt

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-haiku-4-5-20251001"


async def get_travel_opinion(
    origin: str,
    destination: str,
    month: int,
    average_price: float | None,
    headlines: list[str],
    *,
    api_key: str,
    model: str = DEFAULT_MODEL,
    client: anthropic.AsyncAnthropic | None = None,
) -> str:
    """Ask Claude whether travelling to *destination* in *month* is a good idea.

    Args:
        origin: IATA code of the departure airport.
        destination: IATA code of the arrival airport.
        month: Travel month, 1-12.
        average_price: Historical average fare on the route, if known.
        headlines: Recent news headlines about the destination.
        api_key: Anthropic API key.
        model: Claude model name.
        client: Shared client. When omitted, a temporary one is built and
            closed before returning.

    Returns:
        The opinion text.

    Raises:
        ProviderError: If the API call fails or returns no text.
    """
    owned = client is None
    if owned:
        client = anthropic.AsyncAnthropic(api_key=api_key)
    user_prompt = build_user_prompt(origin, destination, month, average_price, headlines)

    try:
        response = await client.messages.create(
            model=model,
            temperature=0.3,
            max_tokens=400,
            system=SYSTEM_PROMPT,
            messages=[{"role": "user", "content": user_prompt}],
        )
    except anthropic.APIError as exc:
        msg = f"opinion request failed: {exc}"
        raise ProviderError(msg) from exc
    finally:
        if owned:
            await client.close()

    text = "".join(
        block.text for block in response.content if getattr(block, "type", "") == "text"
    ).strip()
    if not text:
        msg = f"empty opinion for {origin}-{destination} in month {month}"
        raise ProviderError(msg)
    logger.debug("Opinion for %s-%s: %d chars", origin, destination, len(text))
    return text
