"""HTTP client for the New York Times Article Search API."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from wanderwise_core.retry import async_retry

logger = logging.getLogger(__name__)

_BASE_URL = "https://api.nytimes.com"


def _is_transient(exc: Exception) -> bool:
    """Retry transport errors, 429 and 5xx; give up on other 4xx."""
    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        return status == 429 or status >= 500
    return True


class NYTimesClient:
    """Thin async wrapper around ``/svc/search/v2/articlesearch.json``."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._client = httpx.AsyncClient(
            base_url=_BASE_URL,
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    @async_retry(
        max_retries=2,
        base_delay=1.0,
        max_delay=10.0,
        exceptions=(httpx.HTTPStatusError, httpx.TransportError),
        retry_if=_is_transient,
    )
    async def search_articles(
        self, query: str, begin_date: str, end_date: str
    ) -> list[dict[str, Any]]:
        """Return the raw ``docs`` list for *query* between two YYYYMMDD dates."""
        resp = await self._client.get(
            "/svc/search/v2/articlesearch.json",
            params={
                "q": query,
                "begin_date": begin_date,
                "end_date": end_date,
                "sort": "newest",
                "api-key": self._api_key,
            },
        )
        resp.raise_for_status()
        docs: list[dict[str, Any]] = (resp.json().get("response") or {}).get("docs") or []
        logger.debug("NYTimes returned %d articles for %r", len(docs), query)
        return docs

    async def close(self) -> None:
        """Shut down the underlying HTTPX client."""
        await self._client.aclose()
