"""Recent news about a destination, cached in Redis."""

from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

import httpx

from wanderwise_core.cache_keys import articles_key
from wanderwise_core.errors import ProviderError

from ..cache.redis_client import cache_get, cache_set
from ..schemas.trips import Article

if TYPE_CHECKING:
    from ..clients.nytimes import NYTimesClient

logger = logging.getLogger(__name__)

LOOKBACK_DAYS = 7
MAX_ARTICLES = 10


def _published(raw: Any) -> datetime | None:
    # NYT dates look like 2025-04-28T10:00:00+0000
    try:
        return datetime.fromisoformat(raw)
    except (TypeError, ValueError):
        return None


def _to_article(doc: dict[str, Any]) -> Article | None:
    headline = (doc.get("headline") or {}).get("main")
    url = doc.get("web_url")
    if not headline or not url:
        return None
    return Article(
        title=headline,
        url=url,
        published_at=_published(doc.get("pub_date")),
        snippet=doc.get("abstract") or doc.get("snippet") or None,
    )


class ArticleService:
    """Look up articles about a keyword published over the last week."""

    def __init__(self, client: NYTimesClient, cache_ttl: int) -> None:
        self._client = client
        self._cache_ttl = cache_ttl

    async def recent_articles(
        self, keyword: str, *, today: datetime | None = None
    ) -> list[Article]:
        """Return up to ``MAX_ARTICLES`` recent articles about *keyword*.

        Raises:
            ProviderError: If the news API is not configured or keeps failing.
        """
        key = articles_key(keyword)
        cached = await cache_get(key)
        if cached is not None:
            return [Article(**a) for a in cached]

        if not self._client.configured:
            msg = "news API key is not configured"
            raise ProviderError(msg)

        end = today or datetime.now(UTC)
        begin = end - timedelta(days=LOOKBACK_DAYS)
        try:
            docs = await self._client.search_articles(
                keyword, begin.strftime("%Y%m%d"), end.strftime("%Y%m%d")
            )
        except httpx.HTTPError as exc:
            msg = f"article search for {keyword!r} failed: {exc}"
            raise ProviderError(msg) from exc

        articles = [a for a in map(_to_article, docs) if a is not None][:MAX_ARTICLES]
        await cache_set(
            key, [a.model_dump(mode="json") for a in articles], self._cache_ttl
        )
        logger.info("Fetched %d articles for %r", len(articles), keyword)
        return articles
