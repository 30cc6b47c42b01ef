import logging
import os
from datetime import datetime
from typing import Any

from ambos.data import Article, ArticleSource, Usage
from ambos.errors import ConfigurationError, RateLimitedError, UpstreamError
from ambos.http import http_get, read_json
from ambos.text import normalize_timestamp, utcnow

GNEWS_API_URL = "https://gnews.io/api/v4/search"
PROVIDER = "gnews"

logger = logging.getLogger(__name__)


def normalize_gnews(payload: dict[str, Any], *, now: datetime | None = None) -> list[Article]:
    """Map a GNews search response onto articles."""
    now = now or utcnow()
    articles: list[Article] = []
    for item in payload.get("articles") or []:
        source = item.get("source") or {}
        articles.append(
            Article(
                title=item.get("title") or "",
                url=item.get("url") or "",
                published_at=normalize_timestamp(item.get("publishedAt"), default=now),
                source=ArticleSource(
                    name=source.get("name") or "Unknown",
                    url=source.get("url"),
                ),
                description=item.get("description") or "",
                content=item.get("content") or "",
                image=item.get("image"),
            )
        )
    return articles


class GNewsFetcher:
    """Search for news articles using the GNews API.

    Args:
        api_key: GNews API key (defaults to GNEWS_API_KEY env var).
        max_results: Default number of articles per request (max 100).
    """

    name = PROVIDER

    def __init__(
        self,
        *,
        api_key: str | None = None,
        max_results: int = 20,
    ) -> None:
        self._api_key = api_key or os.environ.get("GNEWS_API_KEY")
        if not self._api_key:
            raise ConfigurationError(
                "GNews API key required. Pass api_key or set GNEWS_API_KEY env var."
            )
        self._max_results = max_results

    async def fetch(
        self,
        query: str,
        *,
        language: str = "en",
        limit: int | None = None,
    ) -> tuple[list[Article], Usage]:
        params: dict[str, str | int] = {
            "q": query,
            "lang": language,
            "max": min(limit or self._max_results, 100),  # GNews max is 100
            "apikey": self._api_key,  # type: ignore[dict-item]
        }
        response = await http_get(PROVIDER, GNEWS_API_URL, params=params)
        data = read_json(PROVIDER, response)

        errors = data.get("errors")
        if errors:
            message = "; ".join(errors) if isinstance(errors, list) else str(errors)
            if "limit" in message.lower():
                raise RateLimitedError(PROVIDER, message)
            raise UpstreamError(PROVIDER, message)

        articles = normalize_gnews(data)
        logger.info(f"GNews returned {len(articles)} articles for {query!r}")
        return (articles, Usage.for_requests(PROVIDER, 1))
