import logging
import os
from datetime import datetime
from typing import Any

from ambos.data import Article, ArticleSource, Usage
from ambos.errors import ConfigurationError, RateLimitedError, UpstreamError
from ambos.http import http_get, read_json
from ambos.text import normalize_timestamp, utcnow

MEDIASTACK_API_URL = "http://api.mediastack.com/v1/news"
PROVIDER = "mediastack"

RATE_LIMIT_CODES = frozenset({"rate_limit_reached", "usage_limit_reached"})

logger = logging.getLogger(__name__)


def check_mediastack_body(payload: dict[str, Any]) -> None:
    """Raise for the ``error`` object Mediastack returns in place of results."""
    error = payload.get("error")
    if not error:
        return
    if not isinstance(error, dict):
        raise UpstreamError(PROVIDER, str(error))
    code = error.get("code") or "unknown"
    message = error.get("message") or code
    if code in RATE_LIMIT_CODES:
        raise RateLimitedError(PROVIDER, message)
    raise UpstreamError(PROVIDER, f"{code}: {message}")


def normalize_mediastack(
    payload: dict[str, Any], *, now: datetime | None = None
) -> list[Article]:
    """Map a Mediastack ``/v1/news`` response onto articles.

    Mediastack has no separate content field, so the description doubles as
    content.
    """
    now = now or utcnow()
    articles: list[Article] = []
    for item in payload.get("data") or []:
        description = item.get("description") or ""
        country = item.get("country")
        articles.append(
            Article(
                title=item.get("title") or "",
                url=item.get("url") or "",
                published_at=normalize_timestamp(item.get("published_at"), default=now),
                source=ArticleSource(
                    name=item.get("source") or "Unknown",
                    country=country.upper() if country else None,
                ),
                description=description,
                content=description,
                author=item.get("author") or "Unknown",
                image=item.get("image"),
            )
        )
    return articles


class MediastackFetcher:
    """Search for news articles using Mediastack.

    Args:
        api_key: Mediastack access key (defaults to MEDIASTACK_API_KEY env var).
        max_results: Default number of articles per request (max 100).
    """

    name = PROVIDER

    def __init__(
        self,
        *,
        api_key: str | None = None,
        max_results: int = 20,
    ) -> None:
        self._api_key = api_key or os.environ.get("MEDIASTACK_API_KEY")
        if not self._api_key:
            raise ConfigurationError(
                "Mediastack access key required. Pass api_key or set MEDIASTACK_API_KEY env var."
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
            "access_key": self._api_key,  # type: ignore[dict-item]
            "keywords": query,
            "languages": language,
            "limit": min(limit or self._max_results, 100),
            "sort": "published_desc",
        }
        response = await http_get(PROVIDER, MEDIASTACK_API_URL, params=params)
        data = read_json(PROVIDER, response)
        check_mediastack_body(data)

        articles = normalize_mediastack(data)
        logger.info(f"Mediastack returned {len(articles)} articles for {query!r}")
        return (articles, Usage.for_requests(PROVIDER, 1))
