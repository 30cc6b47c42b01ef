import logging
import os
from datetime import datetime
from typing import Any

from ambos.data import Article, ArticleSource, Usage
from ambos.errors import ConfigurationError, RateLimitedError, UpstreamError
from ambos.http import http_get, read_json
from ambos.text import normalize_timestamp, utcnow

NEWSAPI_URL = "https://newsapi.org/v2/everything"
PROVIDER = "newsapi"

# NewsAPI keeps deleted articles in results with this placeholder title.
REMOVED_MARKER = "[Removed]"

logger = logging.getLogger(__name__)


def check_newsapi_body(payload: dict[str, Any]) -> None:
    """Raise for a ``status: "error"`` body, which NewsAPI can send with HTTP 200."""
    if payload.get("status") != "error":
        return
    code = payload.get("code") or "unknown"
    message = payload.get("message") or code
    if code == "rateLimited":
        raise RateLimitedError(PROVIDER, message)
    raise UpstreamError(PROVIDER, f"{code}: {message}")


def normalize_newsapi(payload: dict[str, Any], *, now: datetime | None = None) -> list[Article]:
    """Map a NewsAPI ``/v2/everything`` response onto articles."""
    now = now or utcnow()
    articles: list[Article] = []
    for item in payload.get("articles") or []:
        title = item.get("title") or ""
        if title == REMOVED_MARKER:
            continue
        source = item.get("source") or {}
        articles.append(
            Article(
                title=title,
                url=item.get("url") or "",
                published_at=normalize_timestamp(item.get("publishedAt"), default=now),
                source=ArticleSource(name=source.get("name") or "Unknown", id=source.get("id")),
                description=item.get("description") or "",
                content=item.get("content") or "",
                author=item.get("author") or "Unknown",
                image=item.get("urlToImage"),
            )
        )
    return articles


class NewsApiFetcher:
    """Search for news articles using NewsAPI.

    Args:
        api_key: NewsAPI key (defaults to NEWSAPI_API_KEY env var).
        max_results: Default page size (max 100).
    """

    name = PROVIDER

    def __init__(
        self,
        *,
        api_key: str | None = None,
        max_results: int = 20,
    ) -> None:
        self._api_key = api_key or os.environ.get("NEWSAPI_API_KEY")
        if not self._api_key:
            raise ConfigurationError(
                "NewsAPI key required. Pass api_key or set NEWSAPI_API_KEY env var."
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
            "language": language,
            "pageSize": min(limit or self._max_results, 100),
            "sortBy": "publishedAt",
        }
        headers = {"X-Api-Key": self._api_key}  # type: ignore[dict-item]
        response = await http_get(PROVIDER, NEWSAPI_URL, params=params, headers=headers)
        data = read_json(PROVIDER, response)
        check_newsapi_body(data)

        articles = normalize_newsapi(data)
        logger.info(f"NewsAPI returned {len(articles)} articles for {query!r}")
        return (articles, Usage.for_requests(PROVIDER, 1))
