"""X/Twitter search through the Gopher AI live search API."""

import logging
import os
from datetime import datetime
from typing import Any

from ambos.credibility import PlatformPost, score_post
from ambos.data import (
    AccountMetrics,
    Article,
    ArticleSource,
    Engagement,
    OsintInfo,
    Platform,
    Usage,
)
from ambos.errors import ConfigurationError
from ambos.http import http_post, read_json
from ambos.text import make_title, normalize_timestamp, parse_timestamp, utcnow

GOPHER_API_URL = "https://data.gopher-ai.com/api/v1/search/live"
PROVIDER = "gopher"

logger = logging.getLogger(__name__)


def _first(item: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        value = item.get(key)
        if value:
            return value
    return None


def _place_name(value: Any) -> str | None:
    if isinstance(value, dict):
        return value.get("full_name") or value.get("name")
    return value or None


def normalize_gopher(payload: dict[str, Any], *, now: datetime | None = None) -> list[Article]:
    """Map Gopher search results onto scored OSINT articles.

    Gopher relays tweets from several scrapers, so each field is looked up
    under every name it has been seen with.
    """
    now = now or utcnow()
    articles: list[Article] = []
    for item in payload.get("data") or []:
        user = item.get("user") or {}
        text = _first(item, "full_text", "text", "tweet_text") or ""
        username = _first(user, "screen_name", "username") or item.get("author") or "Unknown"
        likes = int(_first(item, "favorite_count", "likes", "like_count") or 0)
        reposts = int(_first(item, "retweet_count", "shares") or 0)
        replies = int(_first(item, "reply_count", "comments") or 0)
        verified_flag = bool(user.get("verified"))

        credibility = score_post(
            PlatformPost(
                text=text,
                likes=likes,
                reposts=reposts,
                replies=replies,
                account_created=parse_timestamp(user.get("created_at")),
                has_profile_description=bool(user.get("description")) or verified_flag,
                followers=user.get("followers_count"),
                following=user.get("friends_count"),
            ),
            now=now,
        )
        url = (
            _first(item, "url", "tweet_url")
            or f"https://twitter.com/{username}/status/{item.get('id')}"
        )

        articles.append(
            Article(
                title=make_title(text) or "Untitled",
                url=url,
                published_at=normalize_timestamp(
                    _first(item, "created_at", "timestamp"), default=now
                ),
                source=ArticleSource(name=f"X/Twitter - @{username}", platform=Platform.TWITTER),
                description=text,
                content=text,
                author=user.get("name") or username,
                author_location=_place_name(user.get("location") or item.get("location")),
                location=_place_name(item.get("geo") or item.get("place")),
                osint=OsintInfo(
                    platform=Platform.TWITTER,
                    credibility_score=credibility.score,
                    credibility_factors=credibility.factors,
                    engagement=Engagement(likes=likes, reposts=reposts, replies=replies),
                    verified=credibility.factors.verification,
                    account_metrics=AccountMetrics(
                        handle=username,
                        followers=user.get("followers_count"),
                        following=user.get("friends_count"),
                        posts=user.get("statuses_count"),
                        account_created=user.get("created_at"),
                    ),
                    original_post=item,
                ),
            )
        )
    return articles


class GopherFetcher:
    """Search tweets using the Gopher AI live search API.

    Args:
        api_key: Gopher API key (defaults to GOPHER_API_KEY env var).
        max_results: Default number of tweets per request.
    """

    name = PROVIDER

    def __init__(
        self,
        *,
        api_key: str | None = None,
        max_results: int = 50,
    ) -> None:
        self._api_key = api_key or os.environ.get("GOPHER_API_KEY")
        if not self._api_key:
            raise ConfigurationError(
                "Gopher API key required. Pass api_key or set GOPHER_API_KEY env var."
            )
        self._max_results = max_results

    async def fetch(
        self,
        query: str,
        *,
        language: str = "en",
        limit: int | None = None,
    ) -> tuple[list[Article], Usage]:
        body = {
            "type": "twitter",
            "arguments": {
                "type": "searchbyquery",
                "query": query,
                "max_results": limit or self._max_results,
            },
        }
        headers = {"Authorization": f"Bearer {self._api_key}"}
        response = await http_post(PROVIDER, GOPHER_API_URL, json=body, headers=headers)
        data = read_json(PROVIDER, response)

        articles = normalize_gopher(data if isinstance(data, dict) else {"data": data})
        logger.info(f"Gopher returned {len(articles)} tweets for {query!r}")
        return (articles, Usage.for_requests(PROVIDER, 1))
