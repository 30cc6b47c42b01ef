"""Mastodon public and hashtag timelines.

Public timelines need no authentication. A query with a ``#`` goes to the
tag timeline; anything else reads the public timeline and filters it here,
since Mastodon has no unauthenticated full-text search.
"""

import logging
import re
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
from ambos.http import http_get, read_json
from ambos.text import make_title, normalize_timestamp, parse_timestamp, strip_html, utcnow

DEFAULT_INSTANCE = "https://mastodon.social"
PROVIDER = "mastodon"

_HASHTAG_RE = re.compile(r"#(\w+)")
_WORD_RE = re.compile(r"\w+")

logger = logging.getLogger(__name__)


def hashtag_for(query: str) -> str | None:
    """Return the tag to browse for a hashtag query, or None for a text query.

    The first ``#tag`` wins; a query holding a bare ``#`` falls back to its
    first word.
    """
    if "#" not in query:
        return None
    match = _HASHTAG_RE.search(query)
    if match:
        return match.group(1)
    word = _WORD_RE.search(query)
    return word.group() if word else None


def filter_statuses(statuses: list[dict[str, Any]], query: str) -> list[dict[str, Any]]:
    """Keep statuses whose content or account names contain ``query`` (case-insensitive)."""
    needle = query.strip().lower()
    if not needle:
        return statuses
    kept: list[dict[str, Any]] = []
    for status in statuses:
        account = status.get("account") or {}
        content = (status.get("content") or "").lower()
        names = f"{account.get('display_name') or ''} {account.get('username') or ''}".lower()
        if needle in content or needle in names:
            kept.append(status)
    return kept


def normalize_mastodon(
    statuses: list[dict[str, Any]], *, now: datetime | None = None
) -> list[Article]:
    """Map Mastodon statuses onto scored OSINT articles."""
    now = now or utcnow()
    articles: list[Article] = []
    for status in statuses:
        account = status.get("account") or {}
        text = strip_html(status.get("content"))
        likes = status.get("favourites_count") or 0
        reposts = status.get("reblogs_count") or 0
        replies = status.get("replies_count") or 0

        credibility = score_post(
            PlatformPost(
                text=text,
                likes=likes,
                reposts=reposts,
                replies=replies,
                account_created=parse_timestamp(account.get("created_at")),
                is_bot=bool(account.get("bot", False)),
                followers=account.get("followers_count"),
                following=account.get("following_count"),
            ),
            now=now,
        )

        media = status.get("media_attachments") or []
        image = (media[0].get("preview_url") if media else None) or account.get("avatar")
        acct = account.get("acct") or account.get("username") or "unknown"

        articles.append(
            Article(
                title=make_title(text),
                url=status.get("url") or status.get("uri") or "",
                published_at=normalize_timestamp(status.get("created_at"), default=now),
                source=ArticleSource(
                    name=f"@{acct}", id=account.get("id"), platform=Platform.MASTODON
                ),
                description=text,
                content=text,
                author=account.get("display_name") or account.get("username") or "Unknown",
                image=image,
                osint=OsintInfo(
                    platform=Platform.MASTODON,
                    credibility_score=credibility.score,
                    credibility_factors=credibility.factors,
                    engagement=Engagement(likes=likes, reposts=reposts, replies=replies),
                    verified=credibility.factors.verification,
                    account_metrics=AccountMetrics(
                        handle=acct,
                        followers=account.get("followers_count"),
                        following=account.get("following_count"),
                        posts=account.get("statuses_count"),
                        account_created=account.get("created_at"),
                    ),
                    original_post=status,
                ),
            )
        )
    return articles


class MastodonFetcher:
    """Fetch recent Mastodon posts from a single instance.

    Args:
        instance_url: Base URL of the Mastodon instance.
        max_results: Default number of statuses per request (max 40).
    """

    name = PROVIDER

    def __init__(
        self,
        *,
        instance_url: str = DEFAULT_INSTANCE,
        max_results: int = 40,
    ) -> None:
        self._instance_url = instance_url.rstrip("/")
        self._max_results = max_results

    async def fetch(
        self,
        query: str,
        *,
        language: str = "en",
        limit: int | None = None,
    ) -> tuple[list[Article], Usage]:
        tag = hashtag_for(query)
        if tag:
            url = f"{self._instance_url}/api/v1/timelines/tag/{tag}"
        else:
            url = f"{self._instance_url}/api/v1/timelines/public"
        params = {"limit": min(limit or self._max_results, 40)}

        response = await http_get(
            PROVIDER, url, params=params, headers={"Accept": "application/json"}
        )
        data = read_json(PROVIDER, response)
        statuses = data if isinstance(data, list) else data.get("statuses") or []
        if tag is None:
            statuses = filter_statuses(statuses, query)

        articles = normalize_mastodon(statuses)
        logger.info(
            f"Mastodon returned {len(articles)} posts for {query!r}"
            + (f" (tag: {tag})" if tag else "")
        )
        return (articles, Usage.for_requests(PROVIDER, 1))
