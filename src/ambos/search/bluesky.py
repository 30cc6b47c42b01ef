import logging
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
from ambos.text import make_title, normalize_timestamp, parse_timestamp, utcnow
from ambos.url import last_path_segment

BLUESKY_API_URL = "https://api.bsky.app/xrpc/app.bsky.feed.searchPosts"
PROVIDER = "bluesky"

# Handles bridged into BlueSky from the fediverse by Bridgy Fed.
FEDIVERSE_BRIDGE_SUFFIX = ".ap.brid.gy"

logger = logging.getLogger(__name__)


def post_url(post: dict[str, Any]) -> str:
    """Build the public bsky.app URL of a post from its author handle and AT-URI."""
    handle = (post.get("author") or {}).get("handle") or ""
    return f"https://bsky.app/profile/{handle}/post/{last_path_segment(post.get('uri') or '')}"


def normalize_bluesky(payload: dict[str, Any], *, now: datetime | None = None) -> list[Article]:
    """Map a ``searchPosts`` response onto scored OSINT articles.

    BlueSky exposes no account creation date, so the author's ``indexedAt``
    stands in for account age and a profile description for verification.
    """
    now = now or utcnow()
    articles: list[Article] = []
    for post in payload.get("posts") or []:
        author = post.get("author") or {}
        record = post.get("record") or {}
        text = (record.get("text") or "").strip()
        likes = post.get("likeCount") or 0
        reposts = post.get("repostCount") or 0
        replies = post.get("replyCount") or 0
        handle = author.get("handle") or "unknown"

        credibility = score_post(
            PlatformPost(
                text=text,
                likes=likes,
                reposts=reposts,
                replies=replies,
                account_created=parse_timestamp(author.get("indexedAt")),
                has_profile_description=bool(author.get("description")),
            ),
            now=now,
        )
        platform = (
            Platform.MASTODON if handle.endswith(FEDIVERSE_BRIDGE_SUFFIX) else Platform.BLUESKY
        )

        articles.append(
            Article(
                title=make_title(text),
                url=post_url(post),
                published_at=normalize_timestamp(
                    record.get("createdAt") or post.get("indexedAt"), default=now
                ),
                source=ArticleSource(name=f"@{handle}", id=author.get("did"), platform=platform),
                description=text,
                content=text,
                author=author.get("displayName") or handle,
                image=author.get("avatar"),
                osint=OsintInfo(
                    platform=platform,
                    credibility_score=credibility.score,
                    credibility_factors=credibility.factors,
                    engagement=Engagement(likes=likes, reposts=reposts, replies=replies),
                    verified=credibility.factors.verification,
                    account_metrics=AccountMetrics(
                        handle=handle,
                        followers=author.get("followersCount"),
                        following=author.get("followsCount"),
                        posts=author.get("postsCount"),
                        account_created=author.get("indexedAt"),
                    ),
                    original_post=post,
                ),
            )
        )
    return articles


class BlueskyFetcher:
    """Search public BlueSky posts through the AppView ``searchPosts`` endpoint.

    BlueSky search does not index hashtags, so ``#`` is removed from queries.
    """

    name = PROVIDER

    def __init__(self, *, api_url: str = BLUESKY_API_URL, max_results: int = 40) -> None:
        self._api_url = api_url
        self._max_results = max_results

    async def fetch(
        self,
        query: str,
        *,
        language: str = "en",
        limit: int | None = None,
    ) -> tuple[list[Article], Usage]:
        params: dict[str, str | int] = {
            "q": query.replace("#", "").strip(),
            "limit": min(limit or self._max_results, 100),
        }
        if language:
            params["lang"] = language

        response = await http_get(
            PROVIDER, self._api_url, params=params, headers={"Accept": "application/json"}
        )
        articles = normalize_bluesky(read_json(PROVIDER, response))
        logger.info(f"BlueSky returned {len(articles)} posts for {params['q']!r}")
        return (articles, Usage.for_requests(PROVIDER, 1))
