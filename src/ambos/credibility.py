"""Heuristic credibility scoring for social-media posts.

Every platform adapter maps its raw post onto a ``PlatformPost`` and scores
it with :func:`score_post`. Scoring starts at a base of 50 and only ever adds
points, so weak accounts sit near 50 rather than near 0.
"""

from dataclasses import dataclass
from datetime import datetime

from ambos.data import CredibilityFactors
from ambos.text import utcnow

BASE_SCORE = 50
MAX_SCORE = 100


@dataclass(frozen=True)
class PlatformPost:
    """Platform-independent metadata needed to score a post.

    Unknown values stay None and earn no points.
    """

    text: str = ""
    likes: int | None = 0
    reposts: int | None = 0
    replies: int | None = 0
    account_created: datetime | None = None
    has_profile_description: bool = False
    is_bot: bool | None = None
    followers: int | None = None
    following: int | None = None


@dataclass(frozen=True)
class CredibilityScore:
    score: int
    factors: CredibilityFactors


def _account_age_points(post: PlatformPost, now: datetime) -> int:
    if post.account_created is None:
        return 0
    age_days = (now - post.account_created).total_seconds() / 86400
    if age_days > 365:
        return 10
    if age_days > 180:
        return 5
    return 0


def _engagement_points(total: int) -> int:
    if total > 100:
        return 25
    if total > 50:
        return 15
    if total > 10:
        return 10
    return 5


def _content_points(length: int) -> tuple[int, int]:
    """Return (points, content_quality) for a stripped text length."""
    if 200 < length < 1000:
        return 10, 60
    if length > 100:
        return 5, 55
    return 0, 50


def score_post(post: PlatformPost, *, now: datetime | None = None) -> CredibilityScore:
    """Score a post between 50 and 100.

    Args:
        post: Post metadata.
        now: Reference time for account age (defaults to current UTC time).

    Returns:
        The capped score and its factor breakdown.
    """
    now = now or utcnow()
    score = BASE_SCORE

    age_points = _account_age_points(post, now)
    score += age_points

    total = max(post.likes or 0, 0) + max(post.reposts or 0, 0) + max(post.replies or 0, 0)
    engagement_points = _engagement_points(total)
    score += engagement_points

    # Profile description or a known non-bot account stands in for verification.
    verified = post.has_profile_description or post.is_bot is False
    if verified:
        score += 10

    followers = post.followers or 0
    if followers > 100 and followers / max(post.following or 0, 1) > 2:
        score += 5

    content_points, content_quality = _content_points(len(post.text))
    score += content_points

    return CredibilityScore(
        score=min(score, MAX_SCORE),
        factors=CredibilityFactors(
            account_age=age_points,
            engagement=engagement_points,
            verification=verified,
            content_quality=content_quality,
        ),
    )
