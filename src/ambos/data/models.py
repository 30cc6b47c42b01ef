"""Core data models for AMBOS."""

from collections import Counter
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class Platform(StrEnum):
    """Social platform a post originates from."""

    MASTODON = "mastodon"
    BLUESKY = "bluesky"
    TWITTER = "twitter"
    WEB = "web"


class SourceType(StrEnum):
    """Kind of sources a search targets."""

    NEWS = "news"
    OSINT = "osint"


@dataclass(frozen=True)
class ArticleSource:
    """Publisher or account an article comes from."""

    name: str
    id: str | None = None
    platform: Platform | None = None
    country: str | None = None
    url: str | None = None


@dataclass(frozen=True)
class Engagement:
    """Interaction counts on a social post."""

    likes: int = 0
    reposts: int = 0
    replies: int = 0

    @property
    def total(self) -> int:
        return self.likes + self.reposts + self.replies


@dataclass(frozen=True)
class CredibilityFactors:
    """Breakdown of a credibility score.

    ``content_quality`` is reported on a 50-60 scale (50 = no bonus).
    """

    account_age: int = 0
    engagement: int = 0
    verification: bool = False
    content_quality: int = 50


@dataclass(frozen=True)
class AccountMetrics:
    """Account-level metadata captured alongside a social post."""

    handle: str | None = None
    followers: int | None = None
    following: int | None = None
    posts: int | None = None
    account_created: str | None = None


@dataclass(frozen=True)
class OsintInfo:
    """OSINT annotations attached to every social-media article.

    An ``Article`` either has no ``osint`` record at all (press and RSS) or a
    complete one: every field below except the optional metadata is required.
    """

    platform: Platform
    credibility_score: int
    credibility_factors: CredibilityFactors
    engagement: Engagement
    verified: bool
    account_metrics: AccountMetrics = field(default_factory=AccountMetrics)
    original_post: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Article:
    """Canonical article record produced by every source adapter."""

    title: str
    url: str
    published_at: str
    source: ArticleSource
    description: str = ""
    content: str = ""
    author: str = "Unknown"
    image: str | None = None
    author_location: str | None = None
    location: str | None = None
    osint: OsintInfo | None = None

    @property
    def platform(self) -> Platform | None:
        """Platform of a social article, falling back to the source platform."""
        if self.osint is not None:
            return self.osint.platform
        return self.source.platform


@dataclass(frozen=True)
class EnrichedQuery:
    """A user query and its AI-rewritten search expression."""

    original_query: str
    enriched_query: str


@dataclass(frozen=True)
class APICallUsage:
    """Usage from a single AI call."""

    model: str
    input_tokens: int = 0
    output_tokens: int = 0
    cache_creation_input_tokens: int = 0
    cache_read_input_tokens: int = 0


@dataclass
class Usage:
    """Accumulated AI and provider usage across pipeline components."""

    api_calls: list[APICallUsage] = field(default_factory=list)
    provider_requests: Counter[str] = field(default_factory=Counter)

    @classmethod
    def for_requests(cls, provider: str, count: int) -> "Usage":
        return cls(provider_requests=Counter({provider: count}) if count else Counter())

    @property
    def input_tokens(self) -> int:
        return sum(c.input_tokens for c in self.api_calls)

    @property
    def output_tokens(self) -> int:
        return sum(c.output_tokens for c in self.api_calls)

    @property
    def total_requests(self) -> int:
        return sum(self.provider_requests.values())

    def __add__(self, other: "Usage") -> "Usage":
        return Usage(
            api_calls=self.api_calls + other.api_calls,
            provider_requests=self.provider_requests + other.provider_requests,
        )

    def __iadd__(self, other: "Usage") -> "Usage":
        self.api_calls.extend(other.api_calls)
        self.provider_requests.update(other.provider_requests)
        return self
