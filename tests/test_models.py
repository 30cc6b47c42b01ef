"""Tests for domain data models."""

import dataclasses

import pytest

from ambos.data import (
    APICallUsage,
    Article,
    ArticleSource,
    CredibilityFactors,
    Engagement,
    OsintInfo,
    Platform,
    Usage,
)


def test_article_minimal() -> None:
    article = Article(
        title="Drone unit formed",
        url="https://example.com/a",
        published_at="2026-02-01T10:00:00Z",
        source=ArticleSource(name="Example"),
    )
    assert article.description == ""
    assert article.author == "Unknown"
    assert article.osint is None
    assert article.platform is None


def test_article_platform_prefers_osint() -> None:
    osint = OsintInfo(
        platform=Platform.MASTODON,
        credibility_score=60,
        credibility_factors=CredibilityFactors(),
        engagement=Engagement(likes=1, reposts=2, replies=3),
        verified=False,
    )
    article = Article(
        title="Bridged post",
        url="https://bsky.app/profile/x/post/1",
        published_at="2026-02-01T10:00:00Z",
        source=ArticleSource(name="@x", platform=Platform.BLUESKY),
        osint=osint,
    )
    assert article.platform is Platform.MASTODON
    assert osint.engagement.total == 6


def test_article_is_frozen() -> None:
    article = Article(
        title="t", url="u", published_at="2026-02-01T10:00:00Z", source=ArticleSource(name="s")
    )
    with pytest.raises(dataclasses.FrozenInstanceError):
        article.title = "changed"  # type: ignore[misc]


class TestUsage:
    def test_empty(self) -> None:
        usage = Usage()
        assert usage.input_tokens == 0
        assert usage.total_requests == 0

    def test_for_requests(self) -> None:
        assert Usage.for_requests("gnews", 2).provider_requests == {"gnews": 2}
        assert Usage.for_requests("gnews", 0).provider_requests == {}

    def test_add(self) -> None:
        a = Usage(
            api_calls=[APICallUsage(model="m", input_tokens=100, output_tokens=50)],
            provider_requests=Usage.for_requests("gnews", 1).provider_requests,
        )
        b = Usage(
            api_calls=[APICallUsage(model="m", input_tokens=10, output_tokens=5)],
            provider_requests=Usage.for_requests("gnews", 2).provider_requests,
        )

        total = a + b

        assert total.input_tokens == 110
        assert total.output_tokens == 55
        assert total.provider_requests == {"gnews": 3}
        assert len(a.api_calls) == 1

    def test_iadd(self) -> None:
        total = Usage()
        total += Usage.for_requests("rss", 3)
        total += Usage.for_requests("bluesky", 1)
        assert total.provider_requests == {"rss": 3, "bluesky": 1}
        assert total.total_requests == 4
