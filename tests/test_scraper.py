"""Tests for scraping defence sites without feeds."""

from datetime import UTC, datetime
from typing import Any

import httpx
import pytest

from ambos.data import Platform
from ambos.errors import UpstreamError
from ambos.search import (
    DEFAULT_SITES,
    ScrapedSite,
    SiteScraperFetcher,
    normalize_scraped_page,
    parse_italian_date,
)

NOW = datetime(2026, 2, 1, 12, 0, tzinfo=UTC)

SITE = ScrapedSite(
    name="Ares Difesa",
    url="https://sites.test/news/",
    item="article.post",
    title="h2.entry-title a",
    link="h2.entry-title a",
    date="time.entry-date",
    description="div.entry-summary",
)

LISTING_PAGE = """<html><body>
<article class="post">
  <h2 class="entry-title"><a href="/2026/01/fregata">Nuova   fregata varata</a></h2>
  <time class="entry-date">30 gennaio 2026</time>
  <div class="entry-summary"><p>La Marina <b>riceve</b> la fregata.</p></div>
</article>
<article class="post">
  <h2 class="entry-title"><a href="https://other.test/drone">Drone squadron</a></h2>
  <time class="entry-date" datetime="2026-01-31T09:30:00+00:00"></time>
</article>
<article class="post">
  <h2 class="entry-title"><a>No link here</a></h2>
</article>
<article class="post">
  <h2 class="entry-title"><a href="/empty"></a></h2>
</article>
<div class="sidebar"><a href="/ignored">Not an article</a></div>
</body></html>
"""


class TestParseItalianDate:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("12 marzo 2026", datetime(2026, 3, 12, tzinfo=UTC)),
            ("Pubblicato il 3 Dicembre 2025", datetime(2025, 12, 3, tzinfo=UTC)),
            ("05/02/2026", datetime(2026, 2, 5, tzinfo=UTC)),
            ("2026-01-31", datetime(2026, 1, 31, tzinfo=UTC)),
            ("2026-01-31T09:30:00+01:00", datetime(2026, 1, 31, 8, 30, tzinfo=UTC)),
        ],
    )
    def test_formats(self, text: str, expected: datetime) -> None:
        assert parse_italian_date(text) == expected

    @pytest.mark.parametrize("text", [None, "", "ieri", "12 brumaio 2026", "31/02/2026"])
    def test_unreadable(self, text: str | None) -> None:
        assert parse_italian_date(text) is None


def test_extracts_items_with_title_and_link() -> None:
    articles = normalize_scraped_page(LISTING_PAGE, SITE, now=NOW)
    assert [a.url for a in articles] == [
        "https://sites.test/2026/01/fregata",
        "https://other.test/drone",
    ]


def test_maps_fields() -> None:
    first = normalize_scraped_page(LISTING_PAGE, SITE, now=NOW)[0]
    assert first.title == "Nuova fregata varata"
    assert first.description == first.content == "La Marina riceve la fregata."
    assert first.published_at == "2026-01-30T00:00:00Z"
    assert first.author == "Ares Difesa"
    assert first.source.platform is Platform.WEB
    assert first.source.country == "IT"
    assert first.osint is None


def test_date_attribute_and_missing_description() -> None:
    drone = normalize_scraped_page(LISTING_PAGE, SITE, now=NOW)[1]
    assert drone.published_at == "2026-01-31T09:30:00Z"
    assert drone.description == ""


def test_unreadable_date_defaults_to_now() -> None:
    page = (
        '<article class="post"><h2 class="entry-title"><a href="/x">Title</a></h2>'
        '<time class="entry-date">ieri</time></article>'
    )
    assert normalize_scraped_page(page, SITE, now=NOW)[0].published_at == "2026-02-01T12:00:00Z"


def test_long_fields_are_truncated() -> None:
    page = (
        f'<article class="post"><h2 class="entry-title"><a href="/x">{"t" * 300}</a></h2>'
        f'<div class="entry-summary">{"d" * 800}</div></article>'
    )
    article = normalize_scraped_page(page, SITE, now=NOW)[0]
    assert len(article.title) == 200
    assert len(article.description) == 500
    assert len(article.content) == 800


def test_default_sites_cover_institutional_pages() -> None:
    names = {site.name for site in DEFAULT_SITES}
    assert {"Ares Difesa", "Ministero della Difesa", "Marina Militare"} <= names


class TestSiteScraperFetcher:
    @pytest.fixture
    def sites(self) -> list[ScrapedSite]:
        broken = ScrapedSite(
            name="Broken", url="https://broken.test/", item="a", title="a", link="a"
        )
        return [SITE, broken]

    async def test_failing_site_is_skipped(
        self, sites: list[ScrapedSite], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        async def mock_get(client: httpx.AsyncClient, url: str, **kwargs: Any) -> httpx.Response:
            if "broken" in url:
                return httpx.Response(503, text="maintenance")
            return httpx.Response(200, text=LISTING_PAGE)

        monkeypatch.setattr(httpx.AsyncClient, "get", mock_get)

        articles, usage = await SiteScraperFetcher(sites).fetch("fregata")

        assert [a.title for a in articles] == ["Nuova fregata varata"]
        assert usage.provider_requests["scraper"] == 2

    async def test_sends_browser_headers(self, monkeypatch: pytest.MonkeyPatch) -> None:
        seen: list[dict[str, str]] = []

        async def mock_get(client: httpx.AsyncClient, url: str, **kwargs: Any) -> httpx.Response:
            seen.append(kwargs["headers"])
            return httpx.Response(200, text=LISTING_PAGE)

        monkeypatch.setattr(httpx.AsyncClient, "get", mock_get)

        await SiteScraperFetcher([SITE]).fetch("")

        assert seen[0]["Accept-Language"].startswith("it-IT")

    async def test_newest_first_with_limit(self, monkeypatch: pytest.MonkeyPatch) -> None:
        async def mock_get(*args: Any, **kwargs: Any) -> httpx.Response:
            return httpx.Response(200, text=LISTING_PAGE)

        monkeypatch.setattr(httpx.AsyncClient, "get", mock_get)

        articles, _ = await SiteScraperFetcher([SITE]).fetch("", limit=1)

        assert [a.url for a in articles] == ["https://other.test/drone"]

    async def test_all_sites_failing_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        async def mock_get(*args: Any, **kwargs: Any) -> httpx.Response:
            return httpx.Response(500, text="down")

        monkeypatch.setattr(httpx.AsyncClient, "get", mock_get)

        with pytest.raises(UpstreamError):
            await SiteScraperFetcher([SITE]).fetch("fregata")
