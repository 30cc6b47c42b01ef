"""RSS/Atom feeds from specialist outlets."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from time import struct_time

import feedparser

from ambos.concurrency import gather_partial
from ambos.data import Article, ArticleSource, Platform, Usage
from ambos.http import http_get
from ambos.search.merge import deduplicate_by_url, filter_by_terms, sort_by_published
from ambos.text import isoformat_utc, strip_html, utcnow

PROVIDER = "rss"
USER_AGENT = "AMBOS-RSS-Reader/1.0"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RssFeed:
    """A feed to poll and the publisher metadata to stamp on its items."""

    name: str
    url: str
    country: str | None = None


DEFAULT_FEEDS: tuple[RssFeed, ...] = (
    RssFeed(name="Analisi Difesa", url="https://www.analisidifesa.it/feed/", country="IT"),
    RssFeed(name="Difesa Online", url="https://www.difesaonline.it/rss.xml", country="IT"),
    RssFeed(name="Rivista Italiana Difesa", url="https://www.rid.it/feed/", country="IT"),
)


def _entry_time(entry: feedparser.FeedParserDict) -> struct_time | None:
    return entry.get("published_parsed") or entry.get("updated_parsed")


def _entry_content(entry: feedparser.FeedParserDict) -> str:
    for block in entry.get("content") or []:
        value = strip_html(block.get("value"))
        if value:
            return value
    return ""


def normalize_rss(
    document: str | bytes,
    feed: RssFeed,
    *,
    now: datetime | None = None,
) -> list[Article]:
    """Parse a feed document into articles.

    Items lacking both a title and a link are dropped. A missing publish date
    defaults to ``now``.
    """
    now = now or utcnow()
    parsed = feedparser.parse(document)
    if parsed.bozo:
        logger.warning(f"Feed parsing warning for {feed.name}: {parsed.bozo_exception}")

    articles: list[Article] = []
    for entry in parsed.entries:
        title = strip_html(entry.get("title"))
        link = (entry.get("link") or "").strip()
        if not title and not link:
            continue

        description = strip_html(entry.get("summary") or entry.get("description"))
        published = _entry_time(entry)
        published_at = datetime(*published[:6], tzinfo=UTC) if published else now

        articles.append(
            Article(
                title=title,
                url=link,
                published_at=isoformat_utc(published_at),
                source=ArticleSource(
                    name=feed.name,
                    platform=Platform.WEB,
                    country=feed.country,
                    url=feed.url,
                ),
                description=description,
                content=_entry_content(entry) or description,
                author=entry.get("author") or "Unknown",
            )
        )
    return articles


class RssFetcher:
    """Poll a set of feeds in parallel and filter their items by query terms.

    A feed that fails to download contributes no items. The fetch raises only
    when every feed fails.

    Args:
        feeds: Feeds to poll (defaults to ``DEFAULT_FEEDS``).
    """

    name = PROVIDER

    def __init__(self, feeds: Sequence[RssFeed] = DEFAULT_FEEDS) -> None:
        self._feeds = list(feeds)

    async def _fetch_feed(self, feed: RssFeed) -> list[Article]:
        response = await http_get(PROVIDER, feed.url, headers={"User-Agent": USER_AGENT})
        articles = normalize_rss(response.content, feed)
        logger.info(f"RSS: {len(articles)} items from {feed.name}")
        return articles

    async def fetch(
        self,
        query: str,
        *,
        language: str = "en",
        limit: int | None = None,
    ) -> tuple[list[Article], Usage]:
        batches = await gather_partial(
            [self._fetch_feed(feed) for feed in self._feeds],
            [f"RSS feed {feed.name}" for feed in self._feeds],
        )

        merged = sort_by_published(article for batch in batches for article in batch)
        articles = deduplicate_by_url(filter_by_terms(merged, query))
        if limit is not None:
            articles = articles[:limit]
        return (articles, Usage.for_requests(PROVIDER, len(self._feeds)))
