"""Fan a query out to several source adapters and merge their results."""

import logging
from collections.abc import Mapping, Sequence

from ambos.concurrency import gather_partial
from ambos.data import Article, Usage
from ambos.errors import ConfigurationError
from ambos.search.base import ArticleFetcher
from ambos.search.merge import merge_articles

PRESS_PROVIDERS = ("gnews", "newsapi", "mediastack", "rss", "scraper")
SOCIAL_PROVIDERS = ("mastodon", "bluesky", "gopher")

MIXED = "mixed"
OSINT = "osint"

logger = logging.getLogger(__name__)


class ArticleCollector:
    """Fetch articles from one or more named fetchers.

    A selector names a single provider, ``"mixed"`` (every configured press
    fetcher), ``"osint"`` (every configured social fetcher) or an explicit
    list of provider names.

    With a single fetcher its error propagates unchanged. With several, a
    failing fetcher is logged and contributes nothing; if all of them fail,
    the first rate-limit error (or else the first error) is raised.

    Args:
        fetchers: Configured fetchers keyed by provider name.
        deduplicate: Drop repeated URLs from merged multi-source results.
    """

    def __init__(
        self,
        fetchers: Mapping[str, ArticleFetcher],
        *,
        deduplicate: bool = True,
    ) -> None:
        self._fetchers = dict(fetchers)
        self._deduplicate = deduplicate

    @property
    def providers(self) -> list[str]:
        return list(self._fetchers)

    def resolve(self, selector: str | Sequence[str]) -> list[str]:
        """Turn a selector into provider names, in configuration order.

        Raises:
            ConfigurationError: If a named provider is not configured or
                the selector matches no fetcher.
        """
        if isinstance(selector, str):
            if selector == MIXED:
                names = [n for n in self._fetchers if n in PRESS_PROVIDERS]
            elif selector == OSINT:
                names = [n for n in self._fetchers if n in SOCIAL_PROVIDERS]
            else:
                names = [selector]
        else:
            names = list(dict.fromkeys(selector))

        missing = [n for n in names if n not in self._fetchers]
        if missing:
            raise ConfigurationError(f"Source(s) not configured: {', '.join(missing)}")
        if not names:
            raise ConfigurationError(f"No configured source matches {selector!r}")
        return names

    async def fetch(
        self,
        query: str,
        *,
        language: str = "en",
        selector: str | Sequence[str] = MIXED,
        limit: int | None = None,
    ) -> tuple[list[Article], Usage]:
        """Fetch from every selected fetcher in parallel.

        Returns:
            Tuple of (articles newest first, usage).
        """
        names = self.resolve(selector)
        if len(names) == 1:
            fetcher = self._fetchers[names[0]]
            articles, usage = await fetcher.fetch(query, language=language, limit=limit)
            return (merge_articles([articles]), usage)

        results = await gather_partial(
            [self._fetchers[n].fetch(query, language=language, limit=limit) for n in names],
            [f"source {n}" for n in names],
        )

        total_usage = Usage()
        batches: list[list[Article]] = []
        for articles, usage in results:
            batches.append(articles)
            total_usage += usage

        merged = merge_articles(batches, deduplicate=self._deduplicate)
        logger.info(
            f"Collected {len(merged)} articles from {len(results)}/{len(names)} sources"
        )
        return (merged, total_usage)
