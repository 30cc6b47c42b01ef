"""End-to-end search: enrich, collect, analyze."""

import logging
import time
from collections.abc import Awaitable, Sequence
from dataclasses import dataclass, field
from typing import Any, TypeVar

from ambos.analysis.base import Analyzer
from ambos.data import AnalysisResult, Article, EnrichedQuery, Platform, SourceType, Usage
from ambos.errors import ConfigurationError
from ambos.pipeline.collector import MIXED, OSINT, ArticleCollector
from ambos.query.base import QueryEnricher
from ambos.run_logger import RunLogger

# Provider serving each social platform.
PLATFORM_PROVIDERS = {
    Platform.MASTODON: "mastodon",
    Platform.BLUESKY: "bluesky",
    Platform.TWITTER: "gopher",
}

T = TypeVar("T")

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """Everything a search produced."""

    enriched: EnrichedQuery
    articles: list[Article]
    analysis: AnalysisResult | None = None
    usage: Usage = field(default_factory=Usage)


def selector_for(
    source_type: SourceType | str, platforms: Sequence[str]
) -> str | list[str]:
    """Default collector selector for a search.

    OSINT searches target the providers of the requested platforms, or every
    social provider when none is given. News searches use every press provider.
    """
    if SourceType(source_type) != SourceType.OSINT:
        return MIXED
    if not platforms:
        return OSINT
    providers: list[str] = []
    for platform in platforms:
        provider = PLATFORM_PROVIDERS.get(platform.lower())
        if provider is None:
            raise ConfigurationError(f"No source serves platform {platform!r}")
        providers.append(provider)
    return providers


class OsintPipeline:
    """Pipeline composed of a query enricher, an article collector and an analyzer.

    Flow:
    1. The enricher rewrites the query for the target sources
    2. The collector fetches from the selected sources in parallel
    3. The analyzer (optional) summarizes the merged articles

    Enrichment and analysis failures propagate. Source failures degrade as
    described in :class:`ArticleCollector`.

    Args:
        enricher: Query enricher.
        collector: Article collector holding the configured fetchers.
        analyzer: Optional analyzer; without one no analysis is produced.
        run_logger: Optional RunLogger for intermediate result logging.
    """

    def __init__(
        self,
        enricher: QueryEnricher,
        collector: ArticleCollector,
        analyzer: Analyzer | None = None,
        *,
        run_logger: RunLogger | None = None,
    ) -> None:
        self._enricher = enricher
        self._collector = collector
        self._analyzer = analyzer
        self._run_logger = run_logger

    async def _stage(
        self,
        stage: str,
        component: object,
        input_data: Any,
        call: Awaitable[tuple[T, Usage]],
    ) -> tuple[T, Usage]:
        """Await a stage call and record it; a failed stage also closes the run log."""
        t0 = time.monotonic()
        try:
            output, usage = await call
        except Exception as e:
            if self._run_logger:
                self._run_logger.log_stage(
                    stage,
                    type(component).__name__,
                    input_data,
                    None,
                    None,
                    time.monotonic() - t0,
                    error=e,
                )
                self._run_logger.finish_run([], None)
            raise
        if self._run_logger:
            self._run_logger.log_stage(
                stage, type(component).__name__, input_data, output, usage, time.monotonic() - t0
            )
        return (output, usage)

    async def run(
        self,
        query: str,
        *,
        language: str = "en",
        source_type: SourceType = SourceType.NEWS,
        platforms: Sequence[str] = (),
        selector: str | Sequence[str] | None = None,
        limit: int | None = None,
    ) -> PipelineResult:
        """Execute a search.

        Args:
            query: Free-text user query.
            language: Requested language (ISO 639-1).
            source_type: "news" or "osint".
            platforms: Social platforms to target for OSINT searches.
            selector: Explicit collector selector, overriding the default.
            limit: Maximum items requested from each source.

        Returns:
            The pipeline result.
        """
        if self._run_logger:
            self._run_logger.start_run(
                "osint",
                {
                    "query": query,
                    "language": language,
                    "source_type": str(source_type),
                    "platforms": list(platforms),
                },
            )

        total_usage = Usage()

        # Step 1: Enrich
        enriched, enrich_usage = await self._stage(
            "enrichment",
            self._enricher,
            query,
            self._enricher.enrich(
                query, language=language, source_type=source_type, platforms=platforms
            ),
        )
        total_usage += enrich_usage

        # Step 2: Collect
        resolved = selector if selector is not None else selector_for(source_type, platforms)
        articles, search_usage = await self._stage(
            "search",
            self._collector,
            {"query": enriched.enriched_query, "selector": resolved},
            self._collector.fetch(
                enriched.enriched_query, language=language, selector=resolved, limit=limit
            ),
        )
        total_usage += search_usage

        # Step 3: Analyze
        analysis: AnalysisResult | None = None
        if self._analyzer is not None and articles:
            analysis, analysis_usage = await self._stage(
                "analysis",
                self._analyzer,
                {"article_count": len(articles)},
                self._analyzer.analyze(
                    articles, query=query, language=language, source_type=source_type
                ),
            )
            total_usage += analysis_usage
        elif self._analyzer is not None:
            logger.info("No articles found; skipping analysis")

        if self._run_logger:
            self._run_logger.finish_run(articles, total_usage)

        return PipelineResult(
            enriched=enriched, articles=articles, analysis=analysis, usage=total_usage
        )
