"""Factory functions to create components from configuration."""

from pathlib import Path

from ambos.analysis import Analyzer, ClaudeAnalyzer
from ambos.config.models import (
    AmbosConfig,
    AnalysisConfig,
    BlueskySourceConfig,
    EnrichmentConfig,
    ExtractionConfig,
    GNewsSourceConfig,
    GopherSourceConfig,
    MastodonSourceConfig,
    MediastackSourceConfig,
    NewsApiSourceConfig,
    RssSourceConfig,
    ScraperSourceConfig,
    SourceConfig,
)
from ambos.config.settings import Credentials
from ambos.extraction import ClaudeEntityExtractor, ClaudeLocationExtractor
from ambos.pipeline import ArticleCollector, OsintPipeline
from ambos.query import ClaudeQueryEnricher, NoOpQueryEnricher, QueryEnricher
from ambos.run_logger import RunLogger
from ambos.search import (
    DEFAULT_FEEDS,
    BlueskyFetcher,
    GNewsFetcher,
    GopherFetcher,
    MastodonFetcher,
    MediastackFetcher,
    NewsApiFetcher,
    DEFAULT_SITES,
    RssFeed,
    RssFetcher,
    ScrapedSite,
    SiteScraperFetcher,
)
from ambos.search.base import ArticleFetcher


def create_fetcher(config: SourceConfig, credentials: Credentials | None = None) -> ArticleFetcher:
    """Create an article fetcher from config.

    Keyed providers take their key from ``credentials``, falling back to
    the environment.
    """
    credentials = credentials or Credentials()
    if isinstance(config, GNewsSourceConfig):
        return GNewsFetcher(api_key=credentials.gnews, max_results=config.max_results)
    if isinstance(config, NewsApiSourceConfig):
        return NewsApiFetcher(api_key=credentials.newsapi, max_results=config.max_results)
    if isinstance(config, MediastackSourceConfig):
        return MediastackFetcher(api_key=credentials.mediastack, max_results=config.max_results)
    if isinstance(config, MastodonSourceConfig):
        return MastodonFetcher(instance_url=config.instance_url, max_results=config.max_results)
    if isinstance(config, BlueskySourceConfig):
        return BlueskyFetcher(api_url=config.api_url, max_results=config.max_results)
    if isinstance(config, GopherSourceConfig):
        return GopherFetcher(api_key=credentials.gopher, max_results=config.max_results)
    if isinstance(config, RssSourceConfig):
        feeds = [RssFeed(name=f.name, url=f.url, country=f.country) for f in config.feeds]
        return RssFetcher(feeds=feeds or DEFAULT_FEEDS)
    if isinstance(config, ScraperSourceConfig):
        sites = [ScrapedSite(**s.model_dump()) for s in config.sites]
        return SiteScraperFetcher(sites=sites or DEFAULT_SITES)
    msg = f"Unknown source config type: {type(config)}"
    raise ValueError(msg)


def create_enricher(
    config: EnrichmentConfig, credentials: Credentials | None = None
) -> QueryEnricher:
    if not config.enabled:
        return NoOpQueryEnricher()
    credentials = credentials or Credentials()
    return ClaudeQueryEnricher(model=config.model, api_key=credentials.claude)


def create_analyzer(
    config: AnalysisConfig, credentials: Credentials | None = None
) -> Analyzer | None:
    """Create the analyzer, or None when analysis is disabled."""
    if not config.enabled:
        return None
    credentials = credentials or Credentials()
    return ClaudeAnalyzer(
        model=config.model,
        api_key=credentials.claude,
        max_tokens=config.max_tokens,
    )


def create_extractors(
    config: ExtractionConfig, credentials: Credentials | None = None
) -> tuple[ClaudeEntityExtractor, ClaudeLocationExtractor]:
    """Create the entity and location extractors.

    They are not stages of the search pipeline; callers run them on its articles.
    """
    credentials = credentials or Credentials()
    return (
        ClaudeEntityExtractor(model=config.model, api_key=credentials.claude),
        ClaudeLocationExtractor(model=config.model, api_key=credentials.claude),
    )


def create_collector(
    configs: list[SourceConfig], credentials: Credentials | None = None
) -> ArticleCollector:
    """Create a collector with one fetcher per configured source.

    Raises:
        ValueError: If two sources share a type.
    """
    fetchers: dict[str, ArticleFetcher] = {}
    for config in configs:
        if config.type in fetchers:
            msg = f"Duplicate source type in config: {config.type}"
            raise ValueError(msg)
        fetchers[config.type] = create_fetcher(config, credentials)
    return ArticleCollector(fetchers)


def create_from_config(
    config: AmbosConfig,
    *,
    credentials: Credentials | None = None,
    log_override: bool | None = None,
    log_dir_override: str | None = None,
    analysis_override: bool | None = None,
) -> tuple[OsintPipeline, RunLogger | None]:
    """Create a complete pipeline from root config.

    Args:
        config: Root configuration.
        credentials: Provider keys (defaults to the environment).
        log_override: Override the config's logging.enabled setting.
        log_dir_override: Override the config's logging.log_dir setting.
        analysis_override: Override the config's analysis.enabled setting.

    Returns:
        Tuple of (pipeline, run_logger).
        run_logger is None if logging is disabled.
    """
    credentials = credentials or Credentials.from_env()
    log_enabled = log_override if log_override is not None else config.logging.enabled
    log_dir = Path(log_dir_override if log_dir_override is not None else config.logging.log_dir)

    run_logger: RunLogger | None = None
    if log_enabled:
        run_logger = RunLogger(log_dir=log_dir, enabled=True)

    analysis_config = config.analysis
    if analysis_override is not None:
        analysis_config = analysis_config.model_copy(update={"enabled": analysis_override})

    pipeline = OsintPipeline(
        create_enricher(config.enrichment, credentials),
        create_collector(config.sources, credentials),
        create_analyzer(analysis_config, credentials),
        run_logger=run_logger,
    )
    return (pipeline, run_logger)
