"""Configuration module for AMBOS."""

from ambos.config.factory import (
    create_analyzer,
    create_collector,
    create_enricher,
    create_extractors,
    create_fetcher,
    create_from_config,
)
from ambos.config.loader import get_default_config_path, load_config
from ambos.config.models import (
    AmbosConfig,
    AnalysisConfig,
    BlueskySourceConfig,
    EnrichmentConfig,
    ExtractionConfig,
    GNewsSourceConfig,
    GopherSourceConfig,
    LoggingConfig,
    MastodonSourceConfig,
    MediastackSourceConfig,
    NewsApiSourceConfig,
    RssFeedConfig,
    RssSourceConfig,
    ScrapedSiteConfig,
    ScraperSourceConfig,
    SourceConfig,
)
from ambos.config.settings import Credentials

__all__ = [
    "AmbosConfig",
    "AnalysisConfig",
    "BlueskySourceConfig",
    "Credentials",
    "EnrichmentConfig",
    "ExtractionConfig",
    "GNewsSourceConfig",
    "GopherSourceConfig",
    "LoggingConfig",
    "MastodonSourceConfig",
    "MediastackSourceConfig",
    "NewsApiSourceConfig",
    "RssFeedConfig",
    "RssSourceConfig",
    "ScrapedSiteConfig",
    "ScraperSourceConfig",
    "SourceConfig",
    "create_analyzer",
    "create_collector",
    "create_enricher",
    "create_extractors",
    "create_fetcher",
    "create_from_config",
    "get_default_config_path",
    "load_config",
]
