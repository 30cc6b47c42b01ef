"""Pydantic configuration models for AMBOS components."""

from typing import Annotated, Literal

from pydantic import BaseModel, Field

from ambos.llm import DEFAULT_MODEL
from ambos.search.bluesky import BLUESKY_API_URL
from ambos.search.mastodon import DEFAULT_INSTANCE

# ============================================================
# AI Stage Configs
# ============================================================


class EnrichmentConfig(BaseModel):
    """Query enrichment. When disabled the query is used as typed."""

    enabled: bool = True
    model: str = DEFAULT_MODEL

    model_config = {"frozen": True}


class AnalysisConfig(BaseModel):
    enabled: bool = True
    model: str = DEFAULT_MODEL
    max_tokens: int = 4000

    model_config = {"frozen": True}


class ExtractionConfig(BaseModel):
    model: str = DEFAULT_MODEL

    model_config = {"frozen": True}


# ============================================================
# Source Configs
# ============================================================


class GNewsSourceConfig(BaseModel):
    type: Literal["gnews"] = "gnews"
    max_results: int = 20

    model_config = {"frozen": True}


class NewsApiSourceConfig(BaseModel):
    type: Literal["newsapi"] = "newsapi"
    max_results: int = 20

    model_config = {"frozen": True}


class MediastackSourceConfig(BaseModel):
    type: Literal["mediastack"] = "mediastack"
    max_results: int = 20

    model_config = {"frozen": True}


class MastodonSourceConfig(BaseModel):
    type: Literal["mastodon"] = "mastodon"
    instance_url: str = DEFAULT_INSTANCE
    max_results: int = 40

    model_config = {"frozen": True}


class BlueskySourceConfig(BaseModel):
    type: Literal["bluesky"] = "bluesky"
    api_url: str = BLUESKY_API_URL
    max_results: int = 40

    model_config = {"frozen": True}


class GopherSourceConfig(BaseModel):
    type: Literal["gopher"] = "gopher"
    max_results: int = 50

    model_config = {"frozen": True}


class RssFeedConfig(BaseModel):
    name: str
    url: str
    country: str | None = None

    model_config = {"frozen": True}


class RssSourceConfig(BaseModel):
    """RSS feeds. An empty feed list means the built-in defence feeds."""

    type: Literal["rss"] = "rss"
    feeds: list[RssFeedConfig] = Field(default_factory=list)

    model_config = {"frozen": True}


class ScrapedSiteConfig(BaseModel):
    name: str
    url: str
    item: str
    title: str
    link: str
    date: str | None = None
    description: str | None = None
    country: str | None = "IT"

    model_config = {"frozen": True}


class ScraperSourceConfig(BaseModel):
    """Scraped listing pages. An empty site list means the built-in defence sites."""

    type: Literal["scraper"] = "scraper"
    sites: list[ScrapedSiteConfig] = Field(default_factory=list)

    model_config = {"frozen": True}


SourceConfig = Annotated[
    GNewsSourceConfig
    | NewsApiSourceConfig
    | MediastackSourceConfig
    | MastodonSourceConfig
    | BlueskySourceConfig
    | GopherSourceConfig
    | RssSourceConfig
    | ScraperSourceConfig,
    Field(discriminator="type"),
]


# ============================================================
# Logging Config
# ============================================================


class LoggingConfig(BaseModel):
    """Configuration for per-run JSON logging."""

    enabled: bool = False
    log_dir: str = "logs"

    model_config = {"frozen": True}


# ============================================================
# Root Config
# ============================================================


class AmbosConfig(BaseModel):
    """Root configuration for AMBOS."""

    enrichment: EnrichmentConfig = Field(default_factory=EnrichmentConfig)
    analysis: AnalysisConfig = Field(default_factory=AnalysisConfig)
    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)
    sources: list[SourceConfig] = Field(default_factory=list)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"frozen": True}
