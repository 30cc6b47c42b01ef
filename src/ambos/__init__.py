"""AMBOS: multi-source OSINT collection, scoring and analysis."""

from ambos.alerts import Alert, AlertDispatcher, AlertLevel, AlertTrigger, Channel
from ambos.analysis import Analyzer, ClaudeAnalyzer
from ambos.config import AmbosConfig, Credentials, create_from_config, load_config
from ambos.credibility import CredibilityScore, PlatformPost, score_post
from ambos.data import (
    AnalysisResult,
    APICallUsage,
    Article,
    ArticleSource,
    CommunityAnalysis,
    EnrichedQuery,
    EntityGraph,
    OsintInfo,
    Platform,
    PressAnalysis,
    SourceLocation,
    SourceType,
    Usage,
)
from ambos.errors import (
    AmbosError,
    AnalysisUnavailableError,
    ConfigurationError,
    ParseFailureError,
    PaymentRequiredError,
    RateLimitedError,
    UpstreamError,
    user_message,
)
from ambos.extraction import ClaudeEntityExtractor, ClaudeLocationExtractor
from ambos.logs import LogEntry, LogSource, collect_logs, filter_logs
from ambos.pipeline import ArticleCollector, OsintPipeline, Pipeline, PipelineResult
from ambos.query import ClaudeQueryEnricher, NoOpQueryEnricher, QueryEnricher
from ambos.run_logger import RunLogger
from ambos.search import (
    ArticleFetcher,
    BlueskyFetcher,
    GNewsFetcher,
    GopherFetcher,
    MastodonFetcher,
    MediastackFetcher,
    NewsApiFetcher,
    RssFetcher,
)

__all__ = [
    # Models
    "APICallUsage",
    "AnalysisResult",
    "Article",
    "ArticleSource",
    "CommunityAnalysis",
    "EnrichedQuery",
    "EntityGraph",
    "OsintInfo",
    "Platform",
    "PressAnalysis",
    "SourceLocation",
    "SourceType",
    "Usage",
    # Errors
    "AmbosError",
    "AnalysisUnavailableError",
    "ConfigurationError",
    "ParseFailureError",
    "PaymentRequiredError",
    "RateLimitedError",
    "UpstreamError",
    "user_message",
    # Functions
    "collect_logs",
    "filter_logs",
    "score_post",
    # Protocols
    "Analyzer",
    "ArticleFetcher",
    "LogSource",
    "Pipeline",
    "QueryEnricher",
    # Scoring
    "CredibilityScore",
    "PlatformPost",
    # Enrichers
    "ClaudeQueryEnricher",
    "NoOpQueryEnricher",
    # Fetchers
    "BlueskyFetcher",
    "GNewsFetcher",
    "GopherFetcher",
    "MastodonFetcher",
    "MediastackFetcher",
    "NewsApiFetcher",
    "RssFetcher",
    # Analysis and extraction
    "ClaudeAnalyzer",
    "ClaudeEntityExtractor",
    "ClaudeLocationExtractor",
    # Pipelines
    "ArticleCollector",
    "OsintPipeline",
    "PipelineResult",
    # Alerts and logs
    "Alert",
    "AlertDispatcher",
    "AlertLevel",
    "AlertTrigger",
    "Channel",
    "LogEntry",
    # Logging
    "RunLogger",
    # Config
    "AmbosConfig",
    "Credentials",
    "create_from_config",
    "load_config",
]
