"""Data models for AMBOS."""

from ambos.data.analysis import (
    AnalysisResult,
    CommunityAnalysis,
    CommunitySentiment,
    Entity,
    EntityGraph,
    GraphLink,
    GraphNode,
    Prediction,
    PressAnalysis,
    PressSentiment,
    SourceLocation,
    normalize_weak_signals,
)
from ambos.data.models import (
    AccountMetrics,
    APICallUsage,
    Article,
    ArticleSource,
    CredibilityFactors,
    Engagement,
    EnrichedQuery,
    OsintInfo,
    Platform,
    SourceType,
    Usage,
)

__all__ = [
    "APICallUsage",
    "AccountMetrics",
    "AnalysisResult",
    "Article",
    "ArticleSource",
    "CommunityAnalysis",
    "CommunitySentiment",
    "CredibilityFactors",
    "Engagement",
    "EnrichedQuery",
    "Entity",
    "EntityGraph",
    "GraphLink",
    "GraphNode",
    "OsintInfo",
    "Platform",
    "Prediction",
    "PressAnalysis",
    "PressSentiment",
    "SourceLocation",
    "SourceType",
    "Usage",
    "normalize_weak_signals",
]
