"""Pipeline module for end-to-end searches."""

from ambos.pipeline.base import Pipeline
from ambos.pipeline.collector import ArticleCollector
from ambos.pipeline.osint import OsintPipeline, PipelineResult, selector_for

__all__ = [
    "ArticleCollector",
    "OsintPipeline",
    "Pipeline",
    "PipelineResult",
    "selector_for",
]
