from ambos.query.base import QueryEnricher
from ambos.query.claude import ClaudeQueryEnricher
from ambos.query.noop import NoOpQueryEnricher
from ambos.query.templates import EnrichmentStyle, select_style, shape_query

__all__ = [
    "ClaudeQueryEnricher",
    "EnrichmentStyle",
    "NoOpQueryEnricher",
    "QueryEnricher",
    "select_style",
    "shape_query",
]
