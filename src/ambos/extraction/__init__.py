"""Tool-call based secondary extractors."""

from ambos.extraction.entities import ClaudeEntityExtractor, parse_entity_graph, prune_graph
from ambos.extraction.locations import ClaudeLocationExtractor, parse_locations

__all__ = [
    "ClaudeEntityExtractor",
    "ClaudeLocationExtractor",
    "parse_entity_graph",
    "parse_locations",
    "prune_graph",
]
