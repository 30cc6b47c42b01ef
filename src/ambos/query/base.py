from collections.abc import Sequence
from typing import Protocol

from ambos.data import EnrichedQuery, SourceType, Usage


class QueryEnricher(Protocol):
    """Interface for rewriting a free-text query into a search expression."""

    async def enrich(
        self,
        query: str,
        *,
        language: str = "en",
        source_type: SourceType = SourceType.NEWS,
        platforms: Sequence[str] = (),
    ) -> tuple[EnrichedQuery, Usage]: ...
