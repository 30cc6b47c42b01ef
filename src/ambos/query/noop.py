"""No-op enricher that passes the user query through unchanged."""

from collections.abc import Sequence

from ambos.data import EnrichedQuery, SourceType, Usage


class NoOpQueryEnricher:
    """Enricher that returns the query as-is.

    No API calls are made. Useful when the AI gateway is unavailable or when
    the user already typed a provider-ready expression.
    """

    async def enrich(
        self,
        query: str,
        *,
        language: str = "en",
        source_type: SourceType = SourceType.NEWS,
        platforms: Sequence[str] = (),
    ) -> tuple[EnrichedQuery, Usage]:
        """Return the trimmed query as its own enrichment.

        Raises:
            ValueError: If the query is blank.
        """
        text = query.strip()
        if not text:
            raise ValueError("Query is required")
        return (EnrichedQuery(original_query=query, enriched_query=text), Usage())
