import logging
from collections.abc import Sequence

from ambos.data import EnrichedQuery, SourceType, Usage
from ambos.errors import ParseFailureError
from ambos.llm import (
    DEFAULT_MODEL,
    create_message,
    make_client,
    response_text,
    usage_from_response,
)
from ambos.query.templates import clean_response, render_prompt, select_style, shape_query

logger = logging.getLogger(__name__)


class ClaudeQueryEnricher:
    """Rewrite queries into platform-optimized search expressions using Claude.

    The template is chosen from the source type and the target platforms (see
    :func:`ambos.query.templates.select_style`). Exactly one API call is made
    per query and any gateway failure propagates: a garbage query would
    corrupt every downstream search.

    Args:
        model: Anthropic model ID to use.
        api_key: API key (defaults to CLAUDE_API_KEY env var).
        max_tokens: Output budget for the rewritten query.
    """

    def __init__(
        self,
        *,
        model: str = DEFAULT_MODEL,
        api_key: str | None = None,
        max_tokens: int = 200,
    ) -> None:
        self._model = model
        self._client = make_client(api_key)
        self._max_tokens = max_tokens

    async def enrich(
        self,
        query: str,
        *,
        language: str = "en",
        source_type: SourceType = SourceType.NEWS,
        platforms: Sequence[str] = (),
    ) -> tuple[EnrichedQuery, Usage]:
        """Enrich a single query.

        Args:
            query: Free-text user query.
            language: Requested result language (ISO 639-1).
            source_type: "news" for press APIs, "osint" for social platforms.
            platforms: Target platforms for OSINT searches.

        Returns:
            Tuple of (enriched query, usage).

        Raises:
            ValueError: If the query is blank.
            RateLimitedError, PaymentRequiredError, UpstreamError: On gateway failure.
            ParseFailureError: If the model returns nothing usable.
        """
        if not query.strip():
            raise ValueError("Query is required")

        style = select_style(source_type, platforms)
        logger.info(f"Enriching query {query!r} (language: {language}, style: {style})")

        response = await create_message(
            self._client,
            model=self._model,
            max_tokens=self._max_tokens,
            temperature=0.3,
            system=render_prompt(style, language=language, platforms=platforms),
            messages=[
                {
                    "role": "user",
                    "content": f'Query (language: {language}):\n\n"{query.strip()}"',
                }
            ],
        )
        usage = usage_from_response(response, self._model)

        enriched = shape_query(style, clean_response(response_text(response)))
        if not enriched:
            raise ParseFailureError(f"Empty enrichment for query {query!r}")

        logger.info(f"Enriched query: {enriched!r}")
        return (EnrichedQuery(original_query=query, enriched_query=enriched), usage)
