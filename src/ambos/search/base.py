from typing import Protocol

from ambos.data import Article, Usage


class ArticleFetcher(Protocol):
    """Protocol for provider adapters that turn a query into articles."""

    name: str

    async def fetch(
        self,
        query: str,
        *,
        language: str = "en",
        limit: int | None = None,
    ) -> tuple[list[Article], Usage]:
        """Fetch and normalize articles matching ``query``.

        Args:
            query: Search expression (possibly enriched).
            language: Requested result language (ISO 639-1).
            limit: Maximum number of items to request.

        Returns:
            Tuple of (articles, usage). No results is an empty list.

        Raises:
            RateLimitedError, PaymentRequiredError, UpstreamError: On provider failure.
        """
        ...
