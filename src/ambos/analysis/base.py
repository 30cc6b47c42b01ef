from typing import Protocol

from ambos.data import AnalysisResult, Article, SourceType, Usage


class Analyzer(Protocol):
    """Protocol for components that turn an article set into an analysis."""

    async def analyze(
        self,
        articles: list[Article],
        *,
        query: str,
        language: str = "en",
        source_type: SourceType = SourceType.NEWS,
    ) -> tuple[AnalysisResult, Usage]:
        """Analyze articles gathered for ``query``.

        Returns:
            Tuple of (analysis, usage).

        Raises:
            AnalysisUnavailableError: If the AI output cannot be used.
        """
        ...
