"""Claude-based analysis of an article set."""

import logging

from pydantic import ValidationError

from ambos.analysis.prompts import system_prompt
from ambos.data import (
    AnalysisResult,
    Article,
    CommunityAnalysis,
    PressAnalysis,
    SourceType,
    Usage,
)
from ambos.errors import AnalysisUnavailableError, ParseFailureError
from ambos.llm import (
    DEFAULT_MODEL,
    create_message,
    extract_json_object,
    make_client,
    response_text,
    usage_from_response,
)

CONTENT_CHARS = 800

logger = logging.getLogger(__name__)


def _article_to_prompt_text(article: Article, index: int) -> str:
    """Format an article block for the analysis transcript."""
    label = f" [{article.platform.upper()}]" if article.platform else ""
    date = article.published_at[:10] if article.published_at else "Unknown date"
    content = article.content[:CONTENT_CHARS] if article.content else article.description
    return "\n".join(
        [
            f"Article {index + 1}{label}:",
            f"Title: {article.title}",
            f"Source: {article.source.name or 'Unknown'}",
            f"Date: {date}",
            f"URL: {article.url or 'N/A'}",
            f"Content: {content}",
        ]
    )


def build_transcript(query: str, articles: list[Article]) -> str:
    """Serialize the query and every article into the user prompt."""
    blocks = "\n\n".join(_article_to_prompt_text(a, i) for i, a in enumerate(articles))
    return f'Query: "{query}"\n\nArticles:\n{blocks}'


def is_mixed(articles: list[Article]) -> bool:
    """True when the set holds both press articles and social posts."""
    social = sum(1 for a in articles if a.osint is not None)
    return 0 < social < len(articles)


def parse_analysis(text: str, source_type: SourceType | str) -> AnalysisResult:
    """Parse and validate raw model output into the analysis for ``source_type``.

    Raises:
        AnalysisUnavailableError: If no JSON object is found or it fails validation.
    """
    try:
        raw = extract_json_object(text)
    except ParseFailureError as e:
        raise AnalysisUnavailableError(str(e)) from e

    is_osint = SourceType(source_type) == SourceType.OSINT
    model_cls = CommunityAnalysis if is_osint else PressAnalysis
    raw["kind"] = SourceType.OSINT.value if is_osint else SourceType.NEWS.value
    try:
        return model_cls.model_validate(raw)
    except ValidationError as e:
        raise AnalysisUnavailableError(f"Analysis response failed validation: {e}") from e


class ClaudeAnalyzer:
    """Analyze articles with a single Claude call.

    The whole article set goes into one transcript. OSINT searches get the
    community-discourse analyst and a ``CommunityAnalysis``; press searches
    get the press analyst and a ``PressAnalysis``. A set mixing press
    articles and social posts gets the fusion analyst; the result type still
    follows ``source_type``.

    Args:
        model: Anthropic model ID to use.
        api_key: API key (defaults to CLAUDE_API_KEY env var).
        max_tokens: Output budget for the analysis.
    """

    def __init__(
        self,
        *,
        model: str = DEFAULT_MODEL,
        api_key: str | None = None,
        max_tokens: int = 4000,
    ) -> None:
        self._model = model
        self._client = make_client(api_key)
        self._max_tokens = max_tokens

    async def analyze(
        self,
        articles: list[Article],
        *,
        query: str,
        language: str = "en",
        source_type: SourceType = SourceType.NEWS,
    ) -> tuple[AnalysisResult, Usage]:
        """Analyze articles gathered for ``query``.

        Args:
            articles: Normalized articles to analyze.
            query: The user's search query.
            language: Answer language (en, fr or it; others fall back to en).
            source_type: Selects the analyst persona and result schema.

        Returns:
            Tuple of (analysis, usage).

        Raises:
            ValueError: If there are no articles.
            RateLimitedError, PaymentRequiredError, UpstreamError: On gateway failure.
            AnalysisUnavailableError: If the response cannot be parsed or validated.
        """
        if not articles:
            raise ValueError("No articles to analyze")

        mixed = is_mixed(articles)
        logger.info(
            f"Analyzing {len(articles)} articles for {query!r} "
            f"(source type: {source_type}, mixed: {mixed})"
        )
        response = await create_message(
            self._client,
            model=self._model,
            max_tokens=self._max_tokens,
            temperature=0.7,
            system=system_prompt(source_type, language, mixed=mixed),
            messages=[{"role": "user", "content": build_transcript(query, articles)}],
        )
        usage = usage_from_response(response, self._model)

        analysis = parse_analysis(response_text(response), source_type)
        logger.info(
            f"Analysis ready: {len(analysis.entities)} entities, "
            f"{len(analysis.predictions)} predictions"
        )
        return (analysis, usage)
