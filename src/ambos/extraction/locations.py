"""Geographic origin of publishers and authors."""

import logging
from typing import Any

from pydantic import ValidationError

from ambos.data import Article, SourceLocation, Usage
from ambos.errors import ParseFailureError
from ambos.llm import DEFAULT_MODEL, create_message, make_client, tool_input, usage_from_response

MAX_ARTICLES = 15
TOOL_NAME = "extract_locations"

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """\
You are a geographic source location expert. Identify ONLY where each SOURCE \
(publication, author, organization) is based, never locations mentioned in \
the content.

Rules:
- For news sources, use the publication's headquarters or main location
- For social media posts, use the author's location when available
- Skip sources whose location cannot be determined
- At most one location per source
- Give accurate coordinates\
"""

LOCATIONS_TOOL: dict[str, Any] = {
    "name": TOOL_NAME,
    "description": "Record where each source (publisher or author) is based.",
    "input_schema": {
        "type": "object",
        "properties": {
            "locations": {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {
                        "name": {"type": "string", "description": "City, country"},
                        "lat": {"type": "number"},
                        "lng": {"type": "number"},
                        "relevance": {
                            "type": "string",
                            "description": "Name of the source (publisher, author, organization)",
                        },
                    },
                    "required": ["name", "lat", "lng", "relevance"],
                },
            },
        },
        "required": ["locations"],
    },
}


def _article_to_prompt_text(article: Article, index: int) -> str:
    """Describe a source by metadata only; article text is never sent."""
    parts = [f"Article {index + 1}:", f"Source Name: {article.source.name or 'Unknown'}"]
    if article.osint is not None:
        if article.author:
            parts.append(f"Author: {article.author}")
        if article.author_location:
            parts.append(f"Author Location: {article.author_location}")
        if article.location:
            parts.append(f"Post Location: {article.location}")
    if article.source.country:
        parts.append(f"Source Country: {article.source.country}")
    return "\n".join(parts)


def _in_range(location: SourceLocation) -> bool:
    return -90 <= location.lat <= 90 and -180 <= location.lng <= 180


def parse_locations(raw: dict[str, Any]) -> list[SourceLocation]:
    """Validate a tool-call payload, dropping out-of-range coordinates.

    Raises:
        ParseFailureError: If the payload does not match the locations schema.
    """
    try:
        locations = [SourceLocation.model_validate(item) for item in raw["locations"]]
    except (KeyError, TypeError, ValidationError) as e:
        raise ParseFailureError(f"Invalid locations: {e}") from e
    return [loc for loc in locations if _in_range(loc)]


class ClaudeLocationExtractor:
    """Locate the sources of articles using Claude tool use.

    Args:
        model: Anthropic model ID to use.
        api_key: API key (defaults to CLAUDE_API_KEY env var).
        max_tokens: Output budget for the tool call.
    """

    def __init__(
        self,
        *,
        model: str = DEFAULT_MODEL,
        api_key: str | None = None,
        max_tokens: int = 2000,
    ) -> None:
        self._model = model
        self._client = make_client(api_key)
        self._max_tokens = max_tokens

    async def extract(self, articles: list[Article]) -> tuple[list[SourceLocation], Usage]:
        if not articles:
            return ([], Usage())

        selected = articles[:MAX_ARTICLES]
        logger.info(f"Extracting source locations from {len(selected)} articles")
        articles_text = "\n\n".join(_article_to_prompt_text(a, i) for i, a in enumerate(selected))

        response = await create_message(
            self._client,
            model=self._model,
            max_tokens=self._max_tokens,
            temperature=0.3,
            system=SYSTEM_PROMPT,
            tools=[LOCATIONS_TOOL],
            tool_choice={"type": "tool", "name": TOOL_NAME},
            messages=[
                {
                    "role": "user",
                    "content": "Extract ONLY the location of the SOURCE (publisher or author) "
                    f"of each article:\n\n{articles_text}",
                }
            ],
        )
        usage = usage_from_response(response, self._model)

        locations = parse_locations(tool_input(response, TOOL_NAME))
        logger.info(f"Extracted {len(locations)} source locations")
        return (locations, usage)
