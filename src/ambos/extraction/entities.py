"""Entity and relationship graph extraction."""

import logging
from typing import Any

from pydantic import ValidationError

from ambos.data import Article, EntityGraph, GraphLink, GraphNode, Usage
from ambos.errors import ParseFailureError
from ambos.llm import DEFAULT_MODEL, create_message, make_client, tool_input, usage_from_response

MAX_ARTICLES = 10
CONTENT_CHARS = 500
MIN_IMPORTANCE = 5
MIN_STRENGTH = 4

TOOL_NAME = "extract_entity_graph"

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """\
You are an expert OSINT analyst extracting entities and relationships from \
articles for strategic intelligence analysis.

Instructions:
1. Extract ONLY entities explicitly named in the articles, never generic \
categories.
2. Give specific details from the articles for each entity (title, role, \
affiliation).
3. Build relationships from actual article content: co-mentions, \
interactions, hierarchies.

Entity types: person, organization, location, event.

Importance (1-10): 9-10 primary actors across several articles, 7-8 \
secondary actors with clear strategic relevance, 5-6 supporting actors, 3-4 \
background mentions.

Relationship strength (1-10): 8-10 direct hierarchical or operational links \
(commands, controls, operates), 6-7 strong strategic links (allied_with, \
partners_with, supplies), 4-5 moderate links (located_in, participates_in, \
opposes), 1-3 weak associations (mentioned_with).

Relationship types: commands, controls, leads, allied_with, partners_with, \
collaborates_with, opposes, competes_with, conflicts_with, part_of, \
subsidiary_of, member_of, located_in, based_in, operates_in, supplies, \
equips, supports.\
"""

ENTITY_GRAPH_TOOL: dict[str, Any] = {
    "name": TOOL_NAME,
    "description": "Record the entities and relationships found in the articles.",
    "input_schema": {
        "type": "object",
        "properties": {
            "nodes": {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {
                        "id": {"type": "string", "description": "Unique entity identifier"},
                        "name": {"type": "string"},
                        "type": {
                            "type": "string",
                            "enum": ["person", "organization", "location", "event"],
                        },
                        "description": {"type": "string"},
                        "importance": {"type": "number", "description": "1-10"},
                        "influence": {"type": "number", "description": "1-10"},
                        "image": {"type": "string", "description": "Photo URL for persons"},
                    },
                    "required": ["id", "name", "type", "description", "importance", "influence"],
                },
            },
            "links": {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {
                        "source": {"type": "string", "description": "Source entity ID"},
                        "target": {"type": "string", "description": "Target entity ID"},
                        "type": {"type": "string"},
                        "strength": {"type": "number", "description": "1-10"},
                        "bidirectional": {"type": "boolean"},
                    },
                    "required": ["source", "target", "type", "strength", "bidirectional"],
                },
            },
        },
        "required": ["nodes", "links"],
    },
}


def _article_to_prompt_text(article: Article, index: int) -> str:
    return (
        f"Article {index + 1}:\n"
        f"Title: {article.title}\n"
        f"Description: {article.description}\n"
        f"Content: {article.content[:CONTENT_CHARS]}"
    )


def prune_graph(graph: EntityGraph) -> EntityGraph:
    """Drop minor nodes, weak links, and links to nodes that were dropped."""
    nodes = [n for n in graph.nodes if n.importance >= MIN_IMPORTANCE]
    node_ids = {n.id for n in nodes}
    links = [
        link
        for link in graph.links
        if link.strength >= MIN_STRENGTH and link.source in node_ids and link.target in node_ids
    ]
    return EntityGraph(nodes=nodes, links=links)


def parse_entity_graph(raw: dict[str, Any]) -> EntityGraph:
    """Validate a tool-call payload into a pruned graph.

    Raises:
        ParseFailureError: If the payload does not match the graph schema.
    """
    try:
        graph = EntityGraph(
            nodes=[GraphNode.model_validate(n) for n in raw["nodes"]],
            links=[GraphLink.model_validate(link) for link in raw["links"]],
        )
    except (KeyError, TypeError, ValidationError) as e:
        raise ParseFailureError(f"Invalid entity graph: {e}") from e
    return prune_graph(graph)


class ClaudeEntityExtractor:
    """Extract an entity relationship graph from articles using Claude tool use.

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
        max_tokens: int = 4000,
    ) -> None:
        self._model = model
        self._client = make_client(api_key)
        self._max_tokens = max_tokens

    async def extract(self, articles: list[Article]) -> tuple[EntityGraph, Usage]:
        """Extract entities and relationships from the first articles.

        Returns:
            Tuple of (graph, usage). No articles means an empty graph and no call.

        Raises:
            RateLimitedError, PaymentRequiredError, UpstreamError: On gateway failure.
            ParseFailureError: If the response holds no valid tool call.
        """
        if not articles:
            return (EntityGraph(), Usage())

        selected = articles[:MAX_ARTICLES]
        logger.info(f"Extracting entities from {len(selected)} articles")
        articles_text = "\n\n".join(_article_to_prompt_text(a, i) for i, a in enumerate(selected))

        response = await create_message(
            self._client,
            model=self._model,
            max_tokens=self._max_tokens,
            temperature=0.3,
            system=SYSTEM_PROMPT,
            tools=[ENTITY_GRAPH_TOOL],
            tool_choice={"type": "tool", "name": TOOL_NAME},
            messages=[
                {
                    "role": "user",
                    "content": "Extract key entities and their strategic relationships "
                    f"from these articles:\n\n{articles_text}",
                }
            ],
        )
        usage = usage_from_response(response, self._model)

        graph = parse_entity_graph(tool_input(response, TOOL_NAME))
        logger.info(f"Extracted {len(graph.nodes)} nodes and {len(graph.links)} links")
        return (graph, usage)
