"""Prompt templates for query enrichment and the rules that pick one."""

import re
from collections.abc import Sequence
from enum import StrEnum

from ambos.data import Platform, SourceType


class EnrichmentStyle(StrEnum):
    """Shape of the search expression an enrichment produces."""

    BOOLEAN = "boolean"
    HASHTAGS = "hashtags"
    KEYWORDS = "keywords"
    HYBRID = "hybrid"


MAX_HASHTAGS = 5
MAX_KEYWORDS = 7

BOOLEAN_PROMPT = """\
You are an expert in boolean search queries for news APIs. Rewrite a simple \
query into an optimized boolean query using AND, OR and NOT.

Rules:
- Group terms with parentheses
- Add synonyms and variants joined with OR
- Combine concepts with AND
- Exclude irrelevant terms with NOT
- Include terms in English AND in the requested language ({language})
- Keep the query concise but complete

Examples:
"cyber conference italy" -> "(cybersecurity OR cybersécurité OR tech) AND \
(conference OR summit OR event OR workshop) AND (Italy OR Italia)"
"elections usa" -> "(election OR élection OR presidential) AND \
(USA OR "United States" OR America)"

Answer ONLY with the rewritten query, no explanation.\
"""

HASHTAG_PROMPT = """\
You generate hashtags for searching Mastodon. Turn the query into \
{min_tags} to {max_tags} relevant hashtags, in English and in the requested \
language ({language}) when they differ.

Rules:
- Every token must start with #
- No spaces inside a hashtag, no boolean operators, no plain words
- Most specific hashtags first

Answer ONLY with the hashtags separated by spaces.\
"""

KEYWORD_PROMPT = """\
You generate keyword searches for BlueSky, which does not index hashtags. \
Expand the query into at most {max_terms} plain keywords, in English and in \
the requested language ({language}).

Rules:
- Never use the # character
- No boolean operators, no quotes, no parentheses
- Most specific keywords first

Answer ONLY with the keywords separated by spaces.\
"""

HYBRID_PROMPT = """\
You generate searches that run across several social networks at once \
({platforms}). Produce a hybrid expression: {max_tags} hashtags or fewer \
first, then up to {max_terms} plain keywords, in English and in the \
requested language ({language}).

Rules:
- Hashtags start with # and come before every plain keyword
- No boolean operators, no quotes, no parentheses

Answer ONLY with the tokens separated by spaces.\
"""


def select_style(source_type: SourceType | str, platforms: Sequence[str]) -> EnrichmentStyle:
    """Pick the enrichment style for a search.

    - OSINT on BlueSky alone: plain keywords.
    - Mastodon alone: hashtags.
    - OSINT on several platforms: hashtags then keywords.
    - Anything else (press APIs): boolean query.
    """
    names = [str(p).lower() for p in platforms]
    is_osint = SourceType(source_type) == SourceType.OSINT
    if is_osint and names == [Platform.BLUESKY]:
        return EnrichmentStyle.KEYWORDS
    if names == [Platform.MASTODON]:
        return EnrichmentStyle.HASHTAGS
    if is_osint and len(set(names)) > 1:
        return EnrichmentStyle.HYBRID
    return EnrichmentStyle.BOOLEAN


def render_prompt(style: EnrichmentStyle, *, language: str, platforms: Sequence[str]) -> str:
    """Fill the system prompt for ``style``."""
    if style is EnrichmentStyle.HASHTAGS:
        return HASHTAG_PROMPT.format(language=language, min_tags=3, max_tags=MAX_HASHTAGS)
    if style is EnrichmentStyle.KEYWORDS:
        return KEYWORD_PROMPT.format(language=language, max_terms=MAX_KEYWORDS)
    if style is EnrichmentStyle.HYBRID:
        return HYBRID_PROMPT.format(
            language=language,
            platforms=", ".join(platforms),
            max_tags=MAX_HASHTAGS,
            max_terms=MAX_KEYWORDS,
        )
    return BOOLEAN_PROMPT.format(language=language)


_OPERATORS = {"AND", "OR", "NOT"}
_WORD_RE = re.compile(r"\w+")
_QUOTES_RE = re.compile(r"^[\"']|[\"']$")


def clean_response(text: str) -> str:
    """Trim a model answer and strip one layer of surrounding quotes."""
    return _QUOTES_RE.sub("", text.strip()).strip()


def _dedupe(items: list[str]) -> list[str]:
    seen: set[str] = set()
    unique: list[str] = []
    for item in items:
        key = item.lower()
        if key not in seen:
            seen.add(key)
            unique.append(item)
    return unique


def _words(text: str) -> list[str]:
    return [w for w in _WORD_RE.findall(text) if w.upper() not in _OPERATORS]


def _hashtags(text: str) -> list[str]:
    return _dedupe([f"#{word}" for word in _words(text)])


def _keywords(text: str) -> list[str]:
    return _dedupe(_words(text.replace("#", " ")))


def shape_query(style: EnrichmentStyle, text: str) -> str:
    """Force a model answer into the shape its style promises.

    Hashtag output contains only ``#``-prefixed tokens, keyword output never
    contains ``#``, and hybrid output lists hashtags before keywords. Boolean
    output is returned as cleaned.
    """
    if style is EnrichmentStyle.HASHTAGS:
        return " ".join(_hashtags(text)[:MAX_HASHTAGS])
    if style is EnrichmentStyle.KEYWORDS:
        return " ".join(_keywords(text)[:MAX_KEYWORDS])
    if style is EnrichmentStyle.HYBRID:
        tags: list[str] = []
        plain: list[str] = []
        for token in text.split():
            if token.startswith("#"):
                tags.extend(_hashtags(token))
            else:
                plain.extend(_words(token))
        return " ".join(_dedupe(tags)[:MAX_HASHTAGS] + _dedupe(plain)[:MAX_KEYWORDS])
    return text
