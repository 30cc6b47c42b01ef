"""Merging, ordering and filtering of normalized articles."""

import re
from collections.abc import Iterable
from datetime import UTC, datetime

from ambos.data import Article
from ambos.text import parse_timestamp

_OLDEST = datetime.min.replace(tzinfo=UTC)
_OPERATORS = {"and", "or", "not"}
_TERM_PUNCT = "()\"'#,"


def _published_key(article: Article) -> datetime:
    return parse_timestamp(article.published_at) or _OLDEST


def sort_by_published(articles: Iterable[Article]) -> list[Article]:
    """Sort newest first; articles with equal timestamps keep their input order.

    Unparseable timestamps sort last.
    """
    return sorted(articles, key=_published_key, reverse=True)


def deduplicate_by_url(articles: Iterable[Article]) -> list[Article]:
    """Keep the first article for each URL. Articles without a URL are all kept."""
    seen_urls: set[str] = set()
    unique: list[Article] = []
    for article in articles:
        if article.url:
            if article.url in seen_urls:
                continue
            seen_urls.add(article.url)
        unique.append(article)
    return unique


def query_terms(query: str) -> list[str]:
    """Split a query into lowercase search terms, dropping boolean operators."""
    terms: list[str] = []
    for raw in re.split(r"\s+", query.lower()):
        term = raw.strip(_TERM_PUNCT)
        if term and term not in _OPERATORS:
            terms.append(term)
    return terms


def filter_by_terms(articles: Iterable[Article], query: str | None) -> list[Article]:
    """Keep articles whose title, description or content contains any query term.

    Matching is a case-insensitive substring test. A blank query keeps everything.
    """
    articles = list(articles)
    terms = query_terms(query or "")
    if not terms:
        return articles
    kept: list[Article] = []
    for article in articles:
        haystack = f"{article.title} {article.description} {article.content}".lower()
        if any(term in haystack for term in terms):
            kept.append(article)
    return kept


def merge_articles(
    batches: Iterable[Iterable[Article]],
    *,
    deduplicate: bool = False,
) -> list[Article]:
    """Concatenate batches in order and sort the result newest first.

    With ``deduplicate`` the first occurrence of each URL, in sorted order,
    is kept.
    """
    merged = sort_by_published(article for batch in batches for article in batch)
    if deduplicate:
        merged = deduplicate_by_url(merged)
    return merged
