"""Shared fixtures: article builders and mocked Claude responses."""

from collections.abc import Callable
from typing import Any
from unittest.mock import MagicMock

import pytest
from anthropic.types import TextBlock, ToolUseBlock

from ambos.data import Article, ArticleSource


def _make_mock_usage(input_tokens: int = 100, output_tokens: int = 50) -> MagicMock:
    """Create a mock usage object."""
    usage = MagicMock()
    usage.input_tokens = input_tokens
    usage.output_tokens = output_tokens
    usage.cache_creation_input_tokens = 0
    usage.cache_read_input_tokens = 0
    return usage


@pytest.fixture
def text_response() -> Callable[[str], MagicMock]:
    """Factory for a mock API response holding one text block."""

    def _make(text: str) -> MagicMock:
        response = MagicMock()
        response.content = [TextBlock(type="text", text=text)]
        response.usage = _make_mock_usage()
        return response

    return _make


@pytest.fixture
def tool_response() -> Callable[[str, dict[str, Any]], MagicMock]:
    """Factory for a mock API response holding one tool call."""

    def _make(name: str, payload: dict[str, Any]) -> MagicMock:
        response = MagicMock()
        response.content = [ToolUseBlock(type="tool_use", id="toolu_1", name=name, input=payload)]
        response.usage = _make_mock_usage()
        return response

    return _make


@pytest.fixture
def make_article() -> Callable[..., Article]:
    """Factory for press articles with sensible defaults."""

    def _make(
        title: str = "Article",
        url: str = "https://example.com/a",
        published_at: str = "2026-02-01T10:00:00Z",
        **kwargs: Any,
    ) -> Article:
        kwargs.setdefault("source", ArticleSource(name="Example News"))
        return Article(title=title, url=url, published_at=published_at, **kwargs)

    return _make
