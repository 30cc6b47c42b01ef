"""Helpers around the Anthropic Messages API used as the AI gateway."""

import json
import logging
import os
import re
from typing import Any

import anthropic
from anthropic.types import Message, TextBlock, ToolUseBlock

from ambos.data import APICallUsage, Usage
from ambos.errors import (
    ConfigurationError,
    ParseFailureError,
    PaymentRequiredError,
    RateLimitedError,
    UpstreamError,
)

DEFAULT_MODEL = "claude-haiku-4-5-20251001"
PROVIDER = "claude"

logger = logging.getLogger(__name__)

_JSON_OBJECT_RE = re.compile(r"\{.*\}", re.DOTALL)


def make_client(api_key: str | None = None) -> anthropic.AsyncAnthropic:
    """Create an async client, defaulting the key to the CLAUDE_API_KEY env var.

    Raises:
        ConfigurationError: If no API key is given or set.
    """
    resolved_key = api_key or os.environ.get("CLAUDE_API_KEY")
    if not resolved_key:
        raise ConfigurationError(
            "Claude API key required. Pass api_key or set CLAUDE_API_KEY env var."
        )
    return anthropic.AsyncAnthropic(api_key=resolved_key)


async def create_message(client: anthropic.AsyncAnthropic, **kwargs: Any) -> Message:
    """Call ``messages.create`` and translate gateway errors.

    Raises:
        RateLimitedError: On HTTP 429.
        PaymentRequiredError: On HTTP 402.
        UpstreamError: On any other API or connection failure.
    """
    try:
        return await client.messages.create(**kwargs)
    except anthropic.RateLimitError as e:
        raise RateLimitedError(PROVIDER, "rate limit exceeded", status_code=429) from e
    except anthropic.APIStatusError as e:
        if e.status_code == 402:
            raise PaymentRequiredError(PROVIDER, "payment required", status_code=402) from e
        raise UpstreamError(PROVIDER, str(e), status_code=e.status_code) from e
    except anthropic.APIError as e:
        raise UpstreamError(PROVIDER, str(e)) from e


def usage_from_response(response: Message, model: str) -> Usage:
    """Build a ``Usage`` holding the single API call made for ``response``."""
    return Usage(
        api_calls=[
            APICallUsage(
                model=model,
                input_tokens=response.usage.input_tokens,
                output_tokens=response.usage.output_tokens,
                cache_creation_input_tokens=getattr(
                    response.usage, "cache_creation_input_tokens", 0
                )
                or 0,
                cache_read_input_tokens=getattr(response.usage, "cache_read_input_tokens", 0)
                or 0,
            ),
        ],
    )


def response_text(response: Message) -> str:
    """Concatenate the text blocks of a response."""
    return "".join(block.text for block in response.content if isinstance(block, TextBlock))


def tool_input(response: Message, tool_name: str) -> dict[str, Any]:
    """Return the input payload of the named tool call.

    Raises:
        ParseFailureError: If the response holds no such tool call.
    """
    for block in response.content:
        if isinstance(block, ToolUseBlock) and block.name == tool_name:
            if not isinstance(block.input, dict):
                raise ParseFailureError(f"Tool {tool_name} returned a non-object input")
            return block.input
    raise ParseFailureError(f"Response contains no {tool_name} tool call")


def extract_json_object(text: str) -> dict[str, Any]:
    """Parse a JSON object from raw model output.

    Accepts bare JSON, fenced JSON, or an object embedded in prose (the span
    from the first ``{`` to the last ``}``).

    Raises:
        ParseFailureError: If no JSON object can be parsed.
    """
    cleaned = text.strip()
    if cleaned.startswith("```"):
        lines = [line for line in cleaned.split("\n") if not line.strip().startswith("```")]
        cleaned = "\n".join(lines).strip()

    match = _JSON_OBJECT_RE.search(cleaned)
    if match is None:
        raise ParseFailureError("No JSON object found in response")
    try:
        parsed = json.loads(match.group())
    except json.JSONDecodeError as e:
        raise ParseFailureError(f"Invalid JSON in response: {e}") from e
    if not isinstance(parsed, dict):
        raise ParseFailureError("Response JSON is not an object")
    return parsed
