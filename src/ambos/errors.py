"""Error taxonomy shared by fetchers and AI orchestrators."""

from __future__ import annotations


class AmbosError(Exception):
    """Base class for every error raised by the AMBOS core."""


class UpstreamError(AmbosError):
    """An external provider answered with a non-2xx status or an error body.

    Args:
        provider: Short provider name (e.g. "gnews", "claude").
        message: Human-readable detail.
        status_code: HTTP status when one is known.
    """

    is_rate_limit = False

    def __init__(self, provider: str, message: str, *, status_code: int | None = None) -> None:
        self.provider = provider
        self.status_code = status_code
        super().__init__(f"{provider}: {message}")


class RateLimitedError(UpstreamError):
    """Upstream returned HTTP 429 or a provider rate-limit marker."""

    is_rate_limit = True


class PaymentRequiredError(UpstreamError):
    """Upstream returned HTTP 402 (credits exhausted)."""


class ParseFailureError(AmbosError):
    """An AI response could not be parsed into the expected schema."""


class AnalysisUnavailableError(ParseFailureError):
    """The analysis stage produced no usable result."""


class ConfigurationError(AmbosError, ValueError):
    """A required credential or setting is missing."""


def raise_for_status(provider: str, status_code: int, body: str = "") -> None:
    """Raise the matching error for a non-2xx HTTP status.

    Does nothing for 2xx statuses.
    """
    if 200 <= status_code < 300:
        return
    detail = body[:200] if body else f"HTTP {status_code}"
    if status_code == 429:
        raise RateLimitedError(provider, detail, status_code=status_code)
    if status_code == 402:
        raise PaymentRequiredError(provider, detail, status_code=status_code)
    raise UpstreamError(provider, detail, status_code=status_code)


def user_message(exc: BaseException) -> str:
    """Return a short message suitable for display to an end user."""
    if isinstance(exc, RateLimitedError):
        return f"Rate limit reached on {exc.provider}. Please wait a moment and try again."
    if isinstance(exc, PaymentRequiredError):
        return f"AI credits exhausted on {exc.provider}. Please top up your account."
    if isinstance(exc, AnalysisUnavailableError):
        return "Analysis unavailable: the AI response could not be interpreted."
    if isinstance(exc, ParseFailureError):
        return "The AI response could not be interpreted."
    if isinstance(exc, ConfigurationError):
        return f"Configuration error: {exc}"
    if isinstance(exc, UpstreamError):
        return f"Request to {exc.provider} failed. Please try again later."
    return "An unexpected error occurred."
