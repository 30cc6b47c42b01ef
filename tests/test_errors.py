"""Tests for the error taxonomy."""

import pytest

from ambos.errors import (
    AnalysisUnavailableError,
    ConfigurationError,
    PaymentRequiredError,
    RateLimitedError,
    UpstreamError,
    raise_for_status,
    user_message,
)


class TestRaiseForStatus:
    @pytest.mark.parametrize("status", [200, 201, 204])
    def test_success_does_nothing(self, status: int) -> None:
        raise_for_status("gnews", status)

    def test_429(self) -> None:
        with pytest.raises(RateLimitedError) as exc_info:
            raise_for_status("gnews", 429, "slow down")
        assert exc_info.value.is_rate_limit
        assert exc_info.value.provider == "gnews"
        assert "slow down" in str(exc_info.value)

    def test_402(self) -> None:
        with pytest.raises(PaymentRequiredError):
            raise_for_status("gopher", 402)

    def test_other_status(self) -> None:
        with pytest.raises(UpstreamError) as exc_info:
            raise_for_status("newsapi", 500)
        assert exc_info.value.status_code == 500
        assert not exc_info.value.is_rate_limit
        assert "HTTP 500" in str(exc_info.value)

    def test_body_is_truncated(self) -> None:
        with pytest.raises(UpstreamError) as exc_info:
            raise_for_status("rss", 503, "x" * 500)
        assert str(exc_info.value) == "rss: " + "x" * 200


@pytest.mark.parametrize(
    ("error", "fragment"),
    [
        (RateLimitedError("claude", "slow"), "Rate limit reached on claude"),
        (PaymentRequiredError("claude", "pay"), "credits exhausted"),
        (AnalysisUnavailableError("bad json"), "Analysis unavailable"),
        (ConfigurationError("missing key"), "Configuration error: missing key"),
        (UpstreamError("gnews", "down"), "Request to gnews failed"),
        (RuntimeError("boom"), "unexpected error"),
    ],
)
def test_user_message(error: Exception, fragment: str) -> None:
    assert fragment in user_message(error)


def test_configuration_error_is_value_error() -> None:
    assert isinstance(ConfigurationError("x"), ValueError)
