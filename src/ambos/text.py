"""Text and timestamp helpers shared by the source adapters."""

import html
import re
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime

_TAG_RE = re.compile(r"<[^>]*>")
_WS_RE = re.compile(r"\s+")

TITLE_LENGTH = 100
TWITTER_TIME_FORMAT = "%a %b %d %H:%M:%S %z %Y"


def strip_html(text: str | None) -> str:
    """Remove markup and decode entities, collapsing runs of whitespace."""
    if not text:
        return ""
    cleaned = html.unescape(_TAG_RE.sub(" ", text))
    return _WS_RE.sub(" ", cleaned).strip()


def make_title(text: str, length: int = TITLE_LENGTH) -> str:
    """Build a display title from post text: first ``length`` chars, ``...`` if cut."""
    if len(text) <= length:
        return text
    return text[:length] + "..."


def _parse_any(value: str) -> datetime | None:
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        pass
    try:
        return datetime.strptime(value, TWITTER_TIME_FORMAT)
    except ValueError:
        pass
    try:
        return parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse a provider timestamp into an aware datetime (UTC if naive).

    Accepts ISO-8601, the legacy Twitter format and RFC 2822 dates.
    Returns None for empty or unparseable input.
    """
    if not value:
        return None
    parsed = _parse_any(value.strip())
    if parsed is None:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def normalize_timestamp(value: str | None, *, default: datetime) -> str:
    """Return ``value`` as ISO-8601 UTC, or ``default`` when it is missing.

    ISO-8601 input is kept as given; other recognised formats are converted.
    Unrecognised non-empty input is passed through unchanged.
    """
    if not value:
        return isoformat_utc(default)
    try:
        datetime.fromisoformat(value.strip())
    except ValueError:
        parsed = parse_timestamp(value)
        return isoformat_utc(parsed) if parsed is not None else value
    return value.strip()


def isoformat_utc(moment: datetime) -> str:
    """Format an aware datetime as ``YYYY-MM-DDTHH:MM:SSZ``."""
    return moment.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")


def utcnow() -> datetime:
    return datetime.now(tz=UTC)
