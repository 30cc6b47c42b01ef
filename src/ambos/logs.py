"""Aggregation of log entries from several sources into one timeline."""

import asyncio
import json
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Protocol

from ambos.concurrency import gather_partial
from ambos.text import parse_timestamp

logger = logging.getLogger(__name__)

_OLDEST = datetime.min.replace(tzinfo=UTC)


@dataclass(frozen=True)
class LogEntry:
    timestamp: str
    level: str
    message: str
    source: str


class LogSource(Protocol):
    """Anything that can produce log entries."""

    name: str

    async def fetch(self) -> list[LogEntry]: ...


class RunLogSource:
    """Expose the stages recorded by :class:`~ambos.run_logger.RunLogger` as entries.

    Args:
        log_dir: Directory holding ``run_*.json`` files.
    """

    name = "runs"

    def __init__(self, log_dir: Path) -> None:
        self._log_dir = log_dir

    def _read_entries(self) -> list[LogEntry]:
        entries: list[LogEntry] = []
        for path in sorted(self._log_dir.glob("run_*.json")):
            try:
                record = json.loads(path.read_text())
                pipeline_type = record["pipeline_type"]
                stages = record.get("stages", [])
            except (OSError, json.JSONDecodeError, KeyError, TypeError) as e:
                logger.warning(f"Skipping unreadable run log {path.name}: {e}")
                continue
            for stage in stages:
                error = stage.get("error")
                message = f"{pipeline_type} {stage['stage']} ({stage['component']})"
                entries.append(
                    LogEntry(
                        timestamp=stage.get("timestamp", ""),
                        level="error" if error else "info",
                        message=f"{message}: {error}" if error else message,
                        source=self.name,
                    )
                )
        return entries

    async def fetch(self) -> list[LogEntry]:
        return await asyncio.to_thread(self._read_entries)


def _entry_key(entry: LogEntry) -> datetime:
    return parse_timestamp(entry.timestamp) or _OLDEST


async def collect_logs(
    sources: Sequence[LogSource], *, limit: int | None = None
) -> list[LogEntry]:
    """Fetch from every source in parallel and merge newest first.

    A source that fails is logged and contributes no entries. Entries with
    equal timestamps keep source order.
    """
    batches = await gather_partial(
        [source.fetch() for source in sources],
        [f"log source {source.name}" for source in sources],
        raise_if_all_failed=False,
    )
    merged = sorted(
        (entry for batch in batches for entry in batch), key=_entry_key, reverse=True
    )
    logger.info(f"Collected {len(merged)} log entries from {len(batches)} sources")
    return merged[:limit] if limit is not None else merged


def filter_logs(entries: Iterable[LogEntry], text: str) -> list[LogEntry]:
    """Case-insensitive match on message or source. Blank text keeps everything."""
    needle = text.strip().lower()
    if not needle:
        return list(entries)
    return [e for e in entries if needle in e.message.lower() or needle in e.source.lower()]
