"""Tests for log aggregation."""

import logging
from pathlib import Path

import pytest

from ambos.data import Usage
from ambos.logs import LogEntry, RunLogSource, collect_logs, filter_logs
from ambos.run_logger import RunLogger


class StaticSource:
    def __init__(self, name: str, entries: list[LogEntry]) -> None:
        self.name = name
        self._entries = entries

    async def fetch(self) -> list[LogEntry]:
        return self._entries


class FailingSource:
    name = "broken"

    async def fetch(self) -> list[LogEntry]:
        raise RuntimeError("log backend unavailable")


def _entry(timestamp: str, message: str, source: str = "api") -> LogEntry:
    return LogEntry(timestamp=timestamp, level="info", message=message, source=source)


class TestCollectLogs:
    async def test_merges_newest_first(self) -> None:
        api = StaticSource(
            "api",
            [_entry("2026-02-01T10:00:00Z", "old"), _entry("2026-02-01T12:00:00Z", "new")],
        )
        worker = StaticSource("worker", [_entry("2026-02-01T11:00:00Z", "mid", "worker")])

        entries = await collect_logs([api, worker])

        assert [e.message for e in entries] == ["new", "mid", "old"]

    async def test_equal_timestamps_keep_source_order(self) -> None:
        a = StaticSource("a", [_entry("2026-02-01T10:00:00Z", "from a", "a")])
        b = StaticSource("b", [_entry("2026-02-01T10:00:00Z", "from b", "b")])

        entries = await collect_logs([a, b])

        assert [e.source for e in entries] == ["a", "b"]

    async def test_failing_source_is_skipped(self) -> None:
        api = StaticSource("api", [_entry("2026-02-01T10:00:00Z", "ok")])
        entries = await collect_logs([FailingSource(), api])
        assert [e.message for e in entries] == ["ok"]

    async def test_merged_length_is_sum_of_successful_sources(self) -> None:
        api = StaticSource(
            "api",
            [_entry("2026-02-01T10:00:00Z", "a1"), _entry("2026-02-01T11:00:00Z", "a2")],
        )
        worker = StaticSource(
            "worker",
            [_entry(f"2026-02-01T0{i}:00:00Z", f"w{i}", "worker") for i in range(3)],
        )

        entries = await collect_logs([api, FailingSource(), worker])

        assert len(entries) == 5
        assert {e.source for e in entries} == {"api", "worker"}

    async def test_all_sources_failing_yields_nothing(self) -> None:
        assert await collect_logs([FailingSource()]) == []

    async def test_limit(self) -> None:
        api = StaticSource(
            "api", [_entry(f"2026-02-01T1{i}:00:00Z", f"m{i}") for i in range(5)]
        )
        entries = await collect_logs([api], limit=2)
        assert [e.message for e in entries] == ["m4", "m3"]


def test_filter_logs() -> None:
    entries = [
        _entry("2026-02-01T10:00:00Z", "Search FAILED", "api"),
        _entry("2026-02-01T10:00:00Z", "done", "Worker"),
    ]
    assert filter_logs(entries, "failed") == entries[:1]
    assert filter_logs(entries, "worker") == entries[1:]
    assert filter_logs(entries, "  ") == entries


async def test_run_log_source_reads_run_logger_output(tmp_path: Path) -> None:
    run_logger = RunLogger(tmp_path)
    run_logger.start_run("osint", {"query": "drone"})
    run_logger.log_stage("enrichment", "NoOpQueryEnricher", "drone", "drone", Usage(), 0.1)
    run_logger.log_stage(
        "search", "ArticleCollector", "drone", None, None, 0.2, error=ValueError("boom")
    )
    run_logger.finish_run([], None)

    entries = await RunLogSource(tmp_path).fetch()

    assert [e.level for e in entries] == ["info", "error"]
    assert entries[0].message == "osint enrichment (NoOpQueryEnricher)"
    assert entries[1].message == "osint search (ArticleCollector): ValueError: boom"
    assert {e.source for e in entries} == {"runs"}


async def test_run_log_source_skips_corrupt_files(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    run_logger = RunLogger(tmp_path)
    run_logger.start_run("osint", {"query": "drone"})
    run_logger.log_stage("enrichment", "NoOpQueryEnricher", "drone", "drone", Usage(), 0.1)
    run_logger.finish_run([], None)
    (tmp_path / "run_corrupt.json").write_text("{not json")
    (tmp_path / "run_partial.json").write_text('{"stages": []}')

    with caplog.at_level(logging.WARNING, logger="ambos.logs"):
        entries = await RunLogSource(tmp_path).fetch()

    assert [e.message for e in entries] == ["osint enrichment (NoOpQueryEnricher)"]
    assert "run_corrupt.json" in caplog.text
    assert "run_partial.json" in caplog.text
