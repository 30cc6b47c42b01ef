"""Tests for RunLogger and serialization helpers."""

import json
from collections import Counter
from pathlib import Path

from ambos.data import (
    APICallUsage,
    ArticleSource,
    EnrichedQuery,
    Platform,
    PressSentiment,
    SourceType,
    Usage,
)
from ambos.run_logger import RunLogger, _serialize

# -- _serialize tests --


def test_serialize_primitives() -> None:
    assert _serialize(None) is None
    assert _serialize(42) == 42
    assert _serialize("hello") == "hello"
    assert _serialize([1, "two", None]) == [1, "two", None]


def test_serialize_dataclass_with_enum() -> None:
    result = _serialize(ArticleSource(name="@a", platform=Platform.BLUESKY))
    assert result == {
        "name": "@a",
        "id": None,
        "platform": "bluesky",
        "country": None,
        "url": None,
    }


def test_serialize_pydantic_model() -> None:
    assert _serialize(PressSentiment(overall="mixed"))["overall"] == "mixed"


def test_serialize_usage_includes_computed_properties() -> None:
    usage = Usage(
        api_calls=[
            APICallUsage(model="m1", input_tokens=100, output_tokens=50),
            APICallUsage(model="m2", input_tokens=200, output_tokens=75),
        ],
        provider_requests=Counter({"gnews": 3, "rss": 2}),
    )
    result = _serialize(usage)
    assert result["input_tokens"] == 300
    assert result["output_tokens"] == 125
    assert result["total_requests"] == 5
    assert result["provider_requests"] == {"gnews": 3, "rss": 2}
    assert len(result["api_calls"]) == 2


def test_serialize_path_and_counter() -> None:
    assert _serialize(Path("/some/path")) == "/some/path"
    assert _serialize(Counter({"a": 1})) == {"a": 1}


# -- RunLogger disabled tests --


def test_run_logger_disabled_is_noop(tmp_path: Path) -> None:
    logger = RunLogger(log_dir=tmp_path, enabled=False)
    assert not logger.enabled

    logger.start_run("osint", {"query": "drone"})
    logger.log_stage("enrichment", "NoOpQueryEnricher", "input", "output", None, 1.0)
    result = logger.finish_run([], None)

    assert result is None
    assert logger.last_log_path is None
    assert list(tmp_path.iterdir()) == []


# -- RunLogger enabled tests --


def test_run_logger_writes_stages(tmp_path: Path) -> None:
    logger = RunLogger(log_dir=tmp_path / "logs")
    logger.start_run("osint", {"query": "drone", "source_type": SourceType.OSINT})
    logger.log_stage(
        "enrichment",
        "ClaudeQueryEnricher",
        "drone",
        EnrichedQuery(original_query="drone", enriched_query="#drone"),
        Usage.for_requests("claude", 1),
        0.123456,
    )
    logger.log_stage(
        "search", "ArticleCollector", "#drone", None, None, 0.5, error=RuntimeError("down")
    )
    path = logger.finish_run(["a", "b"], Usage.for_requests("mastodon", 1))

    assert path is not None
    assert path.name.startswith("run_")
    assert logger.last_log_path == path

    data = json.loads(path.read_text())
    assert data["pipeline_type"] == "osint"
    assert data["request"] == {"query": "drone", "source_type": "osint"}
    assert data["final_article_count"] == 2
    assert data["total_usage"]["provider_requests"] == {"mastodon": 1}

    enrichment, search = data["stages"]
    assert enrichment["output"]["enriched_query"] == "#drone"
    assert enrichment["duration_seconds"] == 0.1235
    assert enrichment["error"] is None
    assert search["error"] == "RuntimeError: down"


def test_log_stage_without_run_is_ignored(tmp_path: Path) -> None:
    logger = RunLogger(log_dir=tmp_path)
    logger.log_stage("search", "ArticleCollector", None, None, None, 0.1)
    assert logger.finish_run([], None) is None
