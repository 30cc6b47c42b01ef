"""Tests for configuration loading and factory functions."""

from pathlib import Path

import pytest

from ambos.analysis import ClaudeAnalyzer
from ambos.config import (
    AmbosConfig,
    AnalysisConfig,
    Credentials,
    EnrichmentConfig,
    ExtractionConfig,
    GNewsSourceConfig,
    MastodonSourceConfig,
    RssFeedConfig,
    RssSourceConfig,
    ScrapedSiteConfig,
    ScraperSourceConfig,
    create_analyzer,
    create_collector,
    create_enricher,
    create_extractors,
    create_fetcher,
    create_from_config,
    get_default_config_path,
    load_config,
)
from ambos.errors import ConfigurationError
from ambos.extraction import ClaudeEntityExtractor, ClaudeLocationExtractor
from ambos.query import ClaudeQueryEnricher, NoOpQueryEnricher
from ambos.search import (
    DEFAULT_FEEDS,
    DEFAULT_SITES,
    GNewsFetcher,
    MastodonFetcher,
    RssFetcher,
    ScrapedSite,
    SiteScraperFetcher,
)

CREDENTIALS = Credentials(gnews="g-key", claude="c-key")


class TestConfigModels:
    def test_defaults(self) -> None:
        config = AmbosConfig()
        assert config.enrichment.enabled
        assert config.analysis.enabled
        assert config.analysis.max_tokens == 4000
        assert config.sources == []
        assert not config.logging.enabled
        assert config.logging.log_dir == "logs"

    def test_source_discriminator(self) -> None:
        config = AmbosConfig.model_validate(
            {"sources": [{"type": "mastodon"}, {"type": "rss", "feeds": []}]}
        )
        mastodon, rss = config.sources
        assert isinstance(mastodon, MastodonSourceConfig)
        assert mastodon.max_results == 40
        assert isinstance(rss, RssSourceConfig)

    def test_credentials_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GNEWS_API_KEY", "from-env")
        monkeypatch.setenv("NEWSAPI_API_KEY", "")
        credentials = Credentials.from_env()
        assert credentials.gnews == "from-env"
        assert credentials.newsapi is None


class TestLoadConfig:
    def test_load_default_config(self) -> None:
        config = load_config(get_default_config_path())
        assert [s.type for s in config.sources] == [
            "gnews",
            "newsapi",
            "mediastack",
            "rss",
            "scraper",
            "mastodon",
            "bluesky",
            "gopher",
        ]
        rss = config.sources[3]
        assert isinstance(rss, RssSourceConfig)
        assert len(rss.feeds) == 3

    def test_load_custom_config(self, tmp_path: Path) -> None:
        path = tmp_path / "custom.yaml"
        path.write_text(
            "enrichment:\n"
            "  enabled: false\n"
            "sources:\n"
            "  - type: gnews\n"
            "    max_results: 5\n"
            "logging:\n"
            "  enabled: true\n"
            "  log_dir: runs\n"
        )
        config = load_config(path)
        assert not config.enrichment.enabled
        assert config.sources == [GNewsSourceConfig(max_results=5)]
        assert config.logging.log_dir == "runs"

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == AmbosConfig()

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("sources: [unclosed\n")
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            load_config(path)

    def test_unknown_source_type(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("sources:\n  - type: myspace\n")
        with pytest.raises(ConfigurationError, match="Invalid config"):
            load_config(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.yaml")


class TestFactory:
    def test_create_fetcher_uses_credentials(self) -> None:
        fetcher = create_fetcher(GNewsSourceConfig(max_results=7), CREDENTIALS)
        assert isinstance(fetcher, GNewsFetcher)
        assert fetcher._api_key == "g-key"
        assert fetcher._max_results == 7

    def test_create_fetcher_without_key_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("GNEWS_API_KEY", raising=False)
        with pytest.raises(ConfigurationError):
            create_fetcher(GNewsSourceConfig(), Credentials())

    def test_create_mastodon_fetcher(self) -> None:
        config = MastodonSourceConfig(instance_url="https://m.test/")
        fetcher = create_fetcher(config)
        assert isinstance(fetcher, MastodonFetcher)
        assert fetcher._instance_url == "https://m.test"

    def test_rss_feeds(self) -> None:
        config = RssSourceConfig(feeds=[RssFeedConfig(name="F", url="https://f.test/rss")])
        fetcher = create_fetcher(config)
        assert isinstance(fetcher, RssFetcher)
        assert [f.name for f in fetcher._feeds] == ["F"]

        default = create_fetcher(RssSourceConfig())
        assert isinstance(default, RssFetcher)
        assert default._feeds == list(DEFAULT_FEEDS)

    def test_scraper_sites(self) -> None:
        site = ScrapedSiteConfig(
            name="S", url="https://s.test/", item="article", title="h2 a", link="h2 a"
        )
        fetcher = create_fetcher(ScraperSourceConfig(sites=[site]))
        assert isinstance(fetcher, SiteScraperFetcher)
        assert fetcher._sites == [
            ScrapedSite(name="S", url="https://s.test/", item="article", title="h2 a", link="h2 a")
        ]

        default = create_fetcher(ScraperSourceConfig())
        assert isinstance(default, SiteScraperFetcher)
        assert default._sites == list(DEFAULT_SITES)

    def test_create_enricher(self) -> None:
        assert isinstance(create_enricher(EnrichmentConfig(), CREDENTIALS), ClaudeQueryEnricher)
        assert isinstance(create_enricher(EnrichmentConfig(enabled=False)), NoOpQueryEnricher)

    def test_create_analyzer(self) -> None:
        assert isinstance(create_analyzer(AnalysisConfig(), CREDENTIALS), ClaudeAnalyzer)
        assert create_analyzer(AnalysisConfig(enabled=False), CREDENTIALS) is None

    def test_create_extractors(self) -> None:
        entities, locations = create_extractors(
            ExtractionConfig(model="claude-test"), CREDENTIALS
        )
        assert isinstance(entities, ClaudeEntityExtractor)
        assert isinstance(locations, ClaudeLocationExtractor)
        assert entities._model == locations._model == "claude-test"

    def test_create_collector(self) -> None:
        collector = create_collector(
            [GNewsSourceConfig(), MastodonSourceConfig(), RssSourceConfig()], CREDENTIALS
        )
        assert collector.providers == ["gnews", "mastodon", "rss"]

    def test_duplicate_source_type_rejected(self) -> None:
        with pytest.raises(ValueError, match="Duplicate source type"):
            create_collector([MastodonSourceConfig(), MastodonSourceConfig()], CREDENTIALS)


class TestCreateFromConfig:
    @pytest.fixture
    def config(self) -> AmbosConfig:
        return AmbosConfig(sources=[MastodonSourceConfig()])

    def test_logging_disabled_by_default(self, config: AmbosConfig) -> None:
        pipeline, run_logger = create_from_config(config, credentials=CREDENTIALS)
        assert run_logger is None
        assert pipeline._analyzer is not None

    def test_overrides(self, config: AmbosConfig, tmp_path: Path) -> None:
        pipeline, run_logger = create_from_config(
            config,
            credentials=CREDENTIALS,
            log_override=True,
            log_dir_override=str(tmp_path),
            analysis_override=False,
        )
        assert run_logger is not None
        assert run_logger.enabled
        assert pipeline._analyzer is None
