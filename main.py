#!/usr/bin/env python
"""CLI for the AMBOS OSINT search pipeline."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from pydantic import BaseModel, ValidationError, field_validator

from ambos.config import create_from_config, get_default_config_path, load_config
from ambos.data import CommunityAnalysis, Platform, PressAnalysis, SourceType
from ambos.errors import AmbosError, user_message

logger = logging.getLogger(__name__)


class CLIArgs(BaseModel):
    """Validated CLI arguments."""

    query: str
    config: Path
    language: str = "en"
    source_type: SourceType = SourceType.NEWS
    platforms: list[Platform] = []
    analysis: bool = True
    log: bool = False
    log_dir: str = "logs"

    @field_validator("query")
    @classmethod
    def query_must_not_be_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Query must not be empty")
        return v.strip()

    @field_validator("config")
    @classmethod
    def config_must_exist(cls, v: Path) -> Path:
        if not v.exists():
            raise ValueError(f"Config file not found: {v}")
        return v


async def run(args: CLIArgs) -> None:
    """Execute the pipeline with the given configuration.

    Args:
        args: Validated CLI arguments.
    """
    config = load_config(args.config)
    pipeline, run_logger = create_from_config(
        config,
        log_override=args.log if args.log else None,
        log_dir_override=args.log_dir if args.log_dir != "logs" else None,
        analysis_override=False if not args.analysis else None,
    )

    logger.info(f"Running {args.source_type} search for: {args.query}")
    logger.info(f"Config: {args.config}")

    result = await pipeline.run(
        args.query,
        language=args.language,
        source_type=args.source_type,
        platforms=[p.value for p in args.platforms],
    )

    logger.info(f"Enriched query: {result.enriched.enriched_query}")
    print(f"\nFound {len(result.articles)} articles:\n")
    for i, article in enumerate(result.articles, 1):
        logger.info(f"{i}. {article.title}")
        logger.info(f"   Source: {article.source.name}")
        logger.info(f"   URL: {article.url}")
        logger.info(f"   Published: {article.published_at}")
        if article.osint is not None:
            logger.info(f"   Credibility: {article.osint.credibility_score}/100")

    if result.analysis is not None:
        logger.info("\n--- Analysis ---")
        logger.info(result.analysis.summary)
        if isinstance(result.analysis, CommunityAnalysis):
            logger.info(f"Community mood: {result.analysis.sentiment.community_mood}")
        elif isinstance(result.analysis, PressAnalysis):
            logger.info(f"Press sentiment: {result.analysis.sentiment.overall}")
        for prediction in result.analysis.predictions:
            logger.info(f"- {prediction.prediction} ({prediction.probability:.0f}%)")

    usage = result.usage
    logger.info("\n--- Usage Summary ---")
    logger.info(f"API calls: {len(usage.api_calls)}")
    logger.info(f"Input tokens: {usage.input_tokens:,}")
    logger.info(f"Output tokens: {usage.output_tokens:,}")
    for provider, count in sorted(usage.provider_requests.items()):
        logger.info(f"{provider} requests: {count}")

    if run_logger and run_logger.last_log_path:
        logger.info(f"\nRun log written to: {run_logger.last_log_path}")


def main() -> None:
    """Entry point for the CLI."""
    parser = argparse.ArgumentParser(description="Search news and social media for OSINT.")
    parser.add_argument(
        "query",
        help="Free-text search query",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Path to YAML config file (default: configs/default.yaml)",
    )
    parser.add_argument(
        "--language",
        "-l",
        default="en",
        help="Requested language, ISO 639-1 (default: en)",
    )
    parser.add_argument(
        "--source-type",
        choices=[t.value for t in SourceType],
        default=SourceType.NEWS.value,
        help="Search press sources or social media (default: news)",
    )
    parser.add_argument(
        "--platform",
        dest="platforms",
        action="append",
        choices=[Platform.MASTODON.value, Platform.BLUESKY.value, Platform.TWITTER.value],
        default=[],
        help="Social platform to search (repeatable; default: all)",
    )
    parser.add_argument(
        "--no-analysis",
        action="store_true",
        default=False,
        help="Skip the AI analysis of the results",
    )
    parser.add_argument(
        "--log",
        action="store_true",
        default=False,
        help="Enable pipeline run logging to JSON file",
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        default="logs",
        help="Directory for log files (default: logs/)",
    )

    logging.basicConfig(level=logging.INFO, format="%(message)s")

    ns = parser.parse_args()
    config_path: Path = ns.config if ns.config else get_default_config_path()

    try:
        args = CLIArgs(
            query=ns.query,
            config=config_path,
            language=ns.language,
            source_type=ns.source_type,
            platforms=ns.platforms,
            analysis=not ns.no_analysis,
            log=ns.log,
            log_dir=ns.log_dir,
        )
    except ValidationError as e:
        logger.error(str(e))
        sys.exit(1)

    try:
        asyncio.run(run(args))
    except AmbosError as e:
        logger.error(user_message(e))
        sys.exit(1)
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
