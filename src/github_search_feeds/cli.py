"""
GitHub Search Feeds - Command Line Entry Point

Runs every saved search once and writes the JSON Feed and Atom files plus
the OPML and HTML index into the output directory.
"""

import argparse
import asyncio
from pathlib import Path

from dotenv import load_dotenv

from .definitions import SEARCH_QUERIES, SearchQueryDefinition
from .logger import setup_logging
from .orchestrator import FeedOrchestrator, RunSummary
from .search import GitHubSearchClient
from .settings import Settings, get_settings
from .writer import FeedWriter


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Publish GitHub search results as JSON Feed and Atom feeds",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  GITHUB_TOKEN=... github-search-feeds
  GITHUB_TOKEN=... python cli/main.py --output-dir public
        """,
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Directory for generated feeds (default: OUTPUT_DIR or ./dist)",
    )
    return parser.parse_args(argv)


async def generate_feeds(
    settings: Settings,
    definitions: list[SearchQueryDefinition],
    output_dir: Path | None = None,
) -> RunSummary:
    """
    Run one full, stateless feed generation.

    Args:
        settings: Application settings
        definitions: Saved searches to publish
        output_dir: Overrides settings.output_dir when given

    Returns:
        Summary of published and skipped definitions

    Raises:
        ConfigurationError: If GITHUB_TOKEN is not set
    """
    token = settings.require_token()

    orchestrator = FeedOrchestrator(
        token=token,
        search_client=GitHubSearchClient(
            url=settings.github_graphql_url, timeout=settings.request_timeout
        ),
        writer=FeedWriter(output_dir or settings.output_dir),
        default_result_limit=settings.default_result_limit,
        noreply_host=settings.noreply_host,
    )
    return await orchestrator.run(definitions)


def main(argv: list[str] | None = None) -> int:
    """Run the batch and return the process exit status."""
    load_dotenv()
    args = parse_args(argv)

    settings = get_settings()
    feeds_logger = setup_logging(settings.log_dir, settings.log_level)

    try:
        asyncio.run(generate_feeds(settings, SEARCH_QUERIES, args.output_dir))
    except Exception as e:
        feeds_logger.error(f"❌ Feed generation aborted: {e}")
        return 1
    return 0
