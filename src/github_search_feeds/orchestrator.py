"""
Feed Generation Orchestration

Runs every saved search in order, renders its JSON Feed and Atom documents
and writes them. A failing search is logged and skipped; the other
definitions are still published.
"""

import logging
import time
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path

from .definitions import SearchQueryDefinition
from .feeds import (
    FeedOptions,
    FeedSynthesizer,
    OutputFormat,
    render_index_html,
    render_opml,
)
from .processing import normalize_nodes
from .search import GitHubSearchClient
from .types import Item
from .writer import FeedWriter


class DefinitionStatus(str, Enum):
    COMPLETED = "completed"
    SKIPPED = "skipped"


@dataclass
class DefinitionOutcome:
    """Terminal state of one search definition."""

    title: str
    status: DefinitionStatus
    item_count: int = 0
    files: list[Path] = field(default_factory=list)
    error: str | None = None


@dataclass
class RunSummary:
    """Outcomes of every definition in a run, in definition order."""

    outcomes: list[DefinitionOutcome] = field(default_factory=list)
    index_files: list[Path] = field(default_factory=list)

    @property
    def succeeded(self) -> list[DefinitionOutcome]:
        return [o for o in self.outcomes if o.status is DefinitionStatus.COMPLETED]

    @property
    def failed(self) -> list[DefinitionOutcome]:
        return [o for o in self.outcomes if o.status is DefinitionStatus.SKIPPED]

    @property
    def all_succeeded(self) -> bool:
        return not self.failed


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class FeedOrchestrator:
    """
    Sequential feed generation over a list of search definitions.
    One definition is fetched, rendered and written at a time.
    """

    def __init__(
        self,
        *,
        token: str,
        search_client: GitHubSearchClient,
        writer: FeedWriter,
        synthesizer: FeedSynthesizer | None = None,
        default_result_limit: int = 20,
        noreply_host: str = "github.com",
        clock: Callable[[], datetime] = utc_now,
    ):
        self.token = token
        self.search_client = search_client
        self.writer = writer
        self.synthesizer = synthesizer or FeedSynthesizer()
        self.default_result_limit = default_result_limit
        self.noreply_host = noreply_host
        self.clock = clock

        self.feeds_logger = logging.getLogger(__name__)

    async def fetch_items(self, definition: SearchQueryDefinition) -> list[Item]:
        """
        Run the definition's search and normalize the result nodes.

        Args:
            definition: The saved search to run

        Returns:
            Items in search relevance order
        """
        limit = definition.result_limit
        if limit is None:
            limit = self.default_result_limit
        nodes = await self.search_client.search(
            definition.query, definition.result_type, limit, self.token
        )
        return normalize_nodes(nodes)

    def render_feeds(
        self, definition: SearchQueryDefinition, items: list[Item]
    ) -> dict[str, str]:
        """
        Render both feed formats for one definition.

        Both documents share the same items and the same updated timestamp.

        Returns:
            Mapping of output filename to document text, JSON Feed first
        """
        updated_at = self.clock()
        documents = {}
        for output_format, link, filename in (
            (OutputFormat.JSON, definition.link, definition.json_filename),
            (OutputFormat.ATOM, definition.atom_link, definition.atom_filename),
        ):
            options = FeedOptions(
                title=definition.title,
                description=definition.description,
                link=link,
                homepage=definition.homepage,
                image=definition.image,
                favicon=definition.favicon,
                updated_at=updated_at,
                filter=definition.filter,
                noreply_host=self.noreply_host,
            )
            documents[filename] = self.synthesizer.synthesize(
                items, options, output_format
            )
        return documents

    async def write_feeds(self, documents: dict[str, str]) -> list[Path]:
        """Write every document, removing already written ones if any write fails."""
        written: list[str] = []
        paths: list[Path] = []
        try:
            for filename, content in documents.items():
                paths.append(await self.writer.write(filename, content))
                written.append(filename)
        except Exception:
            for filename in written:
                await self.writer.remove(filename)
            raise
        return paths

    async def process_definition(
        self, definition: SearchQueryDefinition
    ) -> DefinitionOutcome:
        items = await self.fetch_items(definition)
        documents = self.render_feeds(definition, items)
        paths = await self.write_feeds(documents)
        return DefinitionOutcome(
            title=definition.title,
            status=DefinitionStatus.COMPLETED,
            item_count=len(items),
            files=paths,
        )

    async def run(self, definitions: list[SearchQueryDefinition]) -> RunSummary:
        """
        Generate feeds for every definition, then write the feed index.

        Failures of a single definition are logged and recorded in the
        summary; they never stop the remaining definitions.

        Args:
            definitions: Saved searches in publication order

        Returns:
            RunSummary with one outcome per definition
        """
        run_id = str(uuid.uuid4())[:8]
        run_start = time.time()
        self.feeds_logger.info(
            f"🚀 [{run_id}] Generating feeds for {len(definitions)} searches"
        )

        summary = RunSummary()
        for definition in definitions:
            try:
                outcome = await self.process_definition(definition)
                self.feeds_logger.info(
                    f"✅ [{run_id}] {definition.title}: {outcome.item_count} items"
                )
            except Exception as e:
                self.feeds_logger.error(
                    f"❌ [{run_id}] Error on {definition.title}: {e}"
                )
                self.feeds_logger.info(f"⏭️ [{run_id}] Continuing with next search")
                outcome = DefinitionOutcome(
                    title=definition.title,
                    status=DefinitionStatus.SKIPPED,
                    error=str(e) or type(e).__name__,
                )
            summary.outcomes.append(outcome)

        summary.index_files = [
            await self.writer.write("index.opml", render_opml(definitions)),
            await self.writer.write("index.html", render_index_html(definitions)),
        ]

        total_time = time.time() - run_start
        self.feeds_logger.info(
            f"✨ [{run_id}] Finished in {total_time:.2f} seconds: "
            f"{len(summary.succeeded)} published, {len(summary.failed)} skipped"
        )
        for outcome in summary.failed:
            self.feeds_logger.warning(
                f"⚠️ [{run_id}] Skipped {outcome.title}: {outcome.error}"
            )
        return summary
