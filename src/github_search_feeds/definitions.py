"""
Saved search definitions.

Each SearchQueryDefinition becomes one JSON Feed and one Atom feed.
Add an entry to SEARCH_QUERIES to publish another feed.

Query syntax:
https://docs.github.com/en/search-github/getting-started-with-searching-on-github/understanding-the-search-syntax
Search types:
https://docs.github.com/en/graphql/reference/enums#searchtype
"""

from dataclasses import dataclass
from pathlib import PurePosixPath
from urllib.parse import urlparse

from .errors import ConfigurationError
from .types import ItemFilter, SearchType

BASE_URL = "https://uta8a.github.io/github-search-rss"


@dataclass(frozen=True)
class SearchQueryDefinition:
    """A saved GitHub search and where its feeds are published."""

    title: str
    query: str
    result_type: SearchType
    link: str
    homepage: str | None = None
    result_limit: int | None = None
    image: str | None = None
    favicon: str | None = None
    filter: ItemFilter | None = None

    def __post_init__(self):
        if not self.link.endswith(".json"):
            raise ConfigurationError(
                f"Feed link for '{self.title}' must end with .json: {self.link}"
            )

    @property
    def description(self) -> str:
        return f"{self.title} on GitHub"

    @property
    def atom_link(self) -> str:
        return self.link.removesuffix(".json") + ".rss"

    @property
    def json_filename(self) -> str:
        return PurePosixPath(urlparse(self.link).path).name

    @property
    def atom_filename(self) -> str:
        return PurePosixPath(urlparse(self.atom_link).path).name


SEARCH_QUERIES: list[SearchQueryDefinition] = [
    # Issues
    SearchQueryDefinition(
        title="oxc issues",
        query="repo:oxc-project/oxc is:issue is:open",
        result_type=SearchType.ISSUE,
        link=f"{BASE_URL}/oxc-issues.json",
        homepage="https://github.com/oxc-project/oxc/issues",
    ),
    SearchQueryDefinition(
        title="github/roadmap Issues",
        query="repo:github/roadmap is:issue",
        result_type=SearchType.ISSUE,
        link=f"{BASE_URL}/github-roadmap.json",
    ),
]
