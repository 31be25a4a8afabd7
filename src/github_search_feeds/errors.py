"""
Error types raised while generating feeds.
"""


class FeedGenerationError(Exception):
    """Base class for every error raised by github_search_feeds."""


class ConfigurationError(FeedGenerationError):
    """Raised when the run cannot start, e.g. the GitHub token is missing."""


class SearchError(FeedGenerationError):
    """Raised when a GitHub search request fails or returns no result set."""


class UnsupportedNodeError(FeedGenerationError):
    """Raised for a search result node whose __typename is not handled."""

    def __init__(self, typename: str | None):
        self.typename = typename
        super().__init__(f"Unsupported search result type: {typename!r}")
