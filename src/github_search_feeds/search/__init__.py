"""
GitHub Search Package

Provides the GraphQL search client and the typed search result nodes.
"""

from .graphql_client import GitHubSearchClient
from .nodes import (
    Actor,
    IssueNode,
    PullRequestNode,
    RawResultNode,
    RepositoryNode,
    parse_node,
)

__all__ = [
    "GitHubSearchClient",
    "Actor",
    "IssueNode",
    "PullRequestNode",
    "RawResultNode",
    "RepositoryNode",
    "parse_node",
]
