"""
Search Result Nodes

Typed variants of the GraphQL search result union. Only Repository,
Issue and PullRequest nodes are requested by the search query; parsing
anything else raises UnsupportedNodeError.
"""

from dataclasses import dataclass, field
from typing import Any, Union

from ..errors import UnsupportedNodeError


@dataclass(frozen=True)
class Actor:
    """A GitHub user or organization as referenced from a node."""

    avatar_url: str | None = None
    login: str | None = None
    url: str | None = None


@dataclass(frozen=True)
class RepositoryNode:
    url: str | None = None
    name: str | None = None
    name_with_owner: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    owner: Actor | None = None
    description: str | None = None
    description_html: str | None = None
    topics: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class IssueNode:
    url: str | None = None
    title: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    author: Actor | None = None
    body_html: str | None = None
    labels: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class PullRequestNode:
    url: str | None = None
    title: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    author: Actor | None = None
    body_html: str | None = None
    labels: list[str] = field(default_factory=list)


RawResultNode = Union[RepositoryNode, IssueNode, PullRequestNode]


def _parse_actor(data: dict[str, Any] | None) -> Actor | None:
    if not data:
        return None
    return Actor(
        avatar_url=data.get("avatarUrl"),
        login=data.get("login"),
        url=data.get("url"),
    )


def _edge_nodes(connection: dict[str, Any] | None) -> list[dict[str, Any]]:
    """Return the non-null nodes of a GraphQL connection."""
    if not connection:
        return []
    return [
        edge["node"]
        for edge in connection.get("edges") or []
        if edge and edge.get("node")
    ]


def parse_node(data: dict[str, Any]) -> RawResultNode:
    """
    Build a typed node from a raw GraphQL search result node.

    Missing fields become None (or an empty list); they are never errors.

    Args:
        data: The "node" object of a search edge

    Returns:
        The matching RepositoryNode, IssueNode or PullRequestNode

    Raises:
        UnsupportedNodeError: If __typename is not one of the three variants
    """
    typename = data.get("__typename")

    if typename == "Repository":
        return RepositoryNode(
            url=data.get("url"),
            name=data.get("name"),
            name_with_owner=data.get("nameWithOwner"),
            created_at=data.get("createdAt"),
            updated_at=data.get("updatedAt"),
            owner=_parse_actor(data.get("owner")),
            description=data.get("description"),
            description_html=data.get("descriptionHTML"),
            topics=[
                node["topic"]["name"]
                for node in _edge_nodes(data.get("repositoryTopics"))
                if node.get("topic") and node["topic"].get("name") is not None
            ],
        )

    if typename in ("Issue", "PullRequest"):
        node_class = IssueNode if typename == "Issue" else PullRequestNode
        return node_class(
            url=data.get("url"),
            title=data.get("title"),
            created_at=data.get("createdAt"),
            updated_at=data.get("updatedAt"),
            author=_parse_actor(data.get("author")),
            body_html=data.get("bodyHTML"),
            labels=[
                node["name"]
                for node in _edge_nodes(data.get("labels"))
                if node.get("name") is not None
            ],
        )

    raise UnsupportedNodeError(typename)
