"""
Search result normalization.

Maps the Repository, Issue and PullRequest node variants onto the single
Item shape that the feed synthesizer renders.
"""

from collections.abc import Iterable

from ..errors import UnsupportedNodeError
from ..search.nodes import (
    Actor,
    IssueNode,
    PullRequestNode,
    RawResultNode,
    RepositoryNode,
)
from ..types import Item, ItemAuthor


def _author(actor: Actor | None) -> ItemAuthor:
    # Deleted accounts come back as a null author
    if actor is None:
        return ItemAuthor(avatarUrl="", login="", url="")
    return ItemAuthor(
        avatarUrl=actor.avatar_url or "",
        login=actor.login or "",
        url=actor.url or "",
    )


def repository_title(node: RepositoryNode) -> str:
    """
    Build the "owner/name: description" title of a repository.

    Args:
        node: The repository node

    Returns:
        "owner/name: description", or "owner/name" without a description
    """
    name_with_owner = node.name_with_owner
    if not name_with_owner:
        owner_login = node.owner.login if node.owner and node.owner.login else ""
        name_with_owner = f"{owner_login}/{node.name or ''}"

    if node.description:
        return f"{name_with_owner}: {node.description}"
    return name_with_owner


def normalize_node(node: RawResultNode) -> Item:
    """
    Convert one search result node into an Item.

    Absent optional fields degrade to empty strings or an empty label list.

    Args:
        node: A typed search result node

    Returns:
        The canonical Item for the node

    Raises:
        UnsupportedNodeError: If node is not one of the known variants
    """
    match node:
        case IssueNode() | PullRequestNode():
            return Item(
                url=node.url or "",
                title=node.title or "",
                createdAt=node.created_at or "",
                updatedAt=node.updated_at or "",
                author=_author(node.author),
                bodyHTML=node.body_html or "",
                labels=list(node.labels),
            )
        case RepositoryNode():
            return Item(
                url=node.url or "",
                title=repository_title(node),
                createdAt=node.created_at or "",
                updatedAt=node.updated_at or "",
                author=_author(node.owner),
                bodyHTML=node.description_html or "",
                labels=list(node.topics),
            )
        case _:
            raise UnsupportedNodeError(type(node).__name__)


def normalize_nodes(nodes: Iterable[RawResultNode]) -> list[Item]:
    """Normalize nodes, keeping the search relevance order."""
    return [normalize_node(node) for node in nodes]
