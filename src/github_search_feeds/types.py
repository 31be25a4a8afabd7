"""
Common type definitions for feed generation.

TypedDict definitions for the canonical item shape shared by the
normalizer and the feed synthesizer.
"""

from collections.abc import Callable
from enum import Enum
from typing import TypedDict


class SearchType(str, Enum):
    """GitHub GraphQL SearchType values."""

    ISSUE = "ISSUE"
    REPOSITORY = "REPOSITORY"
    DISCUSSION = "DISCUSSION"
    USER = "USER"


class ItemAuthor(TypedDict):
    """Author of an item. Fields are empty strings for deleted accounts."""

    avatarUrl: str
    login: str
    url: str


class Item(TypedDict):
    """Canonical search result, independent of the GitHub node type."""

    url: str
    title: str
    createdAt: str
    updatedAt: str
    author: ItemAuthor
    bodyHTML: str
    labels: list[str]


# Returns True when the item should be included in the feed
ItemFilter = Callable[[Item], bool]
