"""
Search result processing components.

Converts typed GitHub search nodes into canonical feed items.
"""

from .normalizer import normalize_node, normalize_nodes, repository_title

__all__ = [
    "normalize_node",
    "normalize_nodes",
    "repository_title",
]
