"""
Feed rendering package.

Provides JSON Feed / Atom synthesis and the OPML and HTML feed index.
"""

from .index import render_index_html, render_opml
from .synthesizer import (
    FeedOptions,
    FeedSynthesizer,
    OutputFormat,
    format_for_link,
)

__all__ = [
    "FeedOptions",
    "FeedSynthesizer",
    "OutputFormat",
    "format_for_link",
    "render_index_html",
    "render_opml",
]
