"""
Feed synthesis.

Renders a list of canonical items as a JSON Feed (version 1) or an Atom 1.0
document. Output is deterministic: the same items and options always give
byte-identical text.
"""

import json
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import PurePosixPath
from urllib.parse import urlparse

from ..types import Item, ItemFilter

GENERATOR = "github-search-feeds"
JSON_FEED_VERSION = "https://jsonfeed.org/version/1"
ATOM_NAMESPACE = "http://www.w3.org/2005/Atom"
XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>\n'
AVATAR_SIZE = 64

# Anything outside the XML 1.0 Char production
INVALID_XML_CHARS = re.compile(
    "[^\u0009\u000a\u000d\u0020-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]"
)


class OutputFormat(str, Enum):
    JSON = "json"
    ATOM = "atom"


def format_for_link(link: str) -> OutputFormat:
    """Pick JSON Feed for a ".json" link and Atom for any other suffix."""
    suffix = PurePosixPath(urlparse(link).path).suffix
    return OutputFormat.JSON if suffix == ".json" else OutputFormat.ATOM


def parse_timestamp(value: str | None) -> datetime | None:
    """
    Parse an ISO-8601 timestamp into an aware UTC datetime.

    Args:
        value: Timestamp such as "2024-01-02T03:04:05Z"

    Returns:
        The UTC instant, or None if value is empty or not ISO-8601
    """
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def xml_safe(value: str | None) -> str:
    """Drop characters an XML 1.0 document can not contain."""
    return INVALID_XML_CHARS.sub("", value or "")


def format_timestamp(value: datetime) -> str:
    """Render an instant as "YYYY-MM-DDTHH:MM:SS.sssZ"."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    utc = value.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def entry_content(item: Item) -> str:
    """Prefix the body HTML with the author avatar, when there is one."""
    body = item.get("bodyHTML") or ""
    avatar_url = item["author"].get("avatarUrl") if item.get("author") else ""
    if not avatar_url:
        return body
    image = (
        f'<img src="{avatar_url}" width="{AVATAR_SIZE}" '
        f'height="{AVATAR_SIZE}" alt=""/><br/>'
    )
    return image + body


@dataclass
class FeedOptions:
    """Feed-level metadata and the optional item filter."""

    title: str
    description: str
    link: str
    updated_at: datetime
    homepage: str | None = None
    image: str | None = None
    favicon: str | None = None
    filter: ItemFilter | None = None
    noreply_host: str = "github.com"

    @property
    def home_page_url(self) -> str:
        return self.homepage or self.link


@dataclass
class FeedEntry:
    """One rendered entry, shared by both output formats."""

    id: str
    title: str
    content_html: str
    url: str
    author_name: str
    author_url: str
    author_email: str
    published: datetime | None
    updated: datetime | None
    tags: list[str] = field(default_factory=list)


class FeedSynthesizer:
    """Builds JSON Feed and Atom documents from canonical items."""

    def __init__(self, generator: str = GENERATOR):
        self.generator = generator

    def build_entries(self, items: list[Item], options: FeedOptions) -> list[FeedEntry]:
        """
        Apply the filter and turn the surviving items into feed entries.

        Args:
            items: Items in search relevance order
            options: Feed options, including the optional filter

        Returns:
            Entries in the same order as the surviving items
        """
        selected = [
            item for item in items if options.filter is None or options.filter(item)
        ]

        entries = []
        for item in selected:
            author = item.get("author") or {}
            login = author.get("login") or ""
            url = item.get("url") or ""
            entries.append(
                FeedEntry(
                    id=url,
                    title=item.get("title") or "",
                    content_html=entry_content(item),
                    url=url,
                    author_name=login,
                    author_url=author.get("url") or "",
                    # Only used because some readers require an author email
                    author_email=(
                        f"{login}@noreply.{options.noreply_host}" if login else ""
                    ),
                    published=parse_timestamp(item.get("createdAt")),
                    updated=parse_timestamp(item.get("updatedAt")),
                    tags=list(item.get("labels") or []),
                )
            )
        return entries

    def synthesize(
        self,
        items: list[Item],
        options: FeedOptions,
        output_format: OutputFormat | None = None,
    ) -> str:
        """
        Render items as a complete feed document.

        Args:
            items: Items in search relevance order
            options: Feed metadata and optional filter
            output_format: Format to render; inferred from options.link when None

        Returns:
            The serialized JSON Feed or Atom document
        """
        if output_format is None:
            output_format = format_for_link(options.link)

        entries = self.build_entries(items, options)
        if output_format is OutputFormat.JSON:
            return self.render_json_feed(entries, options)
        return self.render_atom(entries, options)

    def render_json_feed(self, entries: list[FeedEntry], options: FeedOptions) -> str:
        feed: dict = {
            "version": JSON_FEED_VERSION,
            "title": options.title,
            "home_page_url": options.home_page_url,
            "feed_url": options.link,
        }
        if options.description:
            feed["description"] = options.description
        if options.image:
            feed["icon"] = options.image
        if options.favicon:
            feed["favicon"] = options.favicon

        feed["items"] = []
        for entry in entries:
            json_item: dict = {
                "id": entry.id,
                "title": entry.title,
                "content_html": entry.content_html,
                "url": entry.url,
            }
            author = {}
            if entry.author_name:
                author["name"] = entry.author_name
            if entry.author_url:
                author["url"] = entry.author_url
            if author:
                json_item["author"] = author
            if entry.published:
                json_item["date_published"] = format_timestamp(entry.published)
            if entry.updated:
                json_item["date_modified"] = format_timestamp(entry.updated)
            if entry.tags:
                json_item["tags"] = entry.tags
            feed["items"].append(json_item)

        return json.dumps(feed, indent=4, ensure_ascii=False)

    def render_atom(self, entries: list[FeedEntry], options: FeedOptions) -> str:
        feed_updated = format_timestamp(options.updated_at)

        root = ET.Element("feed", {"xmlns": ATOM_NAMESPACE})
        ET.SubElement(root, "id").text = xml_safe(options.link)
        ET.SubElement(root, "title").text = xml_safe(options.title)
        ET.SubElement(root, "updated").text = feed_updated
        ET.SubElement(root, "generator").text = self.generator
        ET.SubElement(
            root, "link", {"rel": "alternate", "href": xml_safe(options.home_page_url)}
        )
        ET.SubElement(root, "link", {"rel": "self", "href": xml_safe(options.link)})
        if options.description:
            ET.SubElement(root, "subtitle").text = xml_safe(options.description)
        if options.image:
            ET.SubElement(root, "logo").text = xml_safe(options.image)
        if options.favicon:
            ET.SubElement(root, "icon").text = xml_safe(options.favicon)
        ET.SubElement(root, "rights").text = self.generator

        for entry in entries:
            element = ET.SubElement(root, "entry")
            ET.SubElement(element, "title", {"type": "html"}).text = xml_safe(
                entry.title
            )
            ET.SubElement(element, "id").text = xml_safe(entry.id)
            ET.SubElement(element, "link", {"href": xml_safe(entry.url)})
            # <updated> is mandatory in Atom
            ET.SubElement(element, "updated").text = (
                format_timestamp(entry.updated) if entry.updated else feed_updated
            )
            content = ET.SubElement(element, "content", {"type": "html"})
            content.text = xml_safe(entry.content_html)

            author = ET.SubElement(element, "author")
            ET.SubElement(author, "name").text = xml_safe(entry.author_name)
            if entry.author_email:
                ET.SubElement(author, "email").text = xml_safe(entry.author_email)
            if entry.author_url:
                ET.SubElement(author, "uri").text = xml_safe(entry.author_url)

            for tag in entry.tags:
                ET.SubElement(element, "category", {"term": xml_safe(tag)})
            if entry.published:
                ET.SubElement(element, "published").text = format_timestamp(
                    entry.published
                )

        ET.indent(root, space="    ")
        return XML_DECLARATION + ET.tostring(root, encoding="unicode")
