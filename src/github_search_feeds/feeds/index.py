"""
Feed index pages.

Builds the OPML subscription list and the static HTML page that list
every published feed.
"""

import html
import xml.etree.ElementTree as ET
from urllib.parse import quote

from ..definitions import SearchQueryDefinition
from .synthesizer import GENERATOR, XML_DECLARATION

SOURCE_URL = "https://github.com/uta8a/github-search-rss"


def render_opml(definitions: list[SearchQueryDefinition]) -> str:
    """
    Render an OPML 2.0 subscription list of the JSON feeds.

    Args:
        definitions: Search definitions in publication order

    Returns:
        The OPML document
    """
    root = ET.Element("opml", {"version": "2.0"})
    head = ET.SubElement(root, "head")
    ET.SubElement(head, "title").text = GENERATOR
    body = ET.SubElement(root, "body")

    for definition in definitions:
        ET.SubElement(
            body,
            "outline",
            {
                "text": definition.title,
                "title": definition.title,
                "type": "rss",
                "xmlUrl": definition.link,
                "htmlUrl": definition.homepage or definition.link,
            },
        )

    ET.indent(root, space="    ")
    return XML_DECLARATION + ET.tostring(root, encoding="unicode")


def _feed_list_item(definition: SearchQueryDefinition) -> str:
    search_url = f"https://github.com/search?q={quote(definition.query, safe='')}"
    link = html.escape(definition.link)
    atom_link = html.escape(definition.atom_link)
    return (
        f'<li><a href="{html.escape(search_url)}">🔎</a>'
        f"<code>{html.escape(definition.query)}</code>: "
        f'<a href="{link}">{link}</a>'
        f'（<a href="{atom_link}">atom</a>）</li>'
    )


def _slack_command(definition: SearchQueryDefinition) -> str:
    atom_link = html.escape(definition.atom_link)
    return f'<code>/feed subscribe <a href="{atom_link}">{atom_link}</a></code>'


def render_index_html(definitions: list[SearchQueryDefinition]) -> str:
    """Render the HTML page listing every feed with its search query."""
    feed_links = "\n".join(_feed_list_item(d) for d in definitions)
    slack_commands = "\n".join(_slack_command(d) for d in definitions)

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>{GENERATOR}</title>
</head>
<body>
<p>These feeds are search results of GitHub.</p>
<p>Supported Feed Types</p>
<ul>
<li>JSON Feed</li>
<li>Atom Feed</li>
</ul>
<p><a href="./index.opml">OPML Feeds</a></p>
<ul>
{feed_links}
</ul>
<details>
<summary>Subscribe in slack</summary>

You can subscribe feeds via <code>/feed</code> command

<pre>
{slack_commands}
</pre>

</details>
<footer>
<a href="{SOURCE_URL}">Source Code</a>
</footer>
</body>
</html>
"""
