"""
Feed Renderer
=============
Render engine turning feed data into Atom 1.0 or RSS 2.0 XML.

The engine is a pure function of ``(template_name, {"items", "channel"})``:
it never touches the builder, the cache, or configuration.

Responsibility: Serialize channel metadata and items with feedgen
"""

import logging
from typing import Any, Dict, Protocol

from feedgen.feed import FeedGenerator

from .dates import parse_free_text
from .exceptions import InvalidDateFormat, RenderEngineFailure
from ..utils.hash_utils import content_urn

logger = logging.getLogger(__name__)

GENERATOR_NAME = "feedsmith"
GENERATOR_URI = "https://pypi.org/project/feedsmith/"


class FeedRenderer(Protocol):
    """Render engine contract"""

    def render(self, template_name: str, data: Dict[str, Any]) -> str:
        ...


class FeedgenRenderer:
    """
    feedgen-backed render engine.

    Template names:
        - "atom": Atom 1.0 document
        - "rss": RSS 2.0 document

    Example:
        renderer = FeedgenRenderer()
        xml = renderer.render("rss", {"items": items, "channel": channel})
    """

    TEMPLATES = ("atom", "rss")

    def __init__(self, pretty: bool = True):
        self.pretty = pretty

    def render(self, template_name: str, data: Dict[str, Any]) -> str:
        """
        Render a complete feed document.

        Args:
            template_name: "atom" or "rss"
            data: Mapping with "items" (list of Item) and "channel" (Channel)

        Returns:
            XML document string

        Raises:
            RenderEngineFailure: Unknown template or data feedgen rejects
        """
        if template_name not in self.TEMPLATES:
            raise RenderEngineFailure(f"Unknown feed template: {template_name}", format=template_name)

        channel = data["channel"]
        items = data["items"]

        try:
            fg = self._build_generator(template_name, channel, items)
            if template_name == "rss":
                xml = fg.rss_str(pretty=self.pretty)
            else:
                xml = fg.atom_str(pretty=self.pretty)
        except (ValueError, InvalidDateFormat) as e:
            logger.error(f"Failed to render {template_name} feed: {e}")
            raise RenderEngineFailure(str(e), format=template_name) from e

        return xml.decode("utf-8")

    def _build_generator(self, template_name: str, channel, items) -> FeedGenerator:
        fg = FeedGenerator()
        fg.load_extension("dc")

        # feedgen rejects blank required fields
        feed_id = channel.link or content_urn({"title": channel.title})
        feed_title = channel.title or channel.link or GENERATOR_NAME
        fg.id(feed_id)
        fg.title(feed_title)
        fg.description(channel.description or feed_title)
        if channel.link:
            fg.link(href=channel.link, rel="alternate")
        elif template_name == "rss":
            fg.link(href=feed_id, rel="alternate")
        if channel.lang:
            fg.language(channel.lang)
        if channel.logo:
            fg.logo(channel.logo)
        if channel.icon:
            fg.icon(channel.icon)

        fg.generator(GENERATOR_NAME, uri=GENERATOR_URI)

        if channel.pubdate:
            published = parse_free_text(channel.pubdate)
            fg.updated(published)
            fg.pubDate(published)
            fg.lastBuildDate(published)

        for item in items:
            self._add_entry(fg, item, template_name)

        return fg

    def _add_entry(self, fg: FeedGenerator, item, template_name: str) -> None:
        # feedgen prepends by default; keep insertion order
        entry = fg.add_entry(order="append")

        entry_id = item.link or content_urn({
            "title": item.title,
            "pubdate": item.pubdate,
            "description": item.description,
        })
        entry.id(entry_id)
        entry.guid(entry_id, permalink=bool(item.link))
        entry.title(item.title or entry_id)

        if item.link:
            entry.link(href=item.link)

        if item.author:
            entry.author({"name": item.author})
            entry.dc.dc_creator(item.author)

        if item.pubdate:
            published = parse_free_text(item.pubdate)
            entry.updated(published)
            entry.published(published)

        if item.description:
            entry.description(item.description, isSummary=True)

        if item.content:
            entry.content(item.content, type="html")
        elif template_name == "atom" and not item.link:
            # Atom entries need an alternate link or a content element
            if item.description:
                entry.content(item.description, type="html")
            else:
                entry.content(item.title or entry_id, type="text")
