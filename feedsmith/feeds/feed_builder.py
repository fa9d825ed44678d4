"""
Feed Builder
============
Collects channel metadata and items and renders them as Atom or RSS,
optionally through a time-bounded cache.

Responsibility: Assemble feed documents and decide when to serve them from cache
"""

import logging
from enum import Enum
from datetime import timedelta
from typing import Optional, List, Any, Protocol, Union

from fastapi.responses import Response

from .cache import FeedCacheStore, MemoryFeedCache, ttl_seconds
from .dates import DateFormat, DateInput, format_date, rfc2822_now
from .renderer import FeedRenderer, FeedgenRenderer
from .sanitize import strip_markup
from ..models.feed import Item, Channel

logger = logging.getLogger(__name__)

ATOM_CONTENT_TYPE = "application/atom+xml"
RSS_CONTENT_TYPE = "application/rss+xml"
DEFAULT_CACHE_KEY = "laravel-feed"


class FeedFormat(str, Enum):
    """Supported feed formats"""
    RSS = "rss"
    ATOM = "atom"


class ConfigSource(Protocol):
    """Where render-time channel defaults come from"""

    def get(self, key: str) -> Any:
        ...


def link(url: str, format: Union[FeedFormat, str] = FeedFormat.ATOM) -> str:
    """
    Build an HTML alternate link tag pointing at a feed.

    The url is inserted as-is; escaping is the caller's job.

    Example:
        >>> link("http://x/feed", "rss")
        '<link rel="alternate" type="application/rss+xml" href="http://x/feed" />'
    """
    content_type = ATOM_CONTENT_TYPE if format == FeedFormat.ATOM else RSS_CONTENT_TYPE
    return f'<link rel="alternate" type="{content_type}" href="{url}" />'


class FeedBuilder:
    """
    Builds a feed from channel metadata and an ordered list of items.

    Channel defaults (link, language) are read from the injected config
    source only when the matching field is unset. Rendered documents can be
    cached under a key for a number of seconds.

    Example:
        feed = FeedBuilder.create(config=settings, cache=MemoryFeedCache())
        feed.title = "Release notes"
        feed.add("v1.2", "Jane", "https://example.org/v1.2",
                 "2026-10-18 09:00", "<p>Bug fixes</p>")
        response = feed.render("rss", cache_ttl=300, cache_key="releases")
    """

    def __init__(
        self,
        config: Optional[ConfigSource] = None,
        cache: Optional[FeedCacheStore] = None,
        renderer: Optional[FeedRenderer] = None
    ):
        """
        Initialize feed builder.

        Args:
            config: Source for application.language / application.url defaults
            cache: Cache store for rendered documents (defaults to in-memory)
            renderer: Render engine (defaults to feedgen)
        """
        self.items: List[Item] = []

        # Channel fields
        self.title: str = "My feed title"
        self.description: str = "My feed description"
        self.link: Optional[str] = None
        self.logo: Optional[str] = None
        self.icon: Optional[str] = None
        self.pubdate: Optional[str] = None
        self.lang: Optional[str] = None

        # Render settings
        self.charset: str = "utf-8"
        self.content_type: str = ATOM_CONTENT_TYPE

        self.config = config
        self.cache = cache if cache is not None else MemoryFeedCache()
        self.renderer = renderer if renderer is not None else FeedgenRenderer()

        self._shortening = False
        self._shortening_limit = 150
        self._date_format = DateFormat.DATETIME

    @classmethod
    def create(
        cls,
        config: Optional[ConfigSource] = None,
        cache: Optional[FeedCacheStore] = None,
        renderer: Optional[FeedRenderer] = None
    ) -> "FeedBuilder":
        """Return a fresh builder with default settings"""
        return cls(config=config, cache=cache, renderer=renderer)

    @classmethod
    def from_settings(
        cls,
        settings,
        cache: Optional[FeedCacheStore] = None,
        renderer: Optional[FeedRenderer] = None
    ) -> "FeedBuilder":
        """
        Create a builder configured from a Settings instance.

        The settings object also becomes the builder's config source.
        """
        feed_config = settings.feed
        builder = cls(config=settings, cache=cache, renderer=renderer)
        builder.title = feed_config.title
        builder.description = feed_config.description
        builder.logo = feed_config.logo
        builder.icon = feed_config.icon
        builder.charset = feed_config.charset
        builder.set_shortening(feed_config.shortening)
        builder.set_text_limit(feed_config.text_limit)
        builder.set_date_format(feed_config.date_format)
        return builder

    # MARK: - Settings

    def set_text_limit(self, limit: int = 150) -> None:
        """Set maximum characters kept in item content when shortening"""
        self._shortening_limit = limit

    def set_shortening(self, enabled: bool = False) -> None:
        """Turn content shortening on/off for items added from now on"""
        self._shortening = enabled

    def set_date_format(self, mode: Union[DateFormat, str]) -> None:
        """
        Choose how untagged publication dates are read.

        Args:
            mode: "datetime" (free text) or "timestamp" (unix epoch)

        Raises:
            ValueError: Unknown mode
        """
        self._date_format = DateFormat(mode)

    @property
    def shortening(self) -> bool:
        return self._shortening

    @property
    def text_limit(self) -> int:
        return self._shortening_limit

    @property
    def date_format(self) -> DateFormat:
        return self._date_format

    # MARK: - Items

    def add(
        self,
        title: str,
        author: str,
        link: str,
        pubdate: DateInput,
        description: str,
        content: str = ""
    ) -> Item:
        """
        Append an item to the feed.

        Args:
            title: Item title
            author: Author name
            link: URL of the full content
            pubdate: Timestamp/FreeText, datetime, or raw value read per date format
            description: Short summary
            content: Full content, truncated when shortening is enabled

        Returns:
            The stored Item

        Raises:
            InvalidDateFormat: If pubdate cannot be parsed
        """
        content = content or ""
        if self._shortening:
            content = content[:self._shortening_limit]

        item = Item(
            title=title,
            author=author or "",
            link=link or "",
            pubdate=format_date(pubdate, self._date_format),
            description=description or "",
            content=content
        )
        self.items.append(item)
        return item

    def get_entry_count(self) -> int:
        """Get the number of items in the feed"""
        return len(self.items)

    # MARK: - Rendering

    def _config_value(self, key: str) -> Optional[str]:
        if self.config is None:
            logger.debug(f"No config source; leaving {key} unset")
            return None
        return self.config.get(key)

    def _fill_channel_defaults(self) -> None:
        if not self.lang:
            self.lang = self._config_value("application.language")
        if not self.link:
            self.link = self._config_value("application.url")
        if not self.pubdate:
            self.pubdate = rfc2822_now()

    def _channel(self) -> Channel:
        return Channel(
            title=self.title,
            description=self.description,
            logo=self.logo,
            icon=self.icon,
            link=self.link,
            pubdate=self.pubdate,
            lang=self.lang
        )

    def _response(self, body: str) -> Response:
        return Response(
            content=body,
            status_code=200,
            headers={"Content-type": f"{self.content_type}; charset={self.charset}"}
        )

    def _render_document(self, feed_format: FeedFormat, items: List[Item], channel: Channel) -> str:
        return self.renderer.render(feed_format.value, {"items": items, "channel": channel})

    def render(
        self,
        format: Union[FeedFormat, str] = FeedFormat.ATOM,
        cache_ttl: Union[int, float, timedelta] = 0,
        cache_key: str = DEFAULT_CACHE_KEY
    ) -> Union[Response, str]:
        """
        Render the feed.

        Cache policy by ``cache_ttl``:
            > 0: serve ``cache_key`` from cache, rendering and storing it on a miss
            < 0: return the bare document string, cache untouched
            == 0: render fresh, cache untouched

        Args:
            format: "rss"; anything else renders Atom
            cache_ttl: Seconds (or timedelta) to keep the document cached
            cache_key: Cache key for the rendered document

        Returns:
            HTTP response (status 200, Content-type header) or, for negative
            TTLs, the document string

        Raises:
            CacheUnavailable: Cache backend failure
            RenderEngineFailure: Render engine rejected the feed
        """
        self._fill_channel_defaults()
        channel = self._channel()
        items = self.items

        if format == FeedFormat.RSS:
            feed_format = FeedFormat.RSS
            self.content_type = RSS_CONTENT_TYPE
            channel = channel.model_copy(update={
                "title": strip_markup(channel.title),
                "description": strip_markup(channel.description),
            })
            items = [
                item.model_copy(update={
                    "title": strip_markup(item.title),
                    "description": strip_markup(item.description),
                })
                for item in self.items
            ]
        else:
            feed_format = FeedFormat.ATOM
            self.content_type = ATOM_CONTENT_TYPE

        ttl = ttl_seconds(cache_ttl)

        if ttl > 0:
            if self.cache.has(cache_key):
                cached = self.cache.get(cache_key)
                if cached is not None:
                    logger.debug(f"Feed cache hit: {cache_key}")
                    return self._response(cached)

            logger.info(f"Feed cache miss: {cache_key}; rendering {feed_format.value}")
            document = self._render_document(feed_format, items, channel)
            self.cache.put(cache_key, document, cache_ttl)
            cached = self.cache.get(cache_key)
            return self._response(cached if cached is not None else document)

        if ttl < 0:
            return self._render_document(feed_format, items, channel)

        return self._response(self._render_document(feed_format, items, channel))

    # MARK: - Utilities

    @staticmethod
    def link_tag(url: str, format: Union[FeedFormat, str] = FeedFormat.ATOM) -> str:
        """Build an HTML alternate link for the feed (see link())"""
        return link(url, format)

    def is_cached(self, cache_key: str = DEFAULT_CACHE_KEY) -> bool:
        """Check if a rendered feed is cached under cache_key"""
        return bool(self.cache.has(cache_key))
