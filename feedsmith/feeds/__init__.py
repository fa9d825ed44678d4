"""
Feeds Module
============
Atom/RSS feed generation with optional output caching.

Exports:
    - FeedBuilder: Feed builder (items, channel, render, caching)
    - FeedFormat: RSS/Atom format enum
    - link: HTML alternate-link tag helper
    - Timestamp / FreeText / DateFormat: Publication date inputs
    - FeedgenRenderer: Default render engine
    - MemoryFeedCache / RedisFeedCache: Cache stores
    - build_feed_cache: Cache store chosen from settings
    - InvalidDateFormat / CacheUnavailable / RenderEngineFailure: Errors
"""

from .feed_builder import (
    FeedBuilder,
    FeedFormat,
    ConfigSource,
    link,
    ATOM_CONTENT_TYPE,
    RSS_CONTENT_TYPE,
    DEFAULT_CACHE_KEY,
)

from .dates import (
    DateFormat,
    Timestamp,
    FreeText,
    format_date,
)

from .renderer import (
    FeedRenderer,
    FeedgenRenderer,
)

from .cache import (
    FeedCacheStore,
    MemoryFeedCache,
    RedisFeedCache,
    build_feed_cache,
)

from .sanitize import strip_markup

from .exceptions import (
    FeedError,
    InvalidDateFormat,
    CacheUnavailable,
    RenderEngineFailure,
)

__all__ = [
    # Builder
    'FeedBuilder',
    'FeedFormat',
    'ConfigSource',
    'link',
    'ATOM_CONTENT_TYPE',
    'RSS_CONTENT_TYPE',
    'DEFAULT_CACHE_KEY',

    # Dates
    'DateFormat',
    'Timestamp',
    'FreeText',
    'format_date',

    # Rendering
    'FeedRenderer',
    'FeedgenRenderer',
    'strip_markup',

    # Caching
    'FeedCacheStore',
    'MemoryFeedCache',
    'RedisFeedCache',
    'build_feed_cache',

    # Errors
    'FeedError',
    'InvalidDateFormat',
    'CacheUnavailable',
    'RenderEngineFailure',
]
