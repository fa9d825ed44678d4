"""
Feed API Endpoints
==================
REST API endpoints for RSS/Atom feeds.

Endpoints:
    - GET /api/v1/feeds/{format}.xml - Configured feed as RSS or Atom
    - GET /api/v1/feeds/{format}/status - Whether the feed is currently cached
    - GET /api/v1/feeds/links - HTML alternate-link tags for both formats

Responsibility: Expose feeds via REST API with server-side caching
"""

import logging
from functools import lru_cache
from typing import Union

from fastapi import APIRouter, Depends, HTTPException, Path, Request
from fastapi.responses import Response

from feedsmith.config import Settings, settings as app_settings
from feedsmith.feeds import (
    FeedBuilder,
    FeedFormat,
    FeedCacheStore,
    CacheUnavailable,
    InvalidDateFormat,
    RenderEngineFailure,
    build_feed_cache,
    link,
    ATOM_CONTENT_TYPE,
    RSS_CONTENT_TYPE,
)
from feedsmith.feeds.loader import build_feed_from_file

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/feeds",
    tags=["feeds"],
    responses={
        200: {
            "description": "RSS/Atom feed XML",
            "content": {"application/rss+xml": {}, "application/atom+xml": {}}
        },
        404: {"description": "Feed not configured"},
        503: {"description": "Feed cache unavailable"}
    }
)


def get_settings() -> Settings:
    """Settings dependency"""
    return app_settings


@lru_cache(maxsize=1)
def _shared_cache() -> FeedCacheStore:
    return build_feed_cache(app_settings)


def get_feed_cache() -> FeedCacheStore:
    """Feed cache dependency (one store shared by all requests)"""
    return _shared_cache()


def get_feed_content_type(format: str, charset: str = "utf-8") -> str:
    """Get appropriate content type for feed format"""
    if format == FeedFormat.RSS:
        return f"{RSS_CONTENT_TYPE}; charset={charset}"
    return f"{ATOM_CONTENT_TYPE}; charset={charset}"


def feed_cache_key(settings: Settings, format: str) -> str:
    """Cache key for one format of the configured feed"""
    return f"{settings.feed.cache_key}:{format}"


def _load_builder(settings: Settings, cache: FeedCacheStore) -> FeedBuilder:
    items_path = settings.feed.items_path
    if not items_path:
        raise HTTPException(status_code=404, detail="No feed items configured (set FEED_ITEMS_PATH)")
    try:
        return build_feed_from_file(items_path, settings, cache=cache)
    except FileNotFoundError:
        logger.error(f"Feed items file missing: {items_path}")
        raise HTTPException(status_code=404, detail="Feed items file not found")
    except InvalidDateFormat as e:
        logger.error(f"Invalid item date in {items_path}: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.get(
    "/links",
    summary="Feed Alternate Links",
    description="HTML <link> tags advertising the feed in both formats"
)
def get_feed_links(request: Request) -> dict:
    """
    Get alternate-link tags for embedding in HTML pages.

    Returns:
        Mapping of format to <link> tag
    """
    return {
        fmt.value: link(str(request.url_for("get_feed", format=fmt.value)), fmt.value)
        for fmt in FeedFormat
    }


@router.get(
    "/{format}/status",
    summary="Feed Cache Status",
    description="Whether a rendered document is cached for this format"
)
def get_feed_status(
    format: str = Path(..., description="Feed format: rss or atom"),
    settings: Settings = Depends(get_settings),
    cache: FeedCacheStore = Depends(get_feed_cache)
) -> dict:
    """
    Report cache presence for the configured feed.

    Args:
        format: Feed format
        settings: Settings
        cache: Feed cache

    Returns:
        Cache key and whether it is populated
    """
    key = feed_cache_key(settings, format)
    builder = FeedBuilder.create(config=settings, cache=cache)
    try:
        cached = builder.is_cached(key)
    except CacheUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))
    return {"cache_key": key, "cached": cached}


@router.get(
    "/{format}.xml",
    name="get_feed",
    summary="Configured Feed",
    description="Feed of the configured items in RSS 2.0 or Atom 1.0",
    response_class=Response
)
def get_feed(
    format: str = Path(..., description="Feed format: rss or atom"),
    settings: Settings = Depends(get_settings),
    cache: FeedCacheStore = Depends(get_feed_cache)
) -> Response:
    """
    Get the configured feed.

    Honors FEED_CACHE_TTL: positive values serve from cache, zero renders
    every request, negative values render without cache bookkeeping.

    Args:
        format: "rss"; anything else renders Atom
        settings: Settings
        cache: Feed cache

    Returns:
        RSS/Atom XML feed
    """
    builder = _load_builder(settings, cache)

    try:
        result: Union[Response, str] = builder.render(
            format,
            cache_ttl=settings.feed.cache_ttl,
            cache_key=feed_cache_key(settings, format)
        )
    except CacheUnavailable as e:
        logger.error(f"Feed cache unavailable: {e}")
        raise HTTPException(status_code=503, detail="Feed cache unavailable")
    except RenderEngineFailure as e:
        logger.error(f"Feed render failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    if isinstance(result, str):
        return Response(content=result, media_type=get_feed_content_type(format, settings.feed.charset))

    result.headers["X-Feed-Entries"] = str(builder.get_entry_count())
    return result
