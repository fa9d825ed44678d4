"""Inspect feed output and cache behaviour for the configured items file.

Loads environment variables, renders the feed twice through the
configured cache store, and prints a short preview so manual debugging
remains easy when adjusting cache settings.
"""

from __future__ import annotations

import sys
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

load_dotenv(PROJECT_ROOT / ".env")

from feedsmith.config import settings
from feedsmith.feeds import FeedFormat, build_feed_cache
from feedsmith.feeds.loader import build_feed_from_file


def preview_feed(ttl: int = 60) -> None:
    """Render the RSS feed through the cache and print a snippet."""
    items_path = settings.feed.items_path or str(PROJECT_ROOT / "data" / "sample_items.json")
    cache = build_feed_cache(settings)
    cache_key = f"{settings.feed.cache_key}:inspect"

    for attempt in (1, 2):
        builder = build_feed_from_file(items_path, settings, cache=cache)
        print(f"Attempt {attempt}: cached before render = {builder.is_cached(cache_key)}")
        response = builder.render(FeedFormat.RSS, cache_ttl=ttl, cache_key=cache_key)

    print(response.headers.get("content-type"))
    print(response.body.decode("utf-8")[:400])


if __name__ == "__main__":
    preview_feed()
