"""
Item Loader
===========
Reads feed items from a JSON file and builds a populated FeedBuilder.

File format: a JSON list of objects with ``title``, ``author``, ``link``,
``pubdate`` (unix timestamp or date string), ``description`` and ``content``.

Responsibility: Feed data source for the CLI and the API
"""

import json
import logging
from pathlib import Path
from typing import List, Optional, Union

from pydantic import TypeAdapter

from .cache import FeedCacheStore
from .dates import Timestamp, FreeText
from .feed_builder import FeedBuilder
from .renderer import FeedRenderer
from ..models.feed import ItemPayload

logger = logging.getLogger(__name__)

_ITEMS_ADAPTER = TypeAdapter(List[ItemPayload])


def load_items(path: Union[str, Path]) -> List[ItemPayload]:
    """
    Load and validate items from a JSON file.

    Args:
        path: Path to the JSON items file

    Returns:
        Validated item payloads in file order

    Raises:
        FileNotFoundError: If the file does not exist
        pydantic.ValidationError: If the file content is malformed
    """
    path = Path(path)
    raw = json.loads(path.read_text(encoding="utf-8"))
    items = _ITEMS_ADAPTER.validate_python(raw)
    logger.info(f"Loaded {len(items)} feed items from {path}")
    return items


def populate(builder: FeedBuilder, items: List[ItemPayload]) -> FeedBuilder:
    """Add item payloads to a builder, tagging numeric dates as timestamps"""
    for payload in items:
        if isinstance(payload.pubdate, (int, float)):
            pubdate = Timestamp(payload.pubdate)
        else:
            pubdate = FreeText(payload.pubdate)
        builder.add(
            title=payload.title,
            author=payload.author,
            link=payload.link,
            pubdate=pubdate,
            description=payload.description,
            content=payload.content
        )
    return builder


def build_feed_from_file(
    path: Union[str, Path],
    settings,
    cache: Optional[FeedCacheStore] = None,
    renderer: Optional[FeedRenderer] = None
) -> FeedBuilder:
    """
    Create a builder from settings and fill it with items from a JSON file.

    Args:
        path: Path to the JSON items file
        settings: Settings instance (feed defaults + config source)
        cache: Cache store shared across requests
        renderer: Render engine

    Returns:
        Populated feed builder
    """
    builder = FeedBuilder.from_settings(settings, cache=cache, renderer=renderer)
    return populate(builder, load_items(path))
