import json
from datetime import datetime, timezone
from pathlib import Path

import pytest
from pydantic import ValidationError

from feedsmith.config import FeedConfig, Settings
from feedsmith.feeds import FeedBuilder, MemoryFeedCache
from feedsmith.feeds.loader import build_feed_from_file, load_items, populate

from fakes import RecordingRenderer

SAMPLE_ITEMS = Path(__file__).resolve().parents[1] / "data" / "sample_items.json"


def _write_items(tmp_path: Path, items: list) -> Path:
    path = tmp_path / "items.json"
    path.write_text(json.dumps(items), encoding="utf-8")
    return path


def test_load_items_validates_and_keeps_order(tmp_path: Path) -> None:
    path = _write_items(tmp_path, [
        {"title": "b", "pubdate": "2026-10-17"},
        {"title": "a", "pubdate": 0, "author": "Ada", "unknown": "ignored"},
    ])

    items = load_items(path)

    assert [item.title for item in items] == ["b", "a"]
    assert items[1].author == "Ada"
    assert items[1].pubdate == 0


def test_load_items_rejects_missing_fields(tmp_path: Path) -> None:
    path = _write_items(tmp_path, [{"title": "no date"}])

    with pytest.raises(ValidationError):
        load_items(path)


def test_populate_tags_numeric_dates_as_timestamps(tmp_path: Path) -> None:
    path = _write_items(tmp_path, [
        {"title": "epoch", "pubdate": 86400},
        {"title": "text", "pubdate": "2026-10-17T09:30:00Z"},
    ])
    builder = FeedBuilder.create()

    populate(builder, load_items(path))

    assert datetime.fromisoformat(builder.items[0].pubdate) == datetime(1970, 1, 2, tzinfo=timezone.utc)
    assert datetime.fromisoformat(builder.items[1].pubdate) == datetime(2026, 10, 17, 9, 30, tzinfo=timezone.utc)


def test_build_feed_from_file_applies_feed_settings(tmp_path: Path) -> None:
    path = _write_items(tmp_path, [{"title": "t", "pubdate": "2026-10-17", "content": "abcdefgh"}])
    settings = Settings(feed=FeedConfig(title="Configured", shortening=True, text_limit=4, charset="iso-8859-1"))
    cache = MemoryFeedCache()

    builder = build_feed_from_file(path, settings, cache=cache, renderer=RecordingRenderer())

    assert builder.title == "Configured"
    assert builder.charset == "iso-8859-1"
    assert builder.cache is cache
    assert builder.config is settings
    assert builder.items[0].content == "abcd"


def test_sample_items_file_renders() -> None:
    builder = build_feed_from_file(SAMPLE_ITEMS, Settings())

    document = builder.render("rss", cache_ttl=-1)

    assert builder.get_entry_count() == 2
    assert "Release 1.2 &amp; friends" in document
