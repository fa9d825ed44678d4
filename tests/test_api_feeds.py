import json
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from api.main import app
from api.v1.endpoints import feeds
from feedsmith.config import AppConfig, FeedConfig, Settings
from feedsmith.feeds import MemoryFeedCache


def _write_items(tmp_path: Path) -> Path:
    path = tmp_path / "items.json"
    path.write_text(json.dumps([
        {"title": "<em>Hello</em>", "author": "Ada", "link": "https://example.org/hello",
         "pubdate": "2026-10-17T09:30:00Z", "description": "<p>World</p>"},
    ]), encoding="utf-8")
    return path


@pytest.fixture
def cache() -> MemoryFeedCache:
    return MemoryFeedCache()


@pytest.fixture
def make_client(tmp_path: Path, cache: MemoryFeedCache):
    def _make(cache_ttl: int = 0, items_path=None, charset: str = "utf-8"):
        settings = Settings(
            app=AppConfig(url="https://example.org", language="en"),
            feed=FeedConfig(
                title="API feed",
                charset=charset,
                cache_ttl=cache_ttl,
                cache_key="api",
                items_path=str(items_path or _write_items(tmp_path)),
            ),
        )
        app.dependency_overrides[feeds.get_settings] = lambda: settings
        app.dependency_overrides[feeds.get_feed_cache] = lambda: cache
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()


def test_health() -> None:
    response = TestClient(app).get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_rss_feed(make_client) -> None:
    response = make_client().get("/api/v1/feeds/rss.xml")

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/rss+xml; charset=utf-8"
    assert response.headers["x-feed-entries"] == "1"
    assert "<title>Hello</title>" in response.text


def test_atom_feed_keeps_markup(make_client) -> None:
    response = make_client().get("/api/v1/feeds/atom.xml")

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/atom+xml; charset=utf-8"
    assert "&lt;em&gt;Hello&lt;/em&gt;" in response.text


def test_cached_feed_served_from_cache(make_client, cache: MemoryFeedCache) -> None:
    client = make_client(cache_ttl=300)

    status = client.get("/api/v1/feeds/rss/status").json()
    assert status == {"cache_key": "api:rss", "cached": False}

    first = client.get("/api/v1/feeds/rss.xml")
    assert cache.has("api:rss") is True

    cache.put("api:rss", "<rss>stale</rss>", 300)
    second = client.get("/api/v1/feeds/rss.xml")

    assert first.status_code == second.status_code == 200
    assert second.text == "<rss>stale</rss>"
    assert client.get("/api/v1/feeds/rss/status").json()["cached"] is True


def test_zero_ttl_never_caches(make_client, cache: MemoryFeedCache) -> None:
    make_client(cache_ttl=0).get("/api/v1/feeds/atom.xml")

    assert cache.size() == 0


def test_negative_ttl_returns_document(make_client, cache: MemoryFeedCache) -> None:
    response = make_client(cache_ttl=-1).get("/api/v1/feeds/rss.xml")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/rss+xml")
    assert cache.size() == 0


def test_negative_ttl_document_uses_configured_charset(make_client) -> None:
    response = make_client(cache_ttl=-1, charset="iso-8859-1").get("/api/v1/feeds/atom.xml")

    assert response.headers["content-type"] == "application/atom+xml; charset=iso-8859-1"


def test_missing_items_file_is_404(make_client, tmp_path: Path) -> None:
    response = make_client(items_path=tmp_path / "nope.json").get("/api/v1/feeds/rss.xml")

    assert response.status_code == 404


def test_links(make_client) -> None:
    links = make_client().get("/api/v1/feeds/links").json()

    assert links["rss"] == (
        '<link rel="alternate" type="application/rss+xml" href="http://testserver/api/v1/feeds/rss.xml" />'
    )
    assert links["atom"] == (
        '<link rel="alternate" type="application/atom+xml" href="http://testserver/api/v1/feeds/atom.xml" />'
    )
