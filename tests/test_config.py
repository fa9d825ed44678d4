import pytest
from pydantic import ValidationError

from feedsmith.config import AppConfig, FeedConfig, RedisConfig, Settings


def test_get_resolves_application_alias() -> None:
    settings = Settings(app=AppConfig(language="de", url="https://example.de"))

    assert settings.get("application.language") == "de"
    assert settings.get("application.url") == "https://example.de"
    assert settings.get("app.url") == "https://example.de"


def test_get_returns_default_for_unknown_keys() -> None:
    settings = Settings()

    assert settings.get("application.missing") is None
    assert settings.get("nosection.key", "fallback") == "fallback"
    assert settings.get("application") is None


def test_get_returns_default_when_value_unset() -> None:
    settings = Settings(app=AppConfig(language=None))

    assert settings.get("application.language", "en") == "en"


def test_feed_defaults() -> None:
    feed = FeedConfig()

    assert feed.title == "My feed title"
    assert feed.description == "My feed description"
    assert feed.charset == "utf-8"
    assert feed.shortening is False
    assert feed.text_limit == 150
    assert feed.date_format == "datetime"
    assert feed.cache_ttl == 0
    assert feed.cache_key == "laravel-feed"


def test_feed_config_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("FEED_TITLE", "Env feed")
    monkeypatch.setenv("FEED_CACHE_TTL", "120")
    monkeypatch.setenv("FEED_SHORTENING", "true")

    feed = FeedConfig()

    assert feed.title == "Env feed"
    assert feed.cache_ttl == 120
    assert feed.shortening is True


def test_feed_config_rejects_unknown_date_format() -> None:
    with pytest.raises(ValidationError):
        FeedConfig(date_format="epoch")


def test_log_level_is_normalized() -> None:
    assert AppConfig(log_level="debug").log_level == "DEBUG"


def test_redis_connection_string_and_url() -> None:
    redis_config = RedisConfig(enabled=True, host="cache", port=6380, db=2, password="s3cret")

    assert redis_config.connection_string == "redis://:s3cret@cache:6380/2"
    assert Settings(redis=redis_config).redis_url == "redis://:s3cret@cache:6380/2"
    assert Settings(redis=RedisConfig(enabled=False)).redis_url is None
