"""
Configuration management for feedsmith.

Supports multiple environments (local, development, production) with
different cache backends and feed defaults.

Responsibility: Centralized configuration and environment management
"""

from enum import Enum
from typing import Optional, Any
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Deployment environment"""
    LOCAL = "local"
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class AppConfig(BaseSettings):
    """Application configuration"""

    # Environment
    environment: Environment = Field(default=Environment.LOCAL)
    debug: bool = Field(default=True)

    # Application metadata
    app_name: str = Field(default="feedsmith")
    app_version: str = Field(default="1.0.0")

    # Logging
    log_level: str = Field(default="INFO")

    # Render-time channel defaults
    language: Optional[str] = Field(default="en")
    url: Optional[str] = Field(default="http://localhost")

    # API settings
    api_host: str = Field(default="0.0.0.0")
    api_port: int = Field(default=8000)

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        """Accept log levels in any case"""
        if isinstance(v, str):
            return v.strip().upper()
        return v


class FeedConfig(BaseSettings):
    """Feed defaults used by the CLI and the API"""

    title: str = Field(default="My feed title")
    description: str = Field(default="My feed description")
    logo: Optional[str] = Field(default=None)
    icon: Optional[str] = Field(default=None)
    charset: str = Field(default="utf-8")

    # Content shortening
    shortening: bool = Field(default=False)
    text_limit: int = Field(default=150)

    # "datetime" (free text) or "timestamp" (unix epoch)
    date_format: str = Field(default="datetime")

    # Caching (seconds; 0 disables, negative returns the bare document)
    cache_ttl: int = Field(default=0)
    cache_key: str = Field(default="laravel-feed")

    # JSON file holding the feed items
    items_path: Optional[str] = Field(default=None)

    model_config = SettingsConfigDict(
        env_prefix="FEED_",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("date_format")
    @classmethod
    def check_date_format(cls, v: str) -> str:
        """Only the two supported date modes are allowed"""
        if v not in ("datetime", "timestamp"):
            raise ValueError(f"Unsupported date format: {v}")
        return v


class RedisConfig(BaseSettings):
    """Redis cache configuration"""

    enabled: bool = Field(default=False)
    host: str = Field(default="localhost")
    port: int = Field(default=6379)
    db: int = Field(default=0)
    password: Optional[str] = Field(default=None)

    socket_timeout: int = Field(default=5)
    socket_connect_timeout: int = Field(default=5)

    # Prefix for every feed key written to Redis
    key_prefix: str = Field(default="feedsmith:")

    model_config = SettingsConfigDict(
        env_prefix="REDIS_",
        case_sensitive=False,
        extra="ignore"
    )

    @property
    def connection_string(self) -> str:
        """Build Redis connection string"""
        auth = f":{self.password}@" if self.password else ""
        return f"redis://{auth}{self.host}:{self.port}/{self.db}"


# Section aliases accepted by Settings.get()
_SECTION_ALIASES = {"application": "app"}


class Settings(BaseSettings):
    """
    Global settings container.

    Loads configuration from:
    1. Environment variables
    2. .env file
    3. Default values

    Also acts as the configuration source handed to a FeedBuilder:
    ``settings.get("application.url")`` resolves ``settings.app.url``.

    Example:
        settings = Settings()
        settings.get("application.language")  # "en"

        settings = Settings(
            app=AppConfig(url="https://example.org", language="fr"),
            redis=RedisConfig(enabled=True, host="cache.internal")
        )
    """

    app: AppConfig = Field(default_factory=AppConfig)
    feed: FeedConfig = Field(default_factory=FeedConfig)
    redis: RedisConfig = Field(default_factory=RedisConfig)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    def get(self, key: str, default: Any = None) -> Any:
        """
        Look up a dotted configuration key.

        Args:
            key: Key such as "application.language" or "feed.title"
            default: Value returned when the key does not resolve

        Returns:
            Configured value or default
        """
        section_name, _, field_name = key.partition(".")
        section_name = _SECTION_ALIASES.get(section_name, section_name)
        section = getattr(self, section_name, None)
        if section is None or not field_name:
            return default
        value = getattr(section, field_name, None)
        return default if value is None else value

    @property
    def redis_url(self) -> Optional[str]:
        """Get Redis connection URL when the Redis cache is enabled"""
        if self.redis.enabled:
            return self.redis.connection_string
        return None

    @classmethod
    def for_production(cls) -> "Settings":
        """
        Create settings for production (Redis-backed feed cache).

        Requires environment variables:
        - APP_URL, APP_LANGUAGE
        - REDIS_HOST, REDIS_PORT, REDIS_PASSWORD
        """
        return cls(
            app=AppConfig(
                environment=Environment.PRODUCTION,
                debug=False,
                log_level="INFO"
            ),
            redis=RedisConfig(
                enabled=True,
                # Host/port/password from env vars
            )
        )


# Global settings instance
settings = Settings()
