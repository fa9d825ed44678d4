"""
Feed Errors
===========
Exceptions raised while building, caching, and rendering feeds.
"""

from typing import Optional


class FeedError(Exception):
    """Base class for feed errors"""


class InvalidDateFormat(FeedError, ValueError):
    """Raised when a publication date cannot be normalized"""

    def __init__(self, value: object, mode: str):
        super().__init__(f"Cannot parse {value!r} as a {mode} date")
        self.value = value
        self.mode = mode


class CacheUnavailable(FeedError):
    """Raised when the cache backend cannot be reached"""

    def __init__(self, message: str, last_exception: Optional[Exception] = None):
        super().__init__(message)
        self.last_exception = last_exception


class RenderEngineFailure(FeedError):
    """Raised when the render engine rejects a feed document"""

    def __init__(self, message: str, format: Optional[str] = None):
        super().__init__(message)
        self.format = format
