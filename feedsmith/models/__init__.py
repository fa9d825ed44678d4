"""
Models package for feedsmith.

This package contains the Pydantic models for:
- Feed items and channel metadata
- Item payloads loaded from JSON files
"""

from .feed import (
    Item,
    Channel,
    ItemPayload,
)

__all__ = [
    "Item",
    "Channel",
    "ItemPayload",
]
