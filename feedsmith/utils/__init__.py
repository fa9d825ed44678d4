"""
Utilities package for feedsmith.

This package contains reusable helpers for:
- Content hashing
"""

from .hash_utils import (
    calculate_hash,
    content_urn,
)

__all__ = [
    "calculate_hash",
    "content_urn",
]
