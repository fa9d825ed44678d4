"""Utility helpers for generating deterministic content hashes.

Provides stable identifiers for feed entries that have no link to
serve as their id/guid.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any


def _normalized_json(payload: Any) -> str:
    """Serialize payload to a deterministic JSON string."""
    return json.dumps(
        payload,
        sort_keys=True,
        ensure_ascii=False,
        separators=(",", ":"),
    )


def calculate_hash(payload: Any) -> str:
    """Produce a SHA-256 hash for the given payload."""
    normalized = _normalized_json(payload)
    return hashlib.sha256(normalized.encode("utf-8")).hexdigest()


def content_urn(payload: Any) -> str:
    """Build a ``urn:sha256:`` identifier from the payload hash."""
    return f"urn:sha256:{calculate_hash(payload)}"
