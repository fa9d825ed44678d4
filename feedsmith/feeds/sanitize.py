"""
Markup Sanitization
===================
Plain-text conversion applied to RSS titles and descriptions.

Responsibility: Decode HTML entities and strip markup without ever failing
"""

import html
from typing import Optional

from bs4 import BeautifulSoup, ParserRejectedMarkup


def strip_markup(text: Optional[str]) -> str:
    """
    Decode HTML entities, then remove every markup tag.

    Malformed fragments are kept as literal text, so this never raises.

    Args:
        text: Text that may contain HTML

    Returns:
        Plain text (empty string for None)
    """
    if not text:
        return ""
    decoded = html.unescape(text)
    if "<" not in decoded:
        return decoded
    try:
        # entities are already decoded; keep the parser from decoding again
        soup = BeautifulSoup(decoded.replace("&", "&amp;"), "html.parser")
    except ParserRejectedMarkup:
        return decoded
    return soup.get_text()
