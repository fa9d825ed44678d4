"""
Feed domain models.

Represents feed items, channel metadata, and the JSON payload used to
load items from disk.

Responsibility: Typed records passed between the builder and the renderer
"""

from typing import Optional, Union
from pydantic import BaseModel, ConfigDict, Field


class Item(BaseModel):
    """
    A single feed entry as stored by a FeedBuilder.

    Immutable once added; RSS rendering works on sanitized copies.
    """

    model_config = ConfigDict(frozen=True)

    title: str = Field(description="Entry title (may contain HTML)")
    author: str = Field(default="", description="Author name")
    link: str = Field(default="", description="URL of the full content")
    pubdate: str = Field(description="Publication date, ISO-8601 with UTC offset")
    description: str = Field(default="", description="Short summary (may contain HTML)")
    content: str = Field(default="", description="Full content, possibly shortened")


class Channel(BaseModel):
    """Feed-level metadata assembled at render time"""

    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    logo: Optional[str] = None
    icon: Optional[str] = None
    link: Optional[str] = None
    pubdate: Optional[str] = None
    lang: Optional[str] = None


class ItemPayload(BaseModel):
    """
    Item as read from a JSON items file.

    ``pubdate`` is a unix timestamp or a free-form date string.
    """

    model_config = ConfigDict(extra="ignore")

    title: str
    author: str = ""
    link: str = ""
    pubdate: Union[int, float, str]
    description: str = ""
    content: str = ""
