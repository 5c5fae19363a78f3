"""Description extraction result: rewritten text plus positional image attachments."""

from pydantic import BaseModel, Field


class ImageAttachment(BaseModel):
    """An image referenced from the description, delivered alongside the message."""

    url: str  # Absolute when a base URL was available
    alt_text: str


class ExtractedContent(BaseModel):
    """Description text with image markup replaced by ``[image<N>:<alt>]`` placeholders.

    The Nth placeholder (1-indexed) refers to ``images[N - 1]``.
    """

    text: str = ""
    images: list[ImageAttachment] = Field(default_factory=list)
