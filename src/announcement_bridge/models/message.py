"""Outbound chat message model."""

from datetime import datetime

from pydantic import BaseModel, Field

from announcement_bridge.models.content import ImageAttachment


class OutboundMessage(BaseModel):
    """A composed announcement, ready to be rendered for the chat platform."""

    title: str
    url: str
    color: str  # Hex color of the attachment bar, e.g. "#5865F2"
    author_name: str
    author_icon: str | None = None
    timestamp: datetime
    text: str = ""
    attachments: list[ImageAttachment] = Field(default_factory=list)
