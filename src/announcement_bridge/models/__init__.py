"""Data models for the announcement bridge."""

from announcement_bridge.models.announcement import AnnouncementBody, AnnouncementRequest
from announcement_bridge.models.content import ExtractedContent, ImageAttachment
from announcement_bridge.models.message import OutboundMessage

__all__ = [
    "AnnouncementBody",
    "AnnouncementRequest",
    "ExtractedContent",
    "ImageAttachment",
    "OutboundMessage",
]
