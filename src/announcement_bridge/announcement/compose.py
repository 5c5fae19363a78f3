"""Outbound message composition: color selection, author fallback, description rewrite."""

from datetime import datetime, timezone

from announcement_bridge.announcement.images import extract_images
from announcement_bridge.config import get_settings
from announcement_bridge.models.announcement import AnnouncementRequest
from announcement_bridge.models.message import OutboundMessage

PRERELEASE_MARKERS = ("-pre", "-rc")

PRERELEASE_COLOR = "#000080"  # navy
DEFAULT_COLOR = "#5865F2"  # blurple


def is_prerelease(title: str) -> bool:
    """True if the title contains a prerelease marker anywhere."""
    return any(marker in title for marker in PRERELEASE_MARKERS)


def pick_color(title: str) -> str:
    return PRERELEASE_COLOR if is_prerelease(title) else DEFAULT_COLOR


def compose_message(
    request: AnnouncementRequest, now: datetime | None = None
) -> OutboundMessage:
    """Build the outbound message for an already validated request.

    Args:
        request: Validated announcement request (title and link present).
        now: Processing time; defaults to the current UTC time.
    """
    settings = get_settings()
    content = extract_images(request.description or "", request.base_url)

    return OutboundMessage(
        title=request.title,
        url=request.link,
        color=pick_color(request.title),
        author_name=request.author or settings.default_author_name,
        author_icon=settings.default_author_icon or None,
        timestamp=now or datetime.now(timezone.utc),
        text=content.text,
        attachments=content.images,
    )
