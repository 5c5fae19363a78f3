"""Required-field gate for announcement requests."""

from announcement_bridge.announcement.failures import missing_field
from announcement_bridge.announcement.models import Failure
from announcement_bridge.models.announcement import AnnouncementRequest

# Checked in this order; the first missing field is reported.
REQUIRED_FIELDS: tuple[tuple[str, str], ...] = (
    ("credential", "Bot token"),
    ("channel_id", "Channel ID"),
    ("topic_id", "Topic ID"),
    ("title", "Post title"),
    ("link", "Post link"),
)


def validate_request(request: AnnouncementRequest) -> Failure | None:
    """Return a MissingField failure for the first absent or empty required field."""
    for field, label in REQUIRED_FIELDS:
        if not getattr(request, field):
            return missing_field(label, field)
    return None
