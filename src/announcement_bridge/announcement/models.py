"""Result types for the announcement pipeline.

The pipeline returns one of these instead of raising, so the route decides
how each outcome maps to an HTTP response.
"""

from enum import Enum

from pydantic import BaseModel


class FailureKind(str, Enum):
    """Classified pipeline failures."""

    MISSING_FIELD = "MissingField"
    AUTHENTICATION = "AuthenticationError"
    NOT_FOUND = "NotFound"
    DELIVERY = "DeliveryError"


class Failure(BaseModel):
    """Returned when a pipeline stage fails. Terminal for the request."""

    kind: FailureKind
    message: str
    status: int
    code: str | None = None  # Machine-readable cause, e.g. "channel_not_found"
    subject: str | None = None  # What failed: a field name, "channel" or "topic"


class Delivered(BaseModel):
    """Returned after the announcement was posted."""

    channel_id: str
    topic_id: str
    message_ts: str
