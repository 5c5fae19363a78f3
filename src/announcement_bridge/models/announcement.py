"""Announcement request models: the raw JSON body and the merged request."""

from pydantic import BaseModel, ConfigDict, Field


class AnnouncementBody(BaseModel):
    """JSON body of POST /channel/{channel}/topic/{topic}/announcement.

    Every field is optional here so that a missing value is reported by the
    request validator with a field-specific message, not a schema error.
    """

    model_config = ConfigDict(populate_by_name=True)

    base_url: str | None = Field(default=None, alias="baseUrl")
    token: str | None = None
    title: str | None = None
    link: str | None = None
    author: str | None = None
    description: str | None = None


class AnnouncementRequest(BaseModel):
    """Path parameters and body of one announcement, merged."""

    channel_id: str | None = None
    topic_id: str | None = None  # Slack ts of the thread's parent message
    credential: str | None = None  # Bot token used for this request only
    title: str | None = None
    link: str | None = None
    author: str | None = None
    description: str | None = None
    base_url: str | None = None  # Resolves relative image URLs

    @classmethod
    def from_body(
        cls, channel_id: str | None, topic_id: str | None, body: AnnouncementBody | None
    ) -> "AnnouncementRequest":
        """Combine route parameters with a (possibly absent) JSON body."""
        body = body or AnnouncementBody()
        return cls(
            channel_id=channel_id,
            topic_id=topic_id,
            credential=body.token,
            title=body.title,
            link=body.link,
            author=body.author,
            description=body.description,
            base_url=body.base_url,
        )
