"""Announcement webhook router."""

import asyncio
import logging

from fastapi import APIRouter, Response

from announcement_bridge.announcement.models import Failure
from announcement_bridge.announcement.pipeline import run_announcement
from announcement_bridge.config import get_settings
from announcement_bridge.errors import error_response, failure_response
from announcement_bridge.models.announcement import AnnouncementBody, AnnouncementRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="", tags=["announcement"])

# Pipelines still running after their request timed out
_abandoned: set[asyncio.Task] = set()


def _log_abandoned_outcome(task: asyncio.Task) -> None:
    _abandoned.discard(task)
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error("Abandoned announcement raised: %s", exc, exc_info=exc)
    else:
        logger.info("Abandoned announcement finished: %s", task.result())


@router.post("/channel/{channel}/topic/{topic}/announcement", status_code=204)
async def post_announcement(
    channel: str,
    topic: str,
    body: AnnouncementBody | None = None,
) -> Response:
    """Post an announcement into a thread.

    Responds 204 on success and with the JSON error envelope otherwise. When
    the request budget runs out the caller gets a 503; the pipeline keeps
    running and its outcome is only logged.
    """
    settings = get_settings()
    if not settings.is_production:
        logger.info(
            "Request body",
            extra={"body": body.model_dump(exclude={"token"}) if body else None},
        )

    request = AnnouncementRequest.from_body(channel, topic, body)
    task = asyncio.create_task(run_announcement(request))

    try:
        async with asyncio.timeout(settings.request_timeout):
            result = await asyncio.shield(task)
    except TimeoutError:
        if not task.done():
            logger.warning(
                "Announcement for %s/%s timed out after %.1fs",
                channel,
                topic,
                settings.request_timeout,
            )
            _abandoned.add(task)
            task.add_done_callback(_log_abandoned_outcome)
            return error_response(
                503, "Request timed out", code="request_timeout", name="TimeoutError"
            )
        if task.cancelled() or task.exception() is not None:
            # The pipeline itself failed, e.g. timed out on a downstream call
            raise
        # Deadline and completion landed in the same loop iteration
        result = task.result()

    if isinstance(result, Failure):
        return failure_response(result)

    return Response(status_code=204)
