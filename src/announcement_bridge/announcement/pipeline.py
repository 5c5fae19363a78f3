"""Announcement pipeline: validate, log in, resolve destination, compose, send.

Each stage either hands its result to the next or ends the run with a
Failure. Stages never retry; the first failure is terminal for the request.
"""

import logging
from collections.abc import Callable
from enum import Enum

from announcement_bridge.announcement.compose import compose_message
from announcement_bridge.announcement.failures import (
    CLIENT_ERRORS,
    authentication_failed,
    delivery_failed,
    not_found,
    slack_error_code,
)
from announcement_bridge.announcement.models import Delivered, Failure
from announcement_bridge.announcement.validation import validate_request
from announcement_bridge.models.announcement import AnnouncementRequest
from announcement_bridge.slack.blocks import build_message_payload
from announcement_bridge.slack.session import BotSession

logger = logging.getLogger(__name__)


class PipelineState(str, Enum):
    """Pipeline progress. FAILED is reachable from every non-terminal state."""

    VALIDATING = "validating"
    AUTHENTICATING = "authenticating"
    RESOLVING_CHANNEL = "resolving_channel"
    RESOLVING_TOPIC = "resolving_topic"
    COMPOSING = "composing"
    SENDING = "sending"
    DONE = "done"
    FAILED = "failed"


class AnnouncementPipeline:
    """Runs one announcement request end to end with its own bot session."""

    def __init__(
        self,
        request: AnnouncementRequest,
        session_factory: Callable[[str], BotSession] = BotSession,
    ):
        self.request = request
        self.session_factory = session_factory
        self.state = PipelineState.VALIDATING

    def _enter(self, state: PipelineState) -> None:
        logger.debug("Pipeline %s -> %s", self.state.value, state.value)
        self.state = state

    def _fail(self, failure: Failure) -> Failure:
        level = logging.ERROR if failure.status >= 500 else logging.WARNING
        logger.log(
            level,
            "Announcement failed while %s: %s (%s)",
            self.state.value,
            failure.message,
            failure.kind.value,
        )
        self.state = PipelineState.FAILED
        return failure

    async def run(self) -> Delivered | Failure:
        """Execute all stages. Returns Delivered on success, Failure otherwise.

        Slack errors other than "not found" during the channel and thread
        lookups are not classified and propagate to the caller.
        """
        try:
            return await self._run()
        except Exception:
            self.state = PipelineState.FAILED
            raise

    async def _run(self) -> Delivered | Failure:
        request = self.request

        # 1. Validate
        failure = validate_request(request)
        if failure is not None:
            return self._fail(failure)

        # 2. Authenticate and wait for the session-ready signal
        self._enter(PipelineState.AUTHENTICATING)
        session = self.session_factory(request.credential)
        try:
            identity = await session.login()
        except CLIENT_ERRORS as exc:
            return self._fail(authentication_failed(exc))
        logger.info("Bot is ready as %s", identity.user_id)

        # 3. Resolve channel
        self._enter(PipelineState.RESOLVING_CHANNEL)
        try:
            channel = await session.fetch_channel(request.channel_id)
        except CLIENT_ERRORS as exc:
            if slack_error_code(exc) == "channel_not_found":
                return self._fail(not_found("channel", request.channel_id))
            raise
        logger.info("Found channel '%s' (%s)", channel.name, request.channel_id)

        # 4. Resolve topic
        self._enter(PipelineState.RESOLVING_TOPIC)
        thread = await session.fetch_thread(request.channel_id, request.topic_id)
        if thread is None:
            return self._fail(not_found("topic", request.topic_id))
        logger.info("Found topic %s in channel %s", thread.ts, request.channel_id)

        # 5. Compose
        self._enter(PipelineState.COMPOSING)
        message = compose_message(request)
        payload = build_message_payload(message)

        # 6. Send
        self._enter(PipelineState.SENDING)
        try:
            message_ts = await session.send(request.channel_id, request.topic_id, payload)
        except CLIENT_ERRORS as exc:
            return self._fail(delivery_failed(exc))

        self._enter(PipelineState.DONE)
        logger.info(
            "Message has been sent successfully: %s (%d image(s))",
            message_ts,
            len(message.attachments),
        )
        return Delivered(
            channel_id=request.channel_id,
            topic_id=request.topic_id,
            message_ts=message_ts,
        )


async def run_announcement(
    request: AnnouncementRequest,
    session_factory: Callable[[str], BotSession] = BotSession,
) -> Delivered | Failure:
    """Convenience wrapper: run a fresh pipeline for one request."""
    return await AnnouncementPipeline(request, session_factory).run()
