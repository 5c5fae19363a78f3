"""Per-request Slack bot session.

Every announcement logs in with the token it carries, so each request gets its
own AsyncWebClient instead of a cached singleton. Login runs in a task and
signals completion through a one-shot future that the pipeline awaits.
"""

import asyncio
import logging

from pydantic import BaseModel
from slack_sdk.errors import SlackApiError
from slack_sdk.web.async_client import AsyncWebClient

logger = logging.getLogger(__name__)

# conversations.replies error codes meaning the thread does not exist
THREAD_NOT_FOUND_ERRORS = frozenset({"thread_not_found", "message_not_found"})


class BotIdentity(BaseModel):
    """Who the session is logged in as (from auth.test)."""

    user_id: str
    bot_id: str | None = None
    team: str | None = None


class ChannelInfo(BaseModel):
    id: str
    name: str | None = None


class ThreadInfo(BaseModel):
    ts: str
    text: str = ""


class BotSession:
    """A Slack session authenticated with one bot token."""

    def __init__(self, token: str, client: AsyncWebClient | None = None):
        self.client = client or AsyncWebClient(token=token)
        self._ready: asyncio.Future[BotIdentity] | None = None
        self._login_task: asyncio.Task | None = None

    def login(self) -> "asyncio.Future[BotIdentity]":
        """Start authenticating and return the future resolved when the session is ready.

        The future carries the bot identity, or the exception raised by auth.test.
        Calling login() again returns the same future.
        """
        if self._ready is None:
            loop = asyncio.get_running_loop()
            self._ready = loop.create_future()
            self._login_task = loop.create_task(self._authenticate())
            self._login_task.add_done_callback(self._notify_ready)
        return self._ready

    async def _authenticate(self) -> BotIdentity:
        response = await self.client.auth_test()
        return BotIdentity(
            user_id=response["user_id"],
            bot_id=response.get("bot_id"),
            team=response.get("team"),
        )

    def _notify_ready(self, task: asyncio.Task) -> None:
        if task.cancelled():
            self._ready.cancel()
            return
        exc = task.exception()
        if self._ready.done():
            # Nobody is waiting any more
            return
        if exc is not None:
            self._ready.set_exception(exc)
        else:
            self._ready.set_result(task.result())

    async def fetch_channel(self, channel_id: str) -> ChannelInfo:
        """Look up a conversation by id.

        Raises SlackApiError (``channel_not_found`` for unknown ids).
        """
        response = await self.client.conversations_info(channel=channel_id)
        channel = response["channel"]
        return ChannelInfo(id=channel["id"], name=channel.get("name"))

    async def fetch_thread(self, channel_id: str, topic_id: str) -> ThreadInfo | None:
        """Look up a thread by its parent message ts within a channel.

        Returns None when the thread does not exist. Other Slack errors propagate.
        """
        try:
            response = await self.client.conversations_replies(
                channel=channel_id, ts=topic_id, limit=1
            )
        except SlackApiError as exc:
            if exc.response is not None and exc.response.get("error") in THREAD_NOT_FOUND_ERRORS:
                return None
            raise

        messages = response.get("messages") or []
        if not messages:
            return None
        parent = messages[0]
        return ThreadInfo(ts=parent.get("ts", topic_id), text=parent.get("text", ""))

    async def send(self, channel_id: str, topic_id: str, payload: dict) -> str:
        """Post a message into the thread and return its ts."""
        response = await self.client.chat_postMessage(
            channel=channel_id,
            thread_ts=topic_id,
            **payload,
        )
        return response["ts"]
