"""Tests for the per-request Slack bot session."""

from unittest.mock import AsyncMock

import pytest
from slack_sdk.errors import SlackApiError
from slack_sdk.web.async_client import AsyncWebClient

from announcement_bridge.slack.session import BotIdentity, BotSession, ChannelInfo, ThreadInfo

CHANNEL = "C0123456789"
TOPIC = "1700000000.000100"


def _make_slack_api_error(error_code: str) -> SlackApiError:
    """Build a SlackApiError whose response carries the given error code."""
    return SlackApiError(
        message=f"slack error: {error_code}",
        response={"ok": False, "error": error_code},
    )


@pytest.fixture()
def mock_client() -> AsyncMock:
    """An AsyncMock standing in for AsyncWebClient."""
    client = AsyncMock()
    client.auth_test = AsyncMock(
        return_value={"ok": True, "user_id": "U_BOT", "bot_id": "B_BOT", "team": "Acme"}
    )
    return client


def test_session_builds_client_from_token():
    """Without an injected client, an AsyncWebClient is created for the token."""
    session = BotSession("xoxb-test")
    assert isinstance(session.client, AsyncWebClient)
    assert session.client.token == "xoxb-test"


def test_sessions_do_not_share_clients():
    """Every session owns its client."""
    assert BotSession("xoxb-a").client is not BotSession("xoxb-b").client


# -- login --


async def test_login_resolves_with_identity(mock_client: AsyncMock):
    """The ready future resolves with the identity reported by auth.test."""
    session = BotSession("xoxb-test", client=mock_client)

    identity = await session.login()

    assert identity == BotIdentity(user_id="U_BOT", bot_id="B_BOT", team="Acme")
    mock_client.auth_test.assert_awaited_once()


async def test_login_returns_same_future(mock_client: AsyncMock):
    """Repeated login() calls share one authentication attempt."""
    session = BotSession("xoxb-test", client=mock_client)

    first = session.login()
    second = session.login()
    await first

    assert first is second
    mock_client.auth_test.assert_awaited_once()


async def test_login_failure_is_delivered_through_future(mock_client: AsyncMock):
    """An auth.test error is raised when awaiting the ready future."""
    mock_client.auth_test.side_effect = _make_slack_api_error("invalid_auth")
    session = BotSession("xoxb-bad", client=mock_client)

    with pytest.raises(SlackApiError):
        await session.login()


# -- fetch_channel --


async def test_fetch_channel(mock_client: AsyncMock):
    """conversations.info is mapped to ChannelInfo."""
    mock_client.conversations_info = AsyncMock(
        return_value={"ok": True, "channel": {"id": CHANNEL, "name": "releases"}}
    )
    session = BotSession("xoxb-test", client=mock_client)

    channel = await session.fetch_channel(CHANNEL)

    assert channel == ChannelInfo(id=CHANNEL, name="releases")
    mock_client.conversations_info.assert_awaited_once_with(channel=CHANNEL)


async def test_fetch_channel_not_found_raises(mock_client: AsyncMock):
    """channel_not_found is left for the caller to classify."""
    mock_client.conversations_info = AsyncMock(
        side_effect=_make_slack_api_error("channel_not_found")
    )
    session = BotSession("xoxb-test", client=mock_client)

    with pytest.raises(SlackApiError):
        await session.fetch_channel(CHANNEL)


# -- fetch_thread --


async def test_fetch_thread(mock_client: AsyncMock):
    """The thread parent is returned as ThreadInfo."""
    mock_client.conversations_replies = AsyncMock(
        return_value={"ok": True, "messages": [{"ts": TOPIC, "text": "Release notes"}]}
    )
    session = BotSession("xoxb-test", client=mock_client)

    thread = await session.fetch_thread(CHANNEL, TOPIC)

    assert thread == ThreadInfo(ts=TOPIC, text="Release notes")
    mock_client.conversations_replies.assert_awaited_once_with(
        channel=CHANNEL, ts=TOPIC, limit=1
    )


@pytest.mark.parametrize("error_code", ["thread_not_found", "message_not_found"])
async def test_fetch_thread_not_found_returns_none(mock_client: AsyncMock, error_code: str):
    """Missing threads are reported as None, not as errors."""
    mock_client.conversations_replies = AsyncMock(side_effect=_make_slack_api_error(error_code))
    session = BotSession("xoxb-test", client=mock_client)

    assert await session.fetch_thread(CHANNEL, TOPIC) is None


async def test_fetch_thread_empty_result_returns_none(mock_client: AsyncMock):
    """An empty message list means there is no such thread."""
    mock_client.conversations_replies = AsyncMock(return_value={"ok": True, "messages": []})
    session = BotSession("xoxb-test", client=mock_client)

    assert await session.fetch_thread(CHANNEL, TOPIC) is None


async def test_fetch_thread_other_errors_propagate(mock_client: AsyncMock):
    """Errors other than not-found are raised."""
    mock_client.conversations_replies = AsyncMock(side_effect=_make_slack_api_error("missing_scope"))
    session = BotSession("xoxb-test", client=mock_client)

    with pytest.raises(SlackApiError):
        await session.fetch_thread(CHANNEL, TOPIC)


# -- send --


async def test_send_posts_into_thread(mock_client: AsyncMock):
    """send() posts with thread_ts and returns the new message ts."""
    mock_client.chat_postMessage = AsyncMock(return_value={"ok": True, "ts": "1700000100.000200"})
    session = BotSession("xoxb-test", client=mock_client)
    payload = {"text": "v1.0.0: https://x/y", "attachments": [{"title": "v1.0.0"}]}

    ts = await session.send(CHANNEL, TOPIC, payload)

    assert ts == "1700000100.000200"
    mock_client.chat_postMessage.assert_awaited_once_with(
        channel=CHANNEL,
        thread_ts=TOPIC,
        text="v1.0.0: https://x/y",
        attachments=[{"title": "v1.0.0"}],
    )
