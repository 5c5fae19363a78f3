"""Slack egress: per-request bot sessions and message rendering."""

from announcement_bridge.slack.blocks import build_message_payload
from announcement_bridge.slack.session import BotIdentity, BotSession, ChannelInfo, ThreadInfo

__all__ = [
    "BotIdentity",
    "BotSession",
    "ChannelInfo",
    "ThreadInfo",
    "build_message_payload",
]
