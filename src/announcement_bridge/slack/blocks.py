"""Render an OutboundMessage as chat.postMessage arguments.

The announcement itself becomes one colored message attachment (title, link,
author, timestamp, body). Images extracted from the description follow as
``image`` blocks, titled after their placeholder number.
"""

import logging
from urllib.parse import urlsplit

from announcement_bridge.models.message import OutboundMessage

logger = logging.getLogger(__name__)

# Slack rejects block titles and alt text longer than this
_TEXT_LIMIT = 2000


def _truncate(text: str, limit: int = _TEXT_LIMIT) -> str:
    return text if len(text) <= limit else text[: limit - 3] + "..."


def build_embed(message: OutboundMessage) -> dict:
    """Build the legacy attachment carrying the announcement."""
    embed: dict = {
        "fallback": f"{message.title}: {message.url}",
        "color": message.color,
        "title": message.title,
        "title_link": message.url,
        "author_name": message.author_name,
        "text": message.text,
        "ts": int(message.timestamp.timestamp()),
        "mrkdwn_in": ["text"],
    }
    if message.author_icon:
        embed["author_icon"] = message.author_icon
    return embed


def is_absolute_url(url: str) -> bool:
    return urlsplit(url).scheme in {"http", "https"}


def build_image_blocks(message: OutboundMessage) -> list[dict]:
    """One image block per attachment. Slack only accepts absolute http(s) image URLs,
    so other attachments are skipped; their text placeholders keep their numbers.
    """
    blocks: list[dict] = []
    for index, image in enumerate(message.attachments, start=1):
        if not is_absolute_url(image.url):
            logger.warning("Skipping image%d with non-absolute URL: %s", index, image.url)
            continue
        blocks.append(
            {
                "type": "image",
                "image_url": image.url,
                "alt_text": _truncate(image.alt_text),
                "title": {"type": "plain_text", "text": f"image{index}"},
            }
        )
    return blocks


def build_message_payload(message: OutboundMessage) -> dict:
    """Return keyword arguments for ``chat_postMessage`` (channel and thread excluded)."""
    payload: dict = {
        "text": f"{message.title}: {message.url}",
        "attachments": [build_embed(message)],
    }
    blocks = build_image_blocks(message)
    if blocks:
        payload["blocks"] = blocks
    return payload
