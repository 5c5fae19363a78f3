"""Image extraction from markdown-style announcement descriptions."""

import logging
import re
from urllib.parse import urljoin

from announcement_bridge.models.content import ExtractedContent, ImageAttachment

logger = logging.getLogger(__name__)

# Matches ![alt](url). Alt and URL are non-empty and single-line;
# alt may not contain "]" and the URL may not contain ")".
IMAGE_PATTERN = re.compile(r"!\[([^\]\r\n]+)\]\(([^)\r\n]+)\)")


def resolve_image_url(url: str, base_url: str | None = None) -> str:
    """Resolve a relative image URL against base_url. Absolute URLs are returned as-is."""
    if not base_url:
        return url
    return urljoin(base_url, url)


def extract_images(description: str, base_url: str | None = None) -> ExtractedContent:
    """Pull image markup out of a description.

    Each ``![alt](url)`` becomes ``[image<N>:alt]`` in the returned text, and
    the image is appended to ``images`` so that placeholder N refers to
    ``images[N - 1]``. Everything else, including malformed markup, is kept
    verbatim.
    """
    images: list[ImageAttachment] = []

    def _replace(match: re.Match) -> str:
        alt, url = match.group(1), match.group(2)
        images.append(ImageAttachment(url=resolve_image_url(url, base_url), alt_text=alt))
        return f"[image{len(images)}:{alt}]"

    text = IMAGE_PATTERN.sub(_replace, description or "")

    if images:
        logger.info(
            "Extracted %d image(s) from description: %s",
            len(images),
            [image.url for image in images],
        )

    return ExtractedContent(text=text, images=images)
