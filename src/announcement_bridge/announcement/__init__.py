"""Announcement webhook: validation, description rewriting, composition, and delivery.

Public API:
    run_announcement(request) -> Delivered | Failure
        Runs one request through the full pipeline with a fresh bot session.
"""

from announcement_bridge.announcement.compose import compose_message, is_prerelease
from announcement_bridge.announcement.images import extract_images
from announcement_bridge.announcement.models import Delivered, Failure, FailureKind
from announcement_bridge.announcement.pipeline import (
    AnnouncementPipeline,
    PipelineState,
    run_announcement,
)
from announcement_bridge.announcement.validation import validate_request

__all__ = [
    "AnnouncementPipeline",
    "Delivered",
    "Failure",
    "FailureKind",
    "PipelineState",
    "compose_message",
    "extract_images",
    "is_prerelease",
    "run_announcement",
    "validate_request",
]
