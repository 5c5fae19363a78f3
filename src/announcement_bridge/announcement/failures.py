"""Constructors for pipeline failures, including Slack error classification."""

import aiohttp
from slack_sdk.errors import SlackApiError, SlackClientError

from announcement_bridge.announcement.models import Failure, FailureKind

# Errors raised by the Slack client or its transport
CLIENT_ERRORS = (SlackClientError, aiohttp.ClientError, TimeoutError)

# auth.test error codes that mean the caller's credential is unusable
_CREDENTIAL_ERRORS = frozenset(
    {"invalid_auth", "not_authed", "account_inactive", "token_revoked", "token_expired"}
)


def slack_error_code(exc: BaseException) -> str | None:
    """Return the Slack API error code carried by an exception, if any."""
    if isinstance(exc, SlackApiError) and exc.response is not None:
        return exc.response.get("error") or None
    return None


def missing_field(label: str, field: str) -> Failure:
    return Failure(
        kind=FailureKind.MISSING_FIELD,
        message=f"{label} is required.",
        status=400,
        code="missing_field",
        subject=field,
    )


def authentication_failed(exc: BaseException) -> Failure:
    """Classify a login failure: bad credential (401), network (503), other (502)."""
    code = slack_error_code(exc)
    if code in _CREDENTIAL_ERRORS:
        status = 401
    elif isinstance(exc, SlackApiError):
        status = 502
    else:
        status = 503
        code = "network_error"
    return Failure(
        kind=FailureKind.AUTHENTICATION,
        message=f"Bot login failed: {code or exc}",
        status=status,
        code=code,
        subject="token",
    )


def not_found(subject: str, identifier: str, code: str | None = None) -> Failure:
    return Failure(
        kind=FailureKind.NOT_FOUND,
        message=f"{subject.capitalize()} with id {identifier} not found",
        status=404,
        code=code or f"{subject}_not_found",
        subject=subject,
    )


def delivery_failed(exc: BaseException) -> Failure:
    """Any send error (rate limit, permission, payload size, network) is a 502."""
    code = slack_error_code(exc) or type(exc).__name__
    return Failure(
        kind=FailureKind.DELIVERY,
        message=f"Message could not be delivered: {code}",
        status=502,
        code=code,
        subject="message",
    )
