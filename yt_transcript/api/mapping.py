"""Mapping utilities between transcript errors/formats and HTTP responses."""

from __future__ import annotations

import re
from typing import NamedTuple

from yt_transcript.errors import (
    NotFoundError,
    PermanentUnavailableError,
    UpstreamTimeoutError,
)
from yt_transcript.formatting import get_formatter_spec
from yt_transcript.transcript.outcomes import FailureKind


class ErrorClassification(NamedTuple):
    """HTTP status code and short label for an error."""

    status_code: int
    label: str


SERVER_ERROR = ErrorClassification(500, "Server error")

# Checked in order against the lower-cased error message; first hit wins.
MESSAGE_RULES: tuple[tuple[tuple[str, ...], ErrorClassification], ...] = (
    (
        (
            "video is unavailable",
            "video is private",
            "video is restricted",
            "video has been removed",
        ),
        ErrorClassification(404, "Video unavailable"),
    ),
    (
        (
            "no transcript available",
            "captions are disabled",
            "captions or transcripts enabled",
            "transcript is disabled",
            "transcripts are disabled",
        ),
        ErrorClassification(404, "No transcript"),
    ),
    (("live stream", "live video"), ErrorClassification(400, "Live video")),
    (("shorts",), ErrorClassification(400, "Shorts")),
    (("rate limit", "too many requests"), ErrorClassification(429, "Rate limited")),
    (("invalid youtube video id format",), ErrorClassification(400, "Invalid format")),
)

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9\-_]")


def classify_message(message: str) -> ErrorClassification:
    """Map an error message to a status code by phrase matching.

    Args:
        message: Error message; compared case-insensitively.

    Returns:
        The first matching classification, or ``SERVER_ERROR``.
    """
    lowered = message.lower()
    for phrases, classification in MESSAGE_RULES:
        if any(phrase in lowered for phrase in phrases):
            return classification
    return SERVER_ERROR


def classify_error(exc: BaseException) -> ErrorClassification:
    """Map an exception raised during resolution to an HTTP classification.

    Typed resolver errors are mapped directly; anything else falls back to
    :func:`classify_message`.
    """
    if isinstance(exc, UpstreamTimeoutError):
        return ErrorClassification(504, "Timeout")
    if isinstance(exc, NotFoundError):
        return ErrorClassification(404, "No transcript")
    if isinstance(exc, PermanentUnavailableError):
        if exc.kind is FailureKind.DISABLED:
            return ErrorClassification(404, "No transcript")
        return ErrorClassification(404, "Video unavailable")
    return classify_message(str(exc))


def sanitize_filename(title: str) -> str:
    """Replace every character outside ``[a-zA-Z0-9-_]`` with ``_``."""
    return _UNSAFE_FILENAME_CHARS.sub("_", title)


def content_type_for(format_name: str) -> str:
    """Return the MIME type registered for *format_name* (``text/plain`` fallback)."""
    return get_formatter_spec(format_name).content_type


def content_disposition(title: str, format_name: str) -> str:
    """Build the attachment ``Content-Disposition`` value for a download.

    Args:
        title: Requested file title, sanitized before use.
        format_name: Validated export format name.

    Returns:
        ``attachment; filename="<sanitized title>.<format>"``.
    """
    filename = f"{sanitize_filename(title)}.{format_name.lower()}"
    return f'attachment; filename="{filename}"'
