"""Exception hierarchy for transcript resolution and rendering."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from yt_transcript.transcript.outcomes import FailureKind


class TranscriptError(Exception):
    """Base class for every error raised by yt-transcript."""


class InvalidInputError(TranscriptError, ValueError):
    """Raised for a malformed or absent video id.

    Never retried; surfaced immediately to the caller.
    """


class ValidationError(InvalidInputError):
    """Raised when malformed segment data reaches the format renderer."""


class PermanentUnavailableError(TranscriptError):
    """Raised when captions are disabled or the video is private/unavailable.

    Detected on the first caption scraper attempt; remaining fallbacks are
    skipped.
    """

    def __init__(self, message: str, kind: FailureKind) -> None:
        super().__init__(message)
        self.kind = kind


class NotFoundError(TranscriptError):
    """Raised when every fallback strategy produced no transcript."""

    def __init__(self, message: str, video_id: str) -> None:
        super().__init__(message)
        self.video_id = video_id


class UpstreamTimeoutError(TranscriptError):
    """Raised when a caller-imposed deadline expires during resolution."""


__all__ = [
    "InvalidInputError",
    "NotFoundError",
    "PermanentUnavailableError",
    "TranscriptError",
    "UpstreamTimeoutError",
    "ValidationError",
]
