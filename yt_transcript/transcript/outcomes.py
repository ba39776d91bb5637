"""Tagged results of a single caption retrieval attempt.

Caption sources never raise for upstream problems. They report one of three
outcomes and the resolver's fallback driver branches on the tag.
"""

from __future__ import annotations

import enum
from collections.abc import Sequence
from dataclasses import dataclass, field

from yt_transcript.transcript.models import TranscriptSegment

__all__ = [
    "PERMANENT_FAILURE_MESSAGES",
    "AttemptOutcome",
    "AttemptStatus",
    "FailureKind",
]


class AttemptStatus(enum.Enum):
    """Result tag of one attempt."""

    SUCCESS = "success"
    EMPTY = "empty"
    FAILURE = "failure"


class FailureKind(enum.Enum):
    """Why an attempt failed.

    ``DISABLED``, ``UNAVAILABLE`` and ``PRIVATE`` describe the video itself
    and do not change between attempts.
    """

    DISABLED = "disabled"
    UNAVAILABLE = "unavailable"
    PRIVATE = "private"
    TRANSIENT = "transient"
    UNKNOWN = "unknown"

    @property
    def is_permanent(self) -> bool:
        """Whether the failure describes the video rather than the request."""
        return self in _PERMANENT_KINDS


_PERMANENT_KINDS = frozenset({FailureKind.DISABLED, FailureKind.UNAVAILABLE, FailureKind.PRIVATE})

# User-facing messages for the early-exit conditions.
PERMANENT_FAILURE_MESSAGES: dict[FailureKind, str] = {
    FailureKind.DISABLED: "Transcripts are disabled for this video",
    FailureKind.UNAVAILABLE: "Video is unavailable or has been removed",
    FailureKind.PRIVATE: "Video is private or restricted",
}


@dataclass(frozen=True)
class AttemptOutcome:
    """Outcome of one attempt: ``Success(segments) | Empty | Failure(kind)``.

    Attributes:
        status: Result tag.
        segments: Normalized segments; non-empty only for ``SUCCESS``.
        failure: Failure classification for ``FAILURE`` outcomes.
        reason: Short human-readable explanation for logs.

    """

    status: AttemptStatus
    segments: list[TranscriptSegment] = field(default_factory=list)
    failure: FailureKind | None = None
    reason: str = ""

    @classmethod
    def success(cls, segments: Sequence[TranscriptSegment]) -> AttemptOutcome:
        """Wrap *segments*; an empty sequence becomes an ``EMPTY`` outcome."""
        if not segments:
            return cls.empty("no segments returned")
        return cls(status=AttemptStatus.SUCCESS, segments=list(segments))

    @classmethod
    def empty(cls, reason: str = "") -> AttemptOutcome:
        return cls(status=AttemptStatus.EMPTY, reason=reason)

    @classmethod
    def failed(cls, kind: FailureKind, reason: str = "") -> AttemptOutcome:
        return cls(status=AttemptStatus.FAILURE, failure=kind, reason=reason)

    @property
    def succeeded(self) -> bool:
        return self.status is AttemptStatus.SUCCESS
