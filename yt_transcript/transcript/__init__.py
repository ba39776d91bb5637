"""Transcript retrieval core: data models, pacing and the fallback resolver."""

from __future__ import annotations

from yt_transcript.transcript.models import TranscriptSegment, VideoInfo, get_video_info
from yt_transcript.transcript.outcomes import AttemptOutcome, AttemptStatus, FailureKind
from yt_transcript.transcript.rate_limiter import RateLimiter, get_default_rate_limiter
from yt_transcript.transcript.resolver import TranscriptResolver

__all__ = [
    "AttemptOutcome",
    "AttemptStatus",
    "FailureKind",
    "RateLimiter",
    "TranscriptResolver",
    "TranscriptSegment",
    "VideoInfo",
    "get_default_rate_limiter",
    "get_video_info",
]
