"""Common data models for timed caption data.

This module defines pydantic models shared by the caption sources, the
resolver, the formatters and the REST API.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from yt_transcript.errors import InvalidInputError
from yt_transcript.utils.constant import YOUTUBE_THUMBNAIL_URL

__all__ = [
    "TranscriptSegment",
    "VideoInfo",
    "get_video_info",
]


class TranscriptSegment(BaseModel):
    """One captioned unit of a video, timed in whole seconds."""

    text: str = Field(..., description="Caption text, trimmed.")
    offset: int = Field(..., ge=0, description="Start time within the video (seconds).")
    duration: int = Field(..., ge=0, description="Span of the caption (seconds).")


class VideoInfo(BaseModel):
    """Video identifier plus placeholder presentation data.

    Only ``video_id`` and the thumbnail URL shape are meaningful; title and
    duration are never looked up.
    """

    video_id: str
    title: str
    duration: int = 0
    thumbnail: str


def get_video_info(video_id: str) -> VideoInfo:
    """Build placeholder ``VideoInfo`` for *video_id*.

    Raises:
        InvalidInputError: If ``video_id`` is empty or not a string.
    """
    if not video_id or not isinstance(video_id, str):
        raise InvalidInputError("Invalid video ID provided")
    return VideoInfo(
        video_id=video_id,
        title=f"Video {video_id}",
        duration=0,
        thumbnail=YOUTUBE_THUMBNAIL_URL.format(video_id=video_id),
    )
