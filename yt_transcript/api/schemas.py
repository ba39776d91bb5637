"""Request and response schemas for the transcript REST API."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from yt_transcript.transcript.models import TranscriptSegment


class TranscriptResponse(BaseModel):
    """Successful ``GET /api/youtube/transcript`` payload."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    video_id: str = Field(..., alias="videoId")
    transcript: list[TranscriptSegment]


class ErrorResponse(BaseModel):
    """Error payload shared by every route.

    ``details`` is only populated for unexpected server errors.
    """

    success: bool = False
    error: str = Field(..., description="Short error label, e.g. 'No transcript'.")
    message: str = Field(..., description="Human-readable explanation.")
    details: str | None = None


class SearchRequest(BaseModel):
    """Body of ``POST /api/youtube/search``.

    ``url`` is optional at the schema level so that a missing value yields the
    API's own 400 error instead of a framework validation error.
    """

    url: str | None = Field(default=None, description="YouTube video URL or id.")


class SearchVideoData(BaseModel):
    """Video details returned by the search route."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    video_id: str = Field(..., alias="videoId")
    title: str
    url: str
    duration: int = 0
    thumbnail: str


class SearchResponse(BaseModel):
    """Successful ``POST /api/youtube/search`` payload."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    type: Literal["video"] = "video"
    video_id: str = Field(..., alias="videoId")
    data: SearchVideoData
