"""REST routes for transcript retrieval, download and URL inspection."""

from __future__ import annotations

import asyncio
import logging
from time import perf_counter
from uuid import uuid4

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, Response

from yt_transcript.api.mapping import (
    classify_error,
    content_disposition,
    content_type_for,
)
from yt_transcript.api.schemas import (
    ErrorResponse,
    SearchRequest,
    SearchResponse,
    SearchVideoData,
    TranscriptResponse,
)
from yt_transcript.errors import UpstreamTimeoutError, ValidationError
from yt_transcript.formatting import is_supported_format, render
from yt_transcript.transcript.models import TranscriptSegment, get_video_info
from yt_transcript.transcript.resolver import TranscriptResolver
from yt_transcript.utils.constant import API_REQUEST_TIMEOUT_SEC, SUPPORTED_FORMATS
from yt_transcript.utils.youtube_url import (
    extract_video_id,
    get_url_type,
    is_valid_video_id,
    is_valid_youtube_url,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/youtube")

_resolver: TranscriptResolver | None = None


def get_resolver() -> TranscriptResolver:
    """Return the resolver shared by all requests (built lazily)."""
    global _resolver
    if _resolver is None:
        _resolver = TranscriptResolver.with_default_sources()
    return _resolver


def _build_error_response(
    *,
    status_code: int,
    error: str,
    message: str,
    details: str | None = None,
) -> JSONResponse:
    """Create a ``{success: false, error, message}`` JSON response.

    Args:
        status_code: HTTP status code.
        error: Short error label.
        message: Error message for clients.
        details: Optional raw error text for unexpected failures.

    Returns:
        JSON response containing the error payload.
    """
    payload = ErrorResponse(error=error, message=message, details=details).model_dump(
        exclude_none=True
    )
    return JSONResponse(status_code=status_code, content=payload)


def _validate_video_id(video_id: str | None) -> str | JSONResponse:
    """Return the checked id, or an error response for a missing or malformed one."""
    if not video_id:
        return _build_error_response(
            status_code=400, error="Missing parameter", message="Video ID is required"
        )
    if not is_valid_video_id(video_id):
        return _build_error_response(
            status_code=400, error="Invalid format", message="Invalid video ID format"
        )
    return video_id


async def _resolve(video_id: str) -> list[TranscriptSegment]:
    """Resolve *video_id* under the request deadline.

    Raises:
        UpstreamTimeoutError: If resolution exceeds ``API_REQUEST_TIMEOUT_SEC``.
    """
    resolver = get_resolver()
    try:
        return await asyncio.wait_for(resolver.resolve(video_id), timeout=API_REQUEST_TIMEOUT_SEC)
    except asyncio.TimeoutError as exc:
        msg = f"Transcript retrieval timed out after {API_REQUEST_TIMEOUT_SEC:g}s"
        raise UpstreamTimeoutError(msg) from exc


def _error_from_exception(exc: Exception, request_id: str) -> JSONResponse:
    """Translate a resolution or rendering failure into an error response."""
    classification = classify_error(exc)
    if classification.status_code >= 500 and not isinstance(exc, UpstreamTimeoutError):
        logger.exception("Unhandled exception while processing request: id=%s", request_id)
        return _build_error_response(
            status_code=classification.status_code,
            error=classification.label,
            message="An unexpected error occurred while fetching the transcript",
            details=str(exc),
        )
    logger.info(
        "Request failed: id=%s status=%d error=%s",
        request_id,
        classification.status_code,
        classification.label,
    )
    return _build_error_response(
        status_code=classification.status_code,
        error=classification.label,
        message=str(exc),
    )


def _empty_transcript_response() -> JSONResponse:
    return _build_error_response(
        status_code=404,
        error="No transcript",
        message="No captions available for this video",
    )


@router.get("/transcript")
async def get_transcript(request: Request, videoId: str | None = None) -> Response:  # noqa: N803
    """Return the transcript segments of a video as JSON.

    Args:
        request: Incoming HTTP request metadata.
        videoId: 11-character YouTube video id.

    Returns:
        ``{success, videoId, transcript}`` or an error payload.
    """
    request_id = uuid4().hex[:8]
    started_at = perf_counter()
    logger.debug(
        "Transcript request received: id=%s path=%s video=%s",
        request_id,
        request.url.path,
        videoId,
    )

    checked = _validate_video_id(videoId)
    if isinstance(checked, JSONResponse):
        logger.debug("Transcript request rejected: id=%s video=%r", request_id, videoId)
        return checked
    video_id = checked

    try:
        segments = await _resolve(video_id)
    except Exception as exc:
        return _error_from_exception(exc, request_id)
    finally:
        logger.debug(
            "Transcript request finished: id=%s elapsed_ms=%.1f",
            request_id,
            (perf_counter() - started_at) * 1000,
        )

    if not segments:
        return _empty_transcript_response()

    payload = TranscriptResponse(video_id=video_id, transcript=segments).model_dump(by_alias=True)
    return JSONResponse(content=payload)


@router.get("/download")
async def download_transcript(
    request: Request,
    videoId: str | None = None,  # noqa: N803
    format: str = "txt",  # noqa: A002
    title: str = "transcript",
) -> Response:
    """Render a transcript in one of the export formats as an attachment.

    Args:
        request: Incoming HTTP request metadata.
        videoId: 11-character YouTube video id.
        format: Export format (``txt``, ``json``, ``csv``, ``srt`` or ``vtt``).
        title: Download file name stem, sanitized before use.

    Returns:
        The rendered transcript or an error payload.
    """
    request_id = uuid4().hex[:8]
    format_name = (format or "txt").lower()
    title = title or "transcript"
    logger.debug(
        "Download request received: id=%s path=%s video=%s format=%s",
        request_id,
        request.url.path,
        videoId,
        format_name,
    )

    checked = _validate_video_id(videoId)
    if isinstance(checked, JSONResponse):
        return checked
    video_id = checked

    if not is_supported_format(format_name):
        logger.debug("Download request rejected: id=%s format=%r", request_id, format)
        return _build_error_response(
            status_code=400,
            error="Invalid format",
            message=f"Invalid format. Supported formats: {', '.join(SUPPORTED_FORMATS)}",
        )

    try:
        segments = await _resolve(video_id)
        if not segments:
            return _empty_transcript_response()
        body = render(segments, format_name)
    except ValidationError:
        logger.exception("Resolved transcript failed validation: id=%s", request_id)
        return _build_error_response(
            status_code=500,
            error="Server error",
            message="Failed to format transcript",
        )
    except Exception as exc:
        return _error_from_exception(exc, request_id)

    logger.debug(
        "Download ready: id=%s segments=%d chars=%d",
        request_id,
        len(segments),
        len(body),
    )
    return Response(
        content=body,
        media_type=content_type_for(format_name),
        headers={"Content-Disposition": content_disposition(title, format_name)},
    )


async def _read_search_request(request: Request) -> SearchRequest:
    """Parse the JSON body of a search request; an empty body has no URL.

    Raises:
        ValueError: If the body is not JSON or not a ``{"url": ...}`` object.
    """
    if not await request.body():
        return SearchRequest()
    return SearchRequest.model_validate(await request.json())


@router.post("/search")
async def search_video(request: Request) -> Response:
    """Inspect a YouTube URL and return placeholder video details.

    Args:
        request: Incoming request whose JSON body carries ``url``.

    Returns:
        ``{success, type: "video", videoId, data}`` or an error payload.
    """
    try:
        payload = await _read_search_request(request)
    except ValueError:
        logger.exception("Could not parse search request body")
        return _build_error_response(
            status_code=500,
            error="Server error",
            message="Failed to process YouTube URL",
        )
    url = payload.url
    logger.debug("Search request received: url=%r", url)

    if not url:
        return _build_error_response(
            status_code=400, error="Missing parameter", message="URL is required"
        )
    if not is_valid_youtube_url(url):
        return _build_error_response(
            status_code=400,
            error="Invalid URL",
            message="Please provide a valid YouTube URL",
        )

    url_type = get_url_type(url)
    if url_type == "playlist":
        return _build_error_response(
            status_code=400,
            error="Playlist support is temporarily disabled",
            message=(
                "Please extract videos individually. Copy the video URL from the "
                "playlist and paste it here."
            ),
        )
    if url_type != "video":
        return _build_error_response(
            status_code=400,
            error="Unsupported URL",
            message="Unsupported YouTube URL type",
        )

    video_id = extract_video_id(url)
    if not video_id:
        return _build_error_response(
            status_code=400,
            error="Invalid URL",
            message="Invalid video URL - could not extract video ID",
        )

    info = get_video_info(video_id)
    response = SearchResponse(
        video_id=video_id,
        data=SearchVideoData(
            video_id=video_id,
            title=info.title,
            url=url,
            duration=info.duration,
            thumbnail=info.thumbnail,
        ),
    )
    return JSONResponse(content=response.model_dump(by_alias=True))
