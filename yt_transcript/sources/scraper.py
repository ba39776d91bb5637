"""Caption scraping source backed by ``youtube-transcript-api``.

Single responsibility: fetch one caption track and report a tagged outcome.
Library exceptions are classified into ``FailureKind`` values here so the
resolver never inspects error messages.
"""

from __future__ import annotations

import asyncio
import math
from collections.abc import Iterable, Sequence
from typing import Any

from youtube_transcript_api import (
    CouldNotRetrieveTranscript,
    NoTranscriptFound,
    RequestBlocked,
    TranscriptsDisabled,
    VideoUnavailable,
    VideoUnplayable,
    YouTubeTranscriptApi,
)

from yt_transcript.transcript.models import TranscriptSegment
from yt_transcript.transcript.outcomes import AttemptOutcome, FailureKind
from yt_transcript.utils.constant import TRANSCRIPT_LANGUAGES
from yt_transcript.utils.logging_config import get_logger
from yt_transcript.utils.youtube_url import extract_video_id

logger = get_logger(__name__)

__all__ = ["CaptionScraperSource", "classify_scraper_error", "normalize_snippets"]


def classify_scraper_error(exc: BaseException) -> FailureKind:
    """Map a ``youtube-transcript-api`` (or network) exception to a ``FailureKind``.

    Args:
        exc: Exception raised while listing or fetching captions.

    Returns:
        ``DISABLED``/``UNAVAILABLE``/``PRIVATE`` for conditions of the video
        itself, ``TRANSIENT`` for blocked or failed requests, ``UNKNOWN``
        otherwise.
    """
    if isinstance(exc, TranscriptsDisabled):
        return FailureKind.DISABLED
    if isinstance(exc, VideoUnavailable):
        return FailureKind.UNAVAILABLE
    if isinstance(exc, VideoUnplayable):
        reason = getattr(exc, "reason", None) or ""
        if "private" in reason.lower():
            return FailureKind.PRIVATE
        return FailureKind.UNKNOWN
    if isinstance(exc, RequestBlocked):
        return FailureKind.TRANSIENT
    if isinstance(exc, OSError):
        # requests' RequestException derives from OSError
        return FailureKind.TRANSIENT
    return FailureKind.UNKNOWN


def _whole_seconds(value: Any) -> int:
    try:
        seconds = float(value or 0)
    except (TypeError, ValueError):
        return 0
    if math.isnan(seconds):
        return 0
    return max(0, math.floor(seconds))


def normalize_snippets(snippets: Iterable[Any]) -> list[TranscriptSegment]:
    """Convert caption snippets into ``TranscriptSegment`` objects.

    Accepts snippet objects (``.text``, ``.start``, ``.duration``) or raw
    dicts. Snippets without a text string are skipped; an empty-after-trim
    text is kept.
    """
    segments: list[TranscriptSegment] = []
    for snippet in snippets:
        if isinstance(snippet, dict):
            text = snippet.get("text")
            start = snippet.get("start", snippet.get("offset"))
            duration = snippet.get("duration")
        else:
            text = getattr(snippet, "text", None)
            start = getattr(snippet, "start", None)
            duration = getattr(snippet, "duration", None)
        if not isinstance(text, str):
            continue
        segments.append(
            TranscriptSegment(
                text=text.strip(),
                offset=_whole_seconds(start),
                duration=_whole_seconds(duration),
            )
        )
    return segments


class CaptionScraperSource:
    """Fetch captions by scraping the watch page caption tracks.

    Args:
        api: ``YouTubeTranscriptApi`` instance; one is created when omitted.
        languages: Preferred languages; the first available track is used
            when none of them exists.
    """

    name = "caption-scraper"

    def __init__(
        self,
        api: YouTubeTranscriptApi | None = None,
        languages: Sequence[str] = TRANSCRIPT_LANGUAGES,
    ) -> None:
        self._api = api or YouTubeTranscriptApi()
        self._languages = list(languages)

    def _fetch_blocking(self, video_id: str) -> list[Any]:
        transcript_list = self._api.list(video_id)
        try:
            transcript = transcript_list.find_transcript(self._languages)
        except NoTranscriptFound:
            transcript = next(iter(transcript_list), None)
            if transcript is None:
                raise
        return list(transcript.fetch())

    async def fetch(self, id_or_url: str) -> AttemptOutcome:
        """Fetch captions for a bare id or a full watch/short URL.

        Args:
            id_or_url: Video id or YouTube URL; URLs are reduced to the id.

        Returns:
            Tagged outcome of the attempt.
        """
        video_id = extract_video_id(id_or_url) or id_or_url
        try:
            snippets = await asyncio.to_thread(self._fetch_blocking, video_id)
        except CouldNotRetrieveTranscript as exc:
            kind = classify_scraper_error(exc)
            logger.debug("Caption scraper failed: input=%s kind=%s", id_or_url, kind.value)
            return AttemptOutcome.failed(kind, f"{type(exc).__name__}: {exc}")
        except OSError as exc:
            logger.debug("Caption scraper request error: input=%s error=%s", id_or_url, exc)
            return AttemptOutcome.failed(FailureKind.TRANSIENT, str(exc))
        return AttemptOutcome.success(normalize_snippets(snippets))
