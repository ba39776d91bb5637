"""Transcript resolution with a fixed fallback sequence.

Attempts, stopping at the first non-empty segment list:

1. caption scraper with the bare video id;
2. InnerTube transcript panel with the bare video id;
3. caption scraper with ``https://www.youtube.com/watch?v=<id>``;
4. caption scraper with ``https://youtu.be/<id>``.

Every attempt is preceded by ``RateLimiter.pace()``. A permanent failure on
the first attempt (captions disabled, video unavailable or private) ends the
resolution immediately without trying the InnerTube source.
"""

from __future__ import annotations

from time import perf_counter
from typing import TYPE_CHECKING

from yt_transcript.config import ResolverConfig
from yt_transcript.errors import InvalidInputError, NotFoundError, PermanentUnavailableError
from yt_transcript.transcript.models import TranscriptSegment
from yt_transcript.transcript.outcomes import (
    PERMANENT_FAILURE_MESSAGES,
    AttemptOutcome,
    FailureKind,
)
from yt_transcript.transcript.rate_limiter import RateLimiter, get_default_rate_limiter
from yt_transcript.utils.logging_config import get_logger

if TYPE_CHECKING:
    from yt_transcript.sources import CaptionSource

logger = get_logger(__name__)

__all__ = ["NOT_FOUND_MESSAGE", "TranscriptResolver"]

NOT_FOUND_MESSAGE = """No transcript available for video {video_id}. This could be because:
- The video doesn't have captions enabled
- The video is private, restricted, or unavailable
- Transcripts are disabled by the video owner
- There's a temporary issue with YouTube's caption service

Please try a different video or check if the video has captions available on YouTube directly."""


class TranscriptResolver:
    """Resolve a video id to an ordered list of ``TranscriptSegment``.

    Args:
        scraper: Caption scraping source (tried first and for URL retries).
        innertube: InnerTube transcript source (first fallback).
        rate_limiter: Pacing gate; the process-wide default when omitted.
        config: URL forms and language preferences.
    """

    def __init__(
        self,
        scraper: CaptionSource,
        innertube: CaptionSource,
        rate_limiter: RateLimiter | None = None,
        config: ResolverConfig | None = None,
    ) -> None:
        self.scraper = scraper
        self.innertube = innertube
        self.rate_limiter = rate_limiter or get_default_rate_limiter()
        self.config = config or ResolverConfig()

    @classmethod
    def with_default_sources(
        cls,
        rate_limiter: RateLimiter | None = None,
        config: ResolverConfig | None = None,
    ) -> TranscriptResolver:
        """Build a resolver backed by ``youtube-transcript-api`` and InnerTube."""
        from yt_transcript.sources import CaptionScraperSource, InnertubeSource

        config = config or ResolverConfig()
        return cls(
            scraper=CaptionScraperSource(languages=config.languages),
            innertube=InnertubeSource(),
            rate_limiter=rate_limiter,
            config=config,
        )

    async def _attempt(self, source: CaptionSource, target: str) -> AttemptOutcome:
        """Pace, then run one source attempt and log its outcome."""
        await self.rate_limiter.pace()
        try:
            outcome = await source.fetch(target)
        except Exception as exc:
            logger.warning(
                "Caption source %s raised unexpectedly for %s", source.name, target, exc_info=True
            )
            outcome = AttemptOutcome.failed(FailureKind.UNKNOWN, f"{type(exc).__name__}: {exc}")
        logger.debug(
            "Attempt finished: source=%s target=%s status=%s failure=%s reason=%s",
            source.name,
            target,
            outcome.status.value,
            outcome.failure.value if outcome.failure else None,
            outcome.reason,
        )
        return outcome

    def _succeed(
        self, video_id: str, outcome: AttemptOutcome, started_at: float
    ) -> list[TranscriptSegment]:
        self.rate_limiter.record_success()
        logger.info(
            "Transcript resolved: video=%s segments=%d elapsed_ms=%.1f",
            video_id,
            len(outcome.segments),
            (perf_counter() - started_at) * 1000,
        )
        return outcome.segments

    async def resolve(self, video_id: str) -> list[TranscriptSegment]:
        """Run the fallback sequence for *video_id*.

        Args:
            video_id: YouTube video id.

        Returns:
            Non-empty, chronologically ordered segments.

        Raises:
            InvalidInputError: If ``video_id`` is empty or not a string.
            PermanentUnavailableError: If the first attempt reports disabled
                captions or a private/unavailable video.
            NotFoundError: If every attempt came back empty or failed.
        """
        if not video_id or not isinstance(video_id, str):
            raise InvalidInputError("Invalid video ID provided")

        started_at = perf_counter()

        outcome = await self._attempt(self.scraper, video_id)
        if outcome.succeeded:
            return self._succeed(video_id, outcome, started_at)
        if outcome.failure is not None and outcome.failure.is_permanent:
            message = PERMANENT_FAILURE_MESSAGES[outcome.failure]
            logger.info("Transcript permanently unavailable: video=%s reason=%s", video_id, message)
            raise PermanentUnavailableError(message, outcome.failure)

        logger.info("Caption scraper returned nothing for %s; trying InnerTube", video_id)
        outcome = await self._attempt(self.innertube, video_id)
        if outcome.succeeded:
            return self._succeed(video_id, outcome, started_at)

        for url in self.config.candidate_urls(video_id):
            logger.info("Retrying caption scraper with %s", url)
            outcome = await self._attempt(self.scraper, url)
            if outcome.succeeded:
                return self._succeed(video_id, outcome, started_at)

        self.rate_limiter.record_failure()
        logger.warning(
            "No transcript found after all fallbacks: video=%s failures=%d elapsed_ms=%.1f",
            video_id,
            self.rate_limiter.consecutive_failures,
            (perf_counter() - started_at) * 1000,
        )
        raise NotFoundError(NOT_FOUND_MESSAGE.format(video_id=video_id), video_id)
