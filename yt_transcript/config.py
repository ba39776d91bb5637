"""Configuration dataclasses for transcript retrieval and export.

This module defines configuration objects that group related settings,
reducing parameter explosion across the resolver, CLI and API.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from yt_transcript.utils.constant import (
    BATCH_DELAY_SEC,
    BATCH_SIZE,
    RATE_LIMIT_BACKOFF_MULTIPLIER,
    RATE_LIMIT_BASE_DELAY_MS,
    RATE_LIMIT_MAX_DELAY_MS,
    TRANSCRIPT_LANGUAGES,
    YOUTUBE_SHORT_URL,
    YOUTUBE_WATCH_URL,
)


@dataclass(frozen=True)
class RateLimitConfig:
    """Groups pacing settings.

    Attributes:
        base_delay_ms: Minimum spacing between outbound attempts.
        max_delay_ms: Upper bound for the backed-off spacing.
        backoff_multiplier: Growth factor per consecutive failure.

    """

    base_delay_ms: int = RATE_LIMIT_BASE_DELAY_MS
    max_delay_ms: int = RATE_LIMIT_MAX_DELAY_MS
    backoff_multiplier: float = RATE_LIMIT_BACKOFF_MULTIPLIER


@dataclass(frozen=True)
class ResolverConfig:
    """Groups transcript resolver settings.

    Attributes:
        languages: Preferred caption languages for the caption scraper.
        url_templates: Full URL forms retried with the caption scraper after
            the InnerTube fallback, formatted with ``video_id``.

    """

    languages: tuple[str, ...] = TRANSCRIPT_LANGUAGES
    url_templates: tuple[str, ...] = (YOUTUBE_WATCH_URL, YOUTUBE_SHORT_URL)

    def candidate_urls(self, video_id: str) -> list[str]:
        """Return the full URL forms of *video_id* in retry order."""
        return [template.format(video_id=video_id) for template in self.url_templates]


@dataclass
class OutputConfig:
    """Groups CLI output settings.

    Attributes:
        output_format: Export format name (``txt``, ``json``, ``csv``, ``srt``, ``vtt``).
        output_dir: Directory for rendered files; ``None`` prints to stdout.
        batch_size: Resolutions run concurrently per batch.
        batch_delay_sec: Pause between batches.

    """

    output_format: str = "txt"
    output_dir: Path | None = None
    batch_size: int = BATCH_SIZE
    batch_delay_sec: float = BATCH_DELAY_SEC
