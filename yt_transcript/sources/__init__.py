"""Caption sources tried by the transcript resolver.

Each source exposes ``async fetch(id_or_url) -> AttemptOutcome``.
"""

from __future__ import annotations

from typing import Protocol

from yt_transcript.sources.innertube import InnertubeClient, InnertubeSource
from yt_transcript.sources.scraper import CaptionScraperSource
from yt_transcript.transcript.outcomes import AttemptOutcome


class CaptionSource(Protocol):
    """Anything able to fetch captions for an id or URL."""

    name: str

    async def fetch(self, id_or_url: str) -> AttemptOutcome: ...


__all__ = [
    "CaptionScraperSource",
    "CaptionSource",
    "InnertubeClient",
    "InnertubeSource",
]
