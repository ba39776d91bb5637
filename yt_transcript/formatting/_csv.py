"""Formatter for CSV (.csv) output containing segment-level timing."""

from __future__ import annotations

from collections.abc import Sequence

from yt_transcript.formatting._time import format_time
from yt_transcript.transcript.models import TranscriptSegment

CSV_HEADER = "Start Time,Duration,Text"


def _quote(text: str) -> str:
    """Double embedded quotes, collapse newlines and wrap in quotes."""
    return '"' + text.replace('"', '""').replace("\n", " ").strip() + '"'


def to_csv(segments: Sequence[TranscriptSegment], **kwargs: object) -> str:  # noqa: D401
    """Convert segments into a CSV string (one row per segment).

    Columns: Start Time, Duration, Text. Both times use ``HH:MM:SS,mmm``; the
    text column is always quoted.

    Args:
        segments: The ordered segments.
        **kwargs: Additional arguments (ignored for CSV output).

    Returns:
        Header row plus one row per segment, separated by ``\\n``.

    """
    rows = [CSV_HEADER]
    for segment in segments:
        start = format_time(segment.offset)
        duration = format_time(segment.duration)
        rows.append(f"{start},{duration},{_quote(segment.text)}")
    return "\n".join(rows)
