"""Formatter for SubRip Subtitle format (.srt)."""

from collections.abc import Sequence

from yt_transcript.formatting._time import format_time
from yt_transcript.transcript.models import TranscriptSegment


def to_srt(segments: Sequence[TranscriptSegment], **kwargs: object) -> str:
    """Convert segments to an SRT formatted string.

    Args:
        segments: The ordered segments; cue end is ``offset + duration``.
        **kwargs: Additional arguments (ignored for SRT output).

    Returns:
        A string in SRT format, cues numbered from 1.

    """
    blocks = []
    for i, segment in enumerate(segments, start=1):
        start_time = format_time(segment.offset)
        end_time = format_time(segment.offset + segment.duration)
        blocks.append(f"{i}\n{start_time} --> {end_time}\n{segment.text.strip()}\n")
    return "\n".join(blocks)
