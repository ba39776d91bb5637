"""Formatter for Web Video Text Tracks format (.vtt)."""

from collections.abc import Sequence

from yt_transcript.formatting._time import format_time
from yt_transcript.transcript.models import TranscriptSegment


def to_vtt(segments: Sequence[TranscriptSegment], **kwargs: object) -> str:
    """Convert segments to a VTT formatted string.

    Args:
        segments: The ordered segments; cue end is ``offset + duration``.
        **kwargs: Additional arguments (ignored for VTT output).

    Returns:
        ``WEBVTT`` header, a blank line, then cues separated by blank lines.

    """
    cues = []
    for segment in segments:
        start_time = format_time(segment.offset, vtt=True)
        end_time = format_time(segment.offset + segment.duration, vtt=True)
        cues.append(f"{start_time} --> {end_time}\n{segment.text.strip()}")
    return "WEBVTT\n\n" + "\n\n".join(cues)
