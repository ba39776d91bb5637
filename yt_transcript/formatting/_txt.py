"""Formatter for plain text (.txt) output."""

from collections.abc import Sequence

from yt_transcript.transcript.models import TranscriptSegment


def to_txt(segments: Sequence[TranscriptSegment], **kwargs: object) -> str:
    """
    Format segments as plain text, one paragraph per caption.

    Parameters:
        segments (Sequence[TranscriptSegment]): Ordered, validated segments.
        **kwargs: Additional keyword arguments (ignored for plain text output).

    Returns:
        str: Trimmed segment texts separated by a blank line.
    """
    return "\n\n".join(segment.text.strip() for segment in segments)
