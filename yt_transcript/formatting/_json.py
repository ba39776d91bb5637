"""Formatter for JSON (.json) output."""

import json
from collections.abc import Sequence

from yt_transcript.transcript.models import TranscriptSegment


def to_json(segments: Sequence[TranscriptSegment], **kwargs: object) -> str:
    """
    Serialize segments as a JSON array of ``{text, offset, duration}`` objects.

    Parameters:
        segments: The ordered segments to serialize.
        **kwargs: Additional arguments; ignored for JSON output.

    Returns:
        JSON string pretty-printed with two-space indentation.
    """
    payload = [
        {"text": segment.text, "offset": segment.offset, "duration": segment.duration}
        for segment in segments
    ]
    return json.dumps(payload, indent=2, ensure_ascii=False)
