"""Registry of export formatters for transcripts.

Allows easy extension with new formats by adding a formatter function and
registering it in the ``FORMATTERS`` dictionary. Unknown format names fall
back to plain text rather than raising.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from yt_transcript.errors import ValidationError
from yt_transcript.transcript.models import TranscriptSegment
from yt_transcript.utils.constant import SUPPORTED_FORMATS

from ._csv import to_csv
from ._json import to_json
from ._srt import to_srt
from ._time import format_time
from ._txt import to_txt
from ._vtt import to_vtt

__all__ = [
    "DEFAULT_FORMAT",
    "FORMATTERS",
    "FormatterSpec",
    "SUPPORTED_FORMATS",
    "format_time",
    "get_formatter",
    "get_formatter_spec",
    "is_supported_format",
    "render",
    "validate_segments",
]


@dataclass(frozen=True)
class FormatterSpec:
    """Metadata and function for a specific output format.

    Attributes:
        format_func: The formatter function that converts segments to a string.
        content_type: MIME type used when the output is served over HTTP.
        file_extension: The file extension for this format (including the dot).

    """

    format_func: Callable[..., str]
    content_type: str
    file_extension: str


DEFAULT_FORMAT = "txt"

# A registry mapping format names to their respective formatter specifications.
FORMATTERS: dict[str, FormatterSpec] = {
    "txt": FormatterSpec(format_func=to_txt, content_type="text/plain", file_extension=".txt"),
    "json": FormatterSpec(
        format_func=to_json, content_type="application/json", file_extension=".json"
    ),
    "csv": FormatterSpec(format_func=to_csv, content_type="text/csv", file_extension=".csv"),
    "srt": FormatterSpec(
        format_func=to_srt, content_type="application/x-subrip", file_extension=".srt"
    ),
    "vtt": FormatterSpec(format_func=to_vtt, content_type="text/vtt", file_extension=".vtt"),
}


def is_supported_format(format_name: str) -> bool:
    """Return ``True`` if *format_name* (case-insensitive) is registered."""
    return format_name.lower() in FORMATTERS


def get_formatter_spec(format_name: str) -> FormatterSpec:
    """Retrieve the FormatterSpec for the given output format name.

    Parameters:
        format_name (str): Case-insensitive format identifier (e.g., "txt", "srt").

    Returns:
        FormatterSpec: The registered spec, or the plain text spec for an
            unrecognized name.
    """
    return FORMATTERS.get(format_name.lower(), FORMATTERS[DEFAULT_FORMAT])


def get_formatter(format_name: str) -> Callable[..., str]:
    """Get the formatter function registered for the given format name.

    Parameters:
        format_name (str): Format identifier, case-insensitive (e.g., "txt", "json").

    Returns:
        Callable[..., str]: Formatter converting validated segments to a string;
            the plain text formatter for an unrecognized name.
    """
    return get_formatter_spec(format_name).format_func


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _field(segment: Any, name: str) -> Any:
    if isinstance(segment, Mapping):
        return segment.get(name)
    return getattr(segment, name, None)


def validate_segments(segments: Sequence[Any] | None) -> list[TranscriptSegment]:
    """Check segment data before rendering.

    Accepts ``TranscriptSegment`` instances or mappings with ``text``,
    ``offset`` and ``duration`` keys.

    Args:
        segments: Segments to validate.

    Returns:
        The segments as ``TranscriptSegment`` objects, numeric values untouched.

    Raises:
        ValidationError: If the sequence is empty, or a segment has a missing or
            empty text, or a non-numeric or negative offset/duration.
    """
    if not segments:
        raise ValidationError("Empty transcript provided")

    validated: list[TranscriptSegment] = []
    for index, segment in enumerate(segments):
        text = _field(segment, "text")
        duration = _field(segment, "duration")
        offset = _field(segment, "offset")
        if not isinstance(text, str) or not text.strip():
            raise ValidationError(f"Invalid text in segment {index}")
        if not _is_number(duration) or duration < 0:
            raise ValidationError(f"Invalid duration in segment {index}")
        if not _is_number(offset) or offset < 0:
            raise ValidationError(f"Invalid offset in segment {index}")
        if isinstance(segment, TranscriptSegment):
            validated.append(segment)
        else:
            # Keep fractional seconds from plain mappings as given.
            validated.append(
                TranscriptSegment.model_construct(text=text, offset=offset, duration=duration)
            )
    return validated


def render(segments: Sequence[Any], format_name: str = DEFAULT_FORMAT) -> str:
    """Render segments in the requested export format.

    Validation always runs first, whatever the format.

    Args:
        segments: Ordered segments (models or mappings).
        format_name: ``txt``, ``json``, ``csv``, ``srt`` or ``vtt``,
            case-insensitive. Anything else renders as ``txt``.

    Returns:
        The rendered transcript.

    Raises:
        ValidationError: If the segment data is malformed.
    """
    validated = validate_segments(segments)
    return get_formatter(format_name)(validated)
