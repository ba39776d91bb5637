"""Extraction of caption segments from InnerTube transcript responses.

The transcript object handed back by an InnerTube client is not uniform: the
segment list lives under one of several nested keys depending on the client
and the renderer version. ``EXTRACTION_RULES`` lists the known locations in
priority order; the first rule that finds a list wins. When no rule matches
the shape is reported as unrecognized rather than silently treated as empty.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from yt_transcript.transcript.models import TranscriptSegment

__all__ = [
    "EXTRACTION_RULES",
    "Extraction",
    "extract_segment_items",
    "normalize_renderer_segments",
    "parse_segment_item",
]

SEGMENT_TYPE = "TranscriptSegment"


def _lookup(node: Any, *path: str) -> Any:
    """Follow *path* through mappings or attributes, returning ``None`` on a miss."""
    for key in path:
        if node is None:
            return None
        if isinstance(node, Mapping):
            node = node.get(key)
        else:
            node = getattr(node, key, None)
    return node


def _list_at(*path: str) -> Callable[[Any], list[Any] | None]:
    def rule(obj: Any) -> list[Any] | None:
        value = _lookup(obj, *path)
        if isinstance(value, (list, tuple)):
            return list(value)
        return None

    return rule


def _whole_object(obj: Any) -> list[Any] | None:
    if isinstance(obj, (list, tuple)):
        return list(obj)
    return None


ExtractionRule = tuple[str, Callable[[Any], list[Any] | None]]

EXTRACTION_RULES: tuple[ExtractionRule, ...] = (
    ("body.content", _list_at("body", "content")),
    (
        "transcript.content.body.initial_segments",
        _list_at("transcript", "content", "body", "initial_segments"),
    ),
    ("content", _list_at("content")),
    ("self", _whole_object),
)


@dataclass(frozen=True)
class Extraction:
    """Result of running the extraction rules over a transcript object.

    Attributes:
        rule: Name of the matching rule, ``None`` when the shape is unrecognized.
        items: Raw entries found at the matched location.

    """

    rule: str | None
    items: list[Any] = field(default_factory=list)

    @property
    def recognized(self) -> bool:
        return self.rule is not None


def extract_segment_items(
    transcript: Any,
    rules: Sequence[ExtractionRule] = EXTRACTION_RULES,
) -> Extraction:
    """Locate the raw segment list inside *transcript*.

    Args:
        transcript: Transcript object returned by ``get_transcript()``.
        rules: Ordered ``(name, extractor)`` pairs; first match wins.

    Returns:
        The matched rule name and its entries, or an unrecognized extraction.
    """
    for name, extractor in rules:
        items = extractor(transcript)
        if items is not None:
            return Extraction(rule=name, items=items)
    return Extraction(rule=None)


def _parse_ms(value: Any) -> int:
    if value is None or value == "":
        return 0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if math.isnan(number) or math.isinf(number):
        return 0
    return int(number)


def _snippet_text(snippet: Any) -> str:
    text = _lookup(snippet, "text")
    if isinstance(text, str) and text:
        return text
    runs = _lookup(snippet, "runs")
    if isinstance(runs, (list, tuple)):
        return "".join(str(_lookup(run, "text") or "") for run in runs)
    return ""


def parse_segment_item(item: Any) -> TranscriptSegment | None:
    """Convert one renderer entry into a segment.

    Entries that are not ``TranscriptSegment`` records, or whose text is empty
    after trimming, yield ``None``. Millisecond timings are floor-divided into
    whole seconds and clamped to zero.
    """
    if item is None or isinstance(item, (str, bytes, int, float)):
        return None
    if _lookup(item, "type") != SEGMENT_TYPE:
        return None

    text = _snippet_text(_lookup(item, "snippet")).strip()
    if not text:
        return None

    start_ms = _parse_ms(_lookup(item, "start_ms"))
    end_ms = _parse_ms(_lookup(item, "end_ms"))
    return TranscriptSegment(
        text=text,
        offset=max(0, start_ms // 1000),
        duration=max(0, (end_ms - start_ms) // 1000),
    )


def normalize_renderer_segments(items: Sequence[Any]) -> list[TranscriptSegment]:
    """Parse every recognizable segment entry, preserving order."""
    segments: list[TranscriptSegment] = []
    for item in items:
        segment = parse_segment_item(item)
        if segment is not None:
            segments.append(segment)
    return segments
