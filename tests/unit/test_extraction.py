"""Unit tests for locating and parsing InnerTube transcript segments."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from yt_transcript.sources.extraction import (
    extract_segment_items,
    normalize_renderer_segments,
    parse_segment_item,
)


def _item(start: object = "1000", end: object = "3000", text: str = "Hello") -> dict:
    return {
        "type": "TranscriptSegment",
        "start_ms": start,
        "end_ms": end,
        "snippet": {"text": text},
    }


@pytest.mark.parametrize(
    ("transcript", "rule"),
    [
        ({"body": {"content": [1]}}, "body.content"),
        (
            {"transcript": {"content": {"body": {"initial_segments": [1]}}}},
            "transcript.content.body.initial_segments",
        ),
        ({"content": [1]}, "content"),
        ([1], "self"),
    ],
)
def test_each_rule_matches(transcript: object, rule: str) -> None:
    extraction = extract_segment_items(transcript)
    assert extraction.recognized
    assert extraction.rule == rule
    assert extraction.items == [1]


def test_first_rule_wins() -> None:
    transcript = {"body": {"content": ["a"]}, "content": ["b"]}
    assert extract_segment_items(transcript).items == ["a"]


def test_attribute_access_is_supported() -> None:
    transcript = SimpleNamespace(body=SimpleNamespace(content=["x"]))
    assert extract_segment_items(transcript).rule == "body.content"


@pytest.mark.parametrize("transcript", [{}, {"body": {"content": "nope"}}, "text", None])
def test_unrecognized_shape(transcript: object) -> None:
    extraction = extract_segment_items(transcript)
    assert not extraction.recognized
    assert extraction.items == []


def test_parse_segment_item_timing() -> None:
    segment = parse_segment_item(_item())
    assert segment is not None
    assert segment.model_dump() == {"text": "Hello", "offset": 1, "duration": 2}


def test_parse_segment_item_floors_and_clamps() -> None:
    assert parse_segment_item(_item("1999", "2500")).model_dump() == {
        "text": "Hello",
        "offset": 1,
        "duration": 0,
    }
    assert parse_segment_item(_item("5000", "1000")).duration == 0
    assert parse_segment_item(_item(None, "bad")).offset == 0


def test_parse_segment_item_runs_text() -> None:
    item = _item()
    item["snippet"] = {"runs": [{"text": "Hello"}, {"text": " there"}]}
    assert parse_segment_item(item).text == "Hello there"


@pytest.mark.parametrize(
    "item",
    [
        {"type": "TranscriptSectionHeader", "snippet": {"text": "Intro"}},
        _item(text="   "),
        "string",
        None,
    ],
)
def test_parse_segment_item_rejects(item: object) -> None:
    assert parse_segment_item(item) is None


def test_normalize_keeps_order_and_drops_noise() -> None:
    items = [
        _item("0", "1000", "first"),
        {"type": "TranscriptSectionHeader"},
        _item("1000", "2000", "second"),
    ]
    assert [s.text for s in normalize_renderer_segments(items)] == ["first", "second"]
