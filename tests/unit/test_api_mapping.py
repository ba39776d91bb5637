"""Unit tests for API error classification and download helpers."""

from __future__ import annotations

import pytest

from yt_transcript.api.mapping import (
    SERVER_ERROR,
    classify_error,
    classify_message,
    content_disposition,
    content_type_for,
    sanitize_filename,
)
from yt_transcript.errors import (
    NotFoundError,
    PermanentUnavailableError,
    UpstreamTimeoutError,
)
from yt_transcript.transcript.outcomes import FailureKind
from yt_transcript.transcript.resolver import NOT_FOUND_MESSAGE


@pytest.mark.parametrize(
    ("message", "status", "label"),
    [
        ("Video is unavailable", 404, "Video unavailable"),
        ("The video is private", 404, "Video unavailable"),
        ("Video has been removed by the uploader", 404, "Video unavailable"),
        ("No transcript available here", 404, "No transcript"),
        ("Captions are disabled", 404, "No transcript"),
        ("Transcripts are disabled for this video", 404, "No transcript"),
        ("Cannot fetch a LIVE STREAM", 400, "Live video"),
        ("Shorts are not supported", 400, "Shorts"),
        ("Too many requests", 429, "Rate limited"),
        ("Rate limit hit", 429, "Rate limited"),
        ("Invalid YouTube video ID format", 400, "Invalid format"),
        ("something broke", 500, "Server error"),
    ],
)
def test_classify_message(message: str, status: int, label: str) -> None:
    assert classify_message(message) == (status, label)


def test_typed_errors_map_directly() -> None:
    not_found = NotFoundError(NOT_FOUND_MESSAGE.format(video_id="abc"), "abc")
    assert classify_error(not_found) == (404, "No transcript")
    assert classify_error(UpstreamTimeoutError("slow")) == (504, "Timeout")
    assert classify_error(
        PermanentUnavailableError("x", FailureKind.DISABLED)
    ) == (404, "No transcript")
    assert classify_error(
        PermanentUnavailableError("x", FailureKind.PRIVATE)
    ) == (404, "Video unavailable")


def test_untyped_error_falls_back_to_message() -> None:
    assert classify_error(RuntimeError("boom")) is SERVER_ERROR
    assert classify_error(RuntimeError("429 Too Many Requests")).status_code == 429


def test_sanitize_filename() -> None:
    assert sanitize_filename("My Video: Part 1/2!") == "My_Video__Part_1_2_"
    assert sanitize_filename("ok-name_1") == "ok-name_1"


def test_content_disposition_and_type() -> None:
    assert content_disposition("My talk", "SRT") == 'attachment; filename="My_talk.srt"'
    assert content_type_for("vtt") == "text/vtt"
    assert content_type_for("unknown") == "text/plain"
