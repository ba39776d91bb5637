"""Unit tests for the youtube-transcript-api caption source."""

from __future__ import annotations

import asyncio
from types import SimpleNamespace

import pytest
from youtube_transcript_api import (
    NoTranscriptFound,
    RequestBlocked,
    TranscriptsDisabled,
    VideoUnavailable,
    VideoUnplayable,
)

from yt_transcript.sources.scraper import (
    CaptionScraperSource,
    classify_scraper_error,
    normalize_snippets,
)
from yt_transcript.transcript.outcomes import AttemptStatus, FailureKind

VIDEO_ID = "dQw4w9WgXcQ"


class FakeTranscript:
    def __init__(self, language_code: str, snippets: list) -> None:
        self.language_code = language_code
        self._snippets = snippets

    def fetch(self) -> list:
        return self._snippets


class FakeTranscriptList:
    def __init__(self, transcripts: list[FakeTranscript]) -> None:
        self._transcripts = transcripts

    def __iter__(self):
        return iter(self._transcripts)

    def find_transcript(self, languages: list[str]) -> FakeTranscript:
        for code in languages:
            for transcript in self._transcripts:
                if transcript.language_code == code:
                    return transcript
        raise NoTranscriptFound(VIDEO_ID, languages, "")


class FakeApi:
    def __init__(self, result: object) -> None:
        self.result = result
        self.listed: list[str] = []

    def list(self, video_id: str) -> FakeTranscriptList:
        self.listed.append(video_id)
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


@pytest.mark.parametrize(
    ("exc", "kind"),
    [
        (TranscriptsDisabled(VIDEO_ID), FailureKind.DISABLED),
        (VideoUnavailable(VIDEO_ID), FailureKind.UNAVAILABLE),
        (VideoUnplayable(VIDEO_ID, "This video is private", []), FailureKind.PRIVATE),
        (VideoUnplayable(VIDEO_ID, "Sign in to confirm your age", []), FailureKind.UNKNOWN),
        (RequestBlocked(VIDEO_ID), FailureKind.TRANSIENT),
        (ConnectionError("reset"), FailureKind.TRANSIENT),
        (KeyError("x"), FailureKind.UNKNOWN),
    ],
)
def test_classify_scraper_error(exc: BaseException, kind: FailureKind) -> None:
    assert classify_scraper_error(exc) is kind


def test_normalize_snippets_objects_and_dicts() -> None:
    snippets = [
        SimpleNamespace(text=" Hello ", start=1.7, duration=2.2),
        {"text": "dict form", "start": 4, "duration": 1},
        {"text": None, "start": 5, "duration": 1},
        SimpleNamespace(text="", start=6.0, duration=0.5),
    ]
    result = normalize_snippets(snippets)
    assert [s.model_dump() for s in result] == [
        {"text": "Hello", "offset": 1, "duration": 2},
        {"text": "dict form", "offset": 4, "duration": 1},
        {"text": "", "offset": 6, "duration": 0},
    ]


def test_normalize_snippets_bad_numbers_become_zero() -> None:
    result = normalize_snippets([{"text": "x", "start": "nope", "duration": -3}])
    assert result[0].offset == 0
    assert result[0].duration == 0


def test_fetch_prefers_requested_language() -> None:
    api = FakeApi(
        FakeTranscriptList(
            [
                FakeTranscript("de", [{"text": "Hallo", "start": 0, "duration": 1}]),
                FakeTranscript("en", [{"text": "Hello", "start": 0, "duration": 1}]),
            ]
        )
    )
    source = CaptionScraperSource(api=api, languages=["en"])

    outcome = asyncio.run(source.fetch(VIDEO_ID))

    assert outcome.status is AttemptStatus.SUCCESS
    assert outcome.segments[0].text == "Hello"


def test_fetch_falls_back_to_first_track() -> None:
    api = FakeApi(
        FakeTranscriptList([FakeTranscript("fr", [{"text": "Bonjour", "start": 0, "duration": 1}])])
    )
    source = CaptionScraperSource(api=api, languages=["en"])

    outcome = asyncio.run(source.fetch(VIDEO_ID))

    assert outcome.segments[0].text == "Bonjour"


def test_fetch_reduces_url_to_id() -> None:
    api = FakeApi(FakeTranscriptList([]))
    source = CaptionScraperSource(api=api)

    outcome = asyncio.run(source.fetch(f"https://youtu.be/{VIDEO_ID}"))

    assert api.listed == [VIDEO_ID]
    assert outcome.status is AttemptStatus.FAILURE
    assert outcome.failure is FailureKind.UNKNOWN


def test_fetch_empty_track_is_empty_outcome() -> None:
    api = FakeApi(FakeTranscriptList([FakeTranscript("en", [])]))
    outcome = asyncio.run(CaptionScraperSource(api=api).fetch(VIDEO_ID))
    assert outcome.status is AttemptStatus.EMPTY


def test_fetch_classifies_library_errors() -> None:
    api = FakeApi(TranscriptsDisabled(VIDEO_ID))
    outcome = asyncio.run(CaptionScraperSource(api=api).fetch(VIDEO_ID))
    assert outcome.failure is FailureKind.DISABLED


def test_fetch_network_error_is_transient() -> None:
    api = FakeApi(ConnectionError("connection reset"))
    outcome = asyncio.run(CaptionScraperSource(api=api).fetch(VIDEO_ID))
    assert outcome.failure is FailureKind.TRANSIENT
