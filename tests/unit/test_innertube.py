"""Unit tests for the InnerTube client and source using ``httpx.MockTransport``."""

from __future__ import annotations

import asyncio
import json
from collections.abc import Callable

import httpx

from yt_transcript.sources.innertube import (
    InnertubeClient,
    InnertubeSource,
    parse_transcript_response,
)
from yt_transcript.transcript.outcomes import AttemptOutcome, AttemptStatus, FailureKind

VIDEO_ID = "dQw4w9WgXcQ"

NEXT_RESPONSE = {
    "engagementPanels": [
        {"engagementPanelSectionListRenderer": {"panelIdentifier": "comments"}},
        {
            "engagementPanelSectionListRenderer": {
                "content": {
                    "continuationItemRenderer": {
                        "continuationEndpoint": {
                            "getTranscriptEndpoint": {"params": "CgtkUXc0dzlXZ1hjUQ"}
                        }
                    }
                }
            }
        },
    ]
}

TRANSCRIPT_RESPONSE = {
    "actions": [
        {
            "updateEngagementPanelAction": {
                "content": {
                    "transcriptRenderer": {
                        "content": {
                            "transcriptSearchPanelRenderer": {
                                "body": {
                                    "transcriptSegmentListRenderer": {
                                        "initialSegments": [
                                            {
                                                "transcriptSectionHeaderRenderer": {
                                                    "startMs": "0",
                                                    "endMs": "1000",
                                                    "snippet": {"simpleText": "Intro"},
                                                }
                                            },
                                            {
                                                "transcriptSegmentRenderer": {
                                                    "startMs": "1000",
                                                    "endMs": "3000",
                                                    "snippet": {
                                                        "runs": [
                                                            {"text": "Hello"},
                                                            {"text": " world"},
                                                        ]
                                                    },
                                                }
                                            },
                                            {
                                                "transcriptSegmentRenderer": {
                                                    "startMs": "3000",
                                                    "endMs": "4500",
                                                    "snippet": {"simpleText": "again"},
                                                }
                                            },
                                        ]
                                    }
                                }
                            }
                        }
                    }
                }
            }
        }
    ]
}


def _fetch_with_handler(
    handler: Callable[[httpx.Request], httpx.Response],
) -> AttemptOutcome:
    async def _run() -> AttemptOutcome:
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http_client:
            source = InnertubeSource(client_factory=lambda: InnertubeClient(http_client=http_client))
            return await source.fetch(VIDEO_ID)

    return asyncio.run(_run())


def test_parse_transcript_response_shape() -> None:
    parsed = parse_transcript_response(TRANSCRIPT_RESPONSE)
    items = parsed["transcript"]["content"]["body"]["initial_segments"]
    assert [item["type"] for item in items] == [
        "TranscriptSectionHeader",
        "TranscriptSegment",
        "TranscriptSegment",
    ]
    assert items[1]["start_ms"] == "1000"
    assert items[1]["snippet"]["runs"] == [{"text": "Hello"}, {"text": " world"}]


def test_parse_transcript_response_without_segments() -> None:
    assert parse_transcript_response({"actions": []}) is None


def test_fetch_success_end_to_end() -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if request.url.path.endswith("/next"):
            return httpx.Response(200, json=NEXT_RESPONSE)
        return httpx.Response(200, json=TRANSCRIPT_RESPONSE)

    outcome = _fetch_with_handler(handler)

    assert outcome.status is AttemptStatus.SUCCESS
    assert [s.model_dump() for s in outcome.segments] == [
        {"text": "Hello world", "offset": 1, "duration": 2},
        {"text": "again", "offset": 3, "duration": 1},
    ]
    assert [r.url.path for r in requests] == [
        "/youtubei/v1/next",
        "/youtubei/v1/get_transcript",
    ]
    next_body = json.loads(requests[0].content)
    assert next_body["videoId"] == VIDEO_ID
    assert next_body["context"]["client"]["clientName"] == "WEB"
    assert json.loads(requests[1].content)["params"] == "CgtkUXc0dzlXZ1hjUQ"
    assert requests[0].url.params["prettyPrint"] == "false"


def test_fetch_without_transcript_panel_is_empty() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"engagementPanels": []})

    outcome = _fetch_with_handler(handler)
    assert outcome.status is AttemptStatus.EMPTY


def test_fetch_http_error_is_transient() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(429, json={"error": "slow down"})

    outcome = _fetch_with_handler(handler)
    assert outcome.failure is FailureKind.TRANSIENT


def test_fetch_non_object_body_is_unknown() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=["not", "an", "object"])

    outcome = _fetch_with_handler(handler)
    assert outcome.failure is FailureKind.UNKNOWN


def test_fetch_unrecognized_transcript_shape() -> None:
    class OddInfo:
        async def get_transcript(self) -> dict:
            return {"unexpected": True}

    class OddClient:
        async def __aenter__(self) -> OddClient:
            return self

        async def __aexit__(self, *exc_info: object) -> None:
            return None

        async def get_info(self, video_id: str) -> OddInfo:
            return OddInfo()

    outcome = asyncio.run(InnertubeSource(client_factory=OddClient).fetch(VIDEO_ID))
    assert outcome.status is AttemptStatus.FAILURE
    assert outcome.failure is FailureKind.UNKNOWN
    assert "unrecognized" in outcome.reason


def test_owned_http_client_is_closed() -> None:
    async def _run() -> bool:
        client = InnertubeClient()
        async with client:
            pass
        return client._http.is_closed

    assert asyncio.run(_run())
