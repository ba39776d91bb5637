"""InnerTube transcript source.

Talks to the ``youtubei/v1`` endpoints used by the YouTube web client:

1. ``next`` returns the watch-page engagement panels, one of which carries the
   ``getTranscriptEndpoint`` parameters when the video has a transcript.
2. ``get_transcript`` returns the transcript renderer tree.

The renderer tree is parsed into plain nodes
(``{"type": "TranscriptSegment", "start_ms", "end_ms", "snippet"}``) nested
under ``transcript.content.body.initial_segments``, which is one of the shapes
understood by :mod:`yt_transcript.sources.extraction`.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from types import TracebackType
from typing import Any

import httpx

from yt_transcript.sources.extraction import extract_segment_items, normalize_renderer_segments
from yt_transcript.transcript.outcomes import AttemptOutcome, FailureKind
from yt_transcript.utils.constant import (
    INNERTUBE_BASE_URL,
    INNERTUBE_CLIENT_NAME,
    INNERTUBE_CLIENT_VERSION,
    INNERTUBE_TIMEOUT_SEC,
)
from yt_transcript.utils.logging_config import get_logger

logger = get_logger(__name__)

__all__ = [
    "InnertubeClient",
    "InnertubeSource",
    "InnertubeVideoInfo",
    "parse_transcript_response",
]

# Renderer keys mapped to the node type names used downstream.
_RENDERER_TYPES: dict[str, str] = {
    "transcriptSegmentRenderer": "TranscriptSegment",
    "transcriptSectionHeaderRenderer": "TranscriptSectionHeader",
}


def _walk(node: Any) -> Iterator[dict[str, Any]]:
    """Yield every dict in a decoded JSON tree, depth first."""
    if isinstance(node, dict):
        yield node
        for value in node.values():
            yield from _walk(value)
    elif isinstance(node, list):
        for value in node:
            yield from _walk(value)


def _find_first(node: Any, key: str) -> Any:
    for candidate in _walk(node):
        if key in candidate:
            return candidate[key]
    return None


def _parse_renderer_item(item: Any) -> dict[str, Any]:
    if not isinstance(item, dict) or len(item) != 1:
        return {"type": "Unknown"}
    renderer_key, renderer = next(iter(item.items()))
    renderer = renderer if isinstance(renderer, dict) else {}
    snippet = renderer.get("snippet") or {}
    return {
        "type": _RENDERER_TYPES.get(renderer_key, renderer_key),
        "start_ms": renderer.get("startMs", "0"),
        "end_ms": renderer.get("endMs", "0"),
        "snippet": {
            "text": snippet.get("simpleText"),
            "runs": [{"text": run.get("text", "")} for run in snippet.get("runs", [])],
        },
    }


def parse_transcript_response(raw: dict[str, Any]) -> dict[str, Any] | None:
    """Parse a ``get_transcript`` response into transcript nodes.

    Args:
        raw: Decoded JSON body of the ``get_transcript`` call.

    Returns:
        ``{"transcript": {"content": {"body": {"initial_segments": [...]}}}}``,
        or ``None`` when the response holds no segment list.
    """
    segment_list = _find_first(raw, "transcriptSegmentListRenderer")
    if not isinstance(segment_list, dict):
        return None
    items = segment_list.get("initialSegments") or []
    return {
        "transcript": {
            "content": {
                "body": {
                    "initial_segments": [_parse_renderer_item(item) for item in items],
                }
            }
        }
    }


class InnertubeClient:
    """Minimal async InnerTube client.

    Args:
        http_client: Shared ``httpx.AsyncClient``; one is created (and closed
            with this client) when omitted.
        base_url: Root of the ``youtubei/v1`` API.
        client_name: InnerTube client name sent in the request context.
        client_version: InnerTube client version sent in the request context.
        timeout: Per-request timeout in seconds for an owned HTTP client.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        *,
        base_url: str = INNERTUBE_BASE_URL,
        client_name: str = INNERTUBE_CLIENT_NAME,
        client_version: str = INNERTUBE_CLIENT_VERSION,
        timeout: float = INNERTUBE_TIMEOUT_SEC,
    ) -> None:
        self._owns_http_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout, follow_redirects=True)
        self.base_url = base_url.rstrip("/")
        self.context = {
            "client": {
                "clientName": client_name,
                "clientVersion": client_version,
                "hl": "en",
                "gl": "US",
            }
        }

    async def __aenter__(self) -> InnertubeClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client when this instance created it."""
        if self._owns_http_client:
            await self._http.aclose()

    async def post(self, endpoint: str, payload: dict[str, Any]) -> dict[str, Any]:
        """POST *payload* (plus the client context) to an InnerTube endpoint.

        Raises:
            httpx.HTTPError: On transport errors or non-2xx responses.
            ValueError: If the body is not a JSON object.
        """
        response = await self._http.post(
            f"{self.base_url}/{endpoint}",
            params={"prettyPrint": "false"},
            json={"context": self.context, **payload},
        )
        response.raise_for_status()
        data = response.json()
        if not isinstance(data, dict):
            raise ValueError(f"Unexpected InnerTube response for {endpoint}")
        return data

    async def get_info(self, video_id: str) -> InnertubeVideoInfo:
        """Fetch watch-page data for *video_id*."""
        data = await self.post("next", {"videoId": video_id})
        return InnertubeVideoInfo(self, video_id, data)


class InnertubeVideoInfo:
    """Watch-page data for one video, able to load its transcript."""

    def __init__(self, client: InnertubeClient, video_id: str, data: dict[str, Any]) -> None:
        self._client = client
        self.video_id = video_id
        self.data = data

    @property
    def transcript_params(self) -> str | None:
        """Opaque ``get_transcript`` parameters, ``None`` without a transcript panel."""
        endpoint = _find_first(self.data, "getTranscriptEndpoint")
        if isinstance(endpoint, dict):
            params = endpoint.get("params")
            if isinstance(params, str) and params:
                return params
        return None

    async def get_transcript(self) -> dict[str, Any] | None:
        """Load and parse the transcript, or return ``None`` if there is none."""
        params = self.transcript_params
        if params is None:
            return None
        raw = await self._client.post("get_transcript", {"params": params})
        return parse_transcript_response(raw)


class InnertubeSource:
    """Caption source reading the InnerTube transcript panel.

    Args:
        client_factory: Zero-argument callable returning an async context
            manager with ``get_info(video_id)``; a fresh ``InnertubeClient``
            is used per attempt by default.
    """

    name = "innertube"

    def __init__(self, client_factory: Callable[[], Any] = InnertubeClient) -> None:
        self._client_factory = client_factory

    async def fetch(self, video_id: str) -> AttemptOutcome:
        """Fetch and normalize the transcript for *video_id*."""
        try:
            async with self._client_factory() as client:
                info = await client.get_info(video_id)
                transcript = await info.get_transcript()
        except httpx.HTTPError as exc:
            logger.debug("InnerTube request failed: video=%s error=%s", video_id, exc)
            return AttemptOutcome.failed(FailureKind.TRANSIENT, f"{type(exc).__name__}: {exc}")
        except ValueError as exc:
            logger.debug("InnerTube response malformed: video=%s error=%s", video_id, exc)
            return AttemptOutcome.failed(FailureKind.UNKNOWN, f"malformed response: {exc}")

        if transcript is None:
            return AttemptOutcome.empty("no transcript data returned")

        extraction = extract_segment_items(transcript)
        if not extraction.recognized:
            return AttemptOutcome.failed(FailureKind.UNKNOWN, "unrecognized transcript response shape")
        if not extraction.items:
            return AttemptOutcome.empty("no transcript content found")

        logger.debug(
            "InnerTube transcript located: video=%s rule=%s items=%d",
            video_id,
            extraction.rule,
            len(extraction.items),
        )
        return AttemptOutcome.success(normalize_renderer_segments(extraction.items))
