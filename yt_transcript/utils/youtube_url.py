"""Helpers for recognising YouTube URLs and extracting identifiers."""

from __future__ import annotations

import re
from typing import Final, Literal

UrlType = Literal["video", "playlist", "unknown"]

# Exactly 11 characters from the YouTube id alphabet.
VIDEO_ID_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[a-zA-Z0-9_-]{11}$")

_VIDEO_URL_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"(?:youtube\.com/watch\?v=|youtu\.be/|youtube\.com/embed/|youtube\.com/v/"
    r"|m\.youtube\.com/watch\?v=|youtube\.com/watch\?.*&v=)([^#&?]{11})"
)
_YOUTUBE_HOST_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^https?://(www\.)?(youtube\.com|youtu\.be|m\.youtube\.com)"
)
_PLAYLIST_PATTERN: Final[re.Pattern[str]] = re.compile(r"[&?]list=([a-zA-Z0-9_-]+)")


def is_valid_video_id(value: object) -> bool:
    """Return ``True`` when *value* is a well-formed 11-character video id."""
    return isinstance(value, str) and VIDEO_ID_PATTERN.fullmatch(value) is not None


def extract_video_id(url: object) -> str | None:
    """Extract the video id from a YouTube URL or a bare id.

    Args:
        url: Watch, short, embed or mobile URL, or an 11-character id.

    Returns:
        The video id, or ``None`` when nothing recognisable is found.

    Examples:
        >>> extract_video_id("https://youtu.be/dQw4w9WgXcQ?t=42")
        'dQw4w9WgXcQ'
    """
    if not url or not isinstance(url, str):
        return None
    match = _VIDEO_URL_PATTERN.search(url)
    if match:
        return match.group(1)
    if VIDEO_ID_PATTERN.fullmatch(url):
        return url
    return None


def is_valid_youtube_url(url: object) -> bool:
    """Return ``True`` for YouTube-hosted URLs and bare video ids."""
    if not url or not isinstance(url, str):
        return False
    return bool(_YOUTUBE_HOST_PATTERN.match(url) or VIDEO_ID_PATTERN.fullmatch(url))


def get_url_type(url: object) -> UrlType:
    """Classify a URL as a single video, a playlist, or unknown.

    A ``list=`` parameter wins over an embedded video id, so watch URLs
    opened from a playlist are reported as playlists.
    """
    if not url or not isinstance(url, str):
        return "unknown"
    if "list=" in url:
        return "playlist"
    if extract_video_id(url):
        return "video"
    return "unknown"


def extract_playlist_id(url: object) -> str | None:
    """Return the ``list=`` parameter of a playlist URL, if any."""
    if not url or not isinstance(url, str):
        return None
    match = _PLAYLIST_PATTERN.search(url)
    return match.group(1) if match else None


__all__ = [
    "VIDEO_ID_PATTERN",
    "UrlType",
    "extract_playlist_id",
    "extract_video_id",
    "get_url_type",
    "is_valid_video_id",
    "is_valid_youtube_url",
]
