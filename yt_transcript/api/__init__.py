"""REST API package for yt-transcript."""

from __future__ import annotations

from yt_transcript.api.app import create_app

__all__ = ["create_app"]
