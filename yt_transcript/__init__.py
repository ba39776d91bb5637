"""yt-transcript: YouTube caption retrieval and export package init."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("yt-transcript")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.3.0"

__all__ = ["__version__"]
