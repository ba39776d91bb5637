"""Centralized logging configuration for yt-transcript.

This module provides consistent logging setup across the CLI and the REST
API. Configuration respects environment variables and provides sensible
defaults for production and development.
"""

from __future__ import annotations

import logging
import os
import sys
import warnings
from typing import Literal, TextIO

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# HTTP client loggers that log every request at INFO/DEBUG.
_NOISY_HTTP_LOGGERS: tuple[str, ...] = ("httpx", "httpcore", "urllib3", "requests")


def _configure_third_party_log_levels(*, log_level: int) -> None:
    """Set explicit levels for noisy third-party loggers.

    Args:
        log_level: Effective root log level chosen for the application.
    """
    # HTTP client chatter is only useful while debugging upstream calls.
    third_party_level = logging.DEBUG if log_level <= logging.DEBUG else logging.WARNING
    for name in _NOISY_HTTP_LOGGERS:
        logging.getLogger(name).setLevel(third_party_level)
    logging.getLogger("python_multipart").setLevel(logging.WARNING)
    logging.getLogger("multipart").setLevel(logging.WARNING)


def configure_logging(
    *,
    level: LogLevel | None = None,
    verbose: bool = False,
    quiet: bool = False,
    format_string: str | None = None,
    stream: TextIO | None = None,
) -> None:
    """Configure centralized logging for the application.

    This should be called once at application startup (CLI entry or server
    launch).

    Args:
        level: Explicit log level (overrides verbose/quiet and ``LOG_LEVEL``).
        verbose: Enable verbose logging (DEBUG level + HTTP client logs).
        quiet: Suppress all non-critical logs.
        format_string: Custom log format (uses default if None).
        stream: Destination stream, stdout unless given. The CLI logs to
            stderr so rendered transcripts can be piped from stdout.

    Examples:
        >>> # CLI verbose mode
        >>> configure_logging(verbose=True)

        >>> # Production quiet mode
        >>> configure_logging(quiet=True)
    """
    # Determine effective log level
    if level is not None:
        log_level = getattr(logging, level.upper())
    elif verbose:
        log_level = logging.DEBUG
    elif quiet:
        log_level = logging.CRITICAL
    else:
        env_level = os.getenv("LOG_LEVEL", "INFO").upper()
        log_level = getattr(logging, env_level, logging.INFO)

    # Default format with timestamp
    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=log_level,
        format=format_string,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=stream if stream is not None else sys.stdout,
        force=True,  # Reconfigure even if already configured
    )
    _configure_third_party_log_levels(log_level=log_level)

    if quiet:
        warnings.filterwarnings("ignore")
    else:
        logger = logging.getLogger(__name__)
        logger.debug(f"Logging configured: level={logging.getLevelName(log_level)}")


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the given name.

    Args:
        name: Logger name (typically __name__ of calling module).

    Returns:
        Configured logger instance.

    Examples:
        >>> logger = get_logger(__name__)
        >>> logger.info("Resolution started")
    """
    return logging.getLogger(name)
