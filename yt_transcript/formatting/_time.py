"""Timestamp rendering shared by the SRT, VTT and CSV formatters."""

from __future__ import annotations


def format_time(seconds: float, vtt: bool = False) -> str:
    """Format a non-negative number of seconds as ``HH:MM:SS,mmm``.

    Parameters:
        seconds (float): Number of seconds (must be >= 0). May carry a
            fractional part, which is rendered as milliseconds.
        vtt (bool): Use ``.`` instead of ``,`` before the milliseconds, as
            WebVTT requires.

    Returns:
        str: Timestamp with at least two-digit hours (hours never wrap at 24),
            two-digit minutes and seconds, and three-digit milliseconds.

    Examples:
        >>> format_time(3661.234)
        '01:01:01,234'
        >>> format_time(3661.234, vtt=True)
        '01:01:01.234'
    """
    if seconds < 0:
        raise ValueError("non-negative timestamp required")
    # Round to whole milliseconds first so 3661.234 does not become ...,233.
    total_ms = round(seconds * 1000)
    hours, remainder = divmod(total_ms, 3_600_000)
    minutes, remainder = divmod(remainder, 60_000)
    secs, millis = divmod(remainder, 1000)
    separator = "." if vtt else ","
    return f"{int(hours):02d}:{int(minutes):02d}:{int(secs):02d}{separator}{int(millis):03d}"
