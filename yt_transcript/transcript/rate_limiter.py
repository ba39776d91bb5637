"""Adaptive pacing for outbound caption requests.

The limiter spaces consecutive attempts by a delay that grows exponentially
with the number of consecutive failed resolutions:

    delay = min(max_delay, base_delay * backoff_multiplier ** consecutive_failures)

Successes walk the counter back down towards the base delay. The limiter only
reads the counter and writes the last-attempt timestamp; the resolver decides
what counts as a success or a failure.

The two fields are not guarded by a lock. Concurrent ``pace()`` calls may read
the same timestamp and proceed together, so pacing is only guaranteed for
sequential callers. Give each logical client its own ``RateLimiter`` when
that matters.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable

from yt_transcript.config import RateLimitConfig
from yt_transcript.utils.logging_config import get_logger

logger = get_logger(__name__)

__all__ = ["RateLimiter", "get_default_rate_limiter", "reset_default_rate_limiter"]


class RateLimiter:
    """Cooperative pacing gate with failure-driven backoff.

    Args:
        config: Delay settings; defaults come from the environment.
        clock: Monotonic clock in seconds.
        sleep: Coroutine function used to wait, ``asyncio.sleep`` by default.
    """

    def __init__(
        self,
        config: RateLimitConfig | None = None,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    ) -> None:
        self.config = config or RateLimitConfig()
        self._clock = clock
        self._sleep = sleep
        self.last_request_time: float | None = None
        self.consecutive_failures = 0

    def current_delay(self) -> float:
        """Return the spacing currently enforced between attempts, in seconds."""
        delay_ms = min(
            self.config.max_delay_ms,
            self.config.base_delay_ms
            * self.config.backoff_multiplier**self.consecutive_failures,
        )
        return delay_ms / 1000.0

    async def pace(self) -> float:
        """Wait until the next attempt is allowed, then record it.

        Returns:
            Seconds spent waiting (0.0 when no wait was needed).
        """
        delay = self.current_delay()
        waited = 0.0
        if self.last_request_time is not None:
            elapsed = self._clock() - self.last_request_time
            if elapsed < delay:
                waited = delay - elapsed
                logger.debug(
                    "Pacing caption request: wait=%.3fs delay=%.3fs failures=%d",
                    waited,
                    delay,
                    self.consecutive_failures,
                )
                await self._sleep(waited)
        self.last_request_time = self._clock()
        return waited

    def record_success(self) -> None:
        """Decay the failure counter after a successful resolution (floor 0)."""
        self.consecutive_failures = max(0, self.consecutive_failures - 1)

    def record_failure(self) -> None:
        """Grow the failure counter after a fully failed resolution."""
        self.consecutive_failures += 1
        logger.debug("Consecutive resolution failures: %d", self.consecutive_failures)


_default_rate_limiter: RateLimiter | None = None


def get_default_rate_limiter() -> RateLimiter:
    """Return the process-wide limiter shared by the API and the CLI."""
    global _default_rate_limiter
    if _default_rate_limiter is None:
        _default_rate_limiter = RateLimiter()
    return _default_rate_limiter


def reset_default_rate_limiter() -> None:
    """Drop the shared limiter so the next caller starts from a clean state.

    This is primarily useful for tests that exercise the shared default.
    """
    global _default_rate_limiter
    _default_rate_limiter = None
