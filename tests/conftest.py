"""Shared test fixtures for the yt_transcript test suite."""

from __future__ import annotations

from collections.abc import Callable, Iterator

import pytest

from yt_transcript.config import RateLimitConfig
from yt_transcript.transcript.models import TranscriptSegment
from yt_transcript.transcript.outcomes import AttemptOutcome
from yt_transcript.transcript.rate_limiter import RateLimiter, reset_default_rate_limiter


class FakeClock:
    """Monotonic clock whose ``sleep`` advances time instantly."""

    def __init__(self) -> None:
        self.now = 100.0
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class FakeSource:
    """Caption source returning canned outcomes keyed by target."""

    def __init__(
        self,
        name: str,
        outcomes: dict[str, AttemptOutcome | Exception] | None = None,
        default: AttemptOutcome | None = None,
    ) -> None:
        self.name = name
        self.outcomes = outcomes or {}
        self.default = default or AttemptOutcome.empty("nothing")
        self.calls: list[str] = []

    async def fetch(self, id_or_url: str) -> AttemptOutcome:
        self.calls.append(id_or_url)
        outcome = self.outcomes.get(id_or_url, self.default)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture(autouse=True)
def _reset_shared_rate_limiter() -> Iterator[None]:
    """Give every test a fresh process-wide rate limiter."""
    reset_default_rate_limiter()
    yield
    reset_default_rate_limiter()


@pytest.fixture
def clock() -> FakeClock:
    """Return a controllable clock."""
    return FakeClock()


@pytest.fixture
def rate_limiter(clock: FakeClock) -> RateLimiter:
    """Return a limiter with the default delays driven by ``clock``."""
    config = RateLimitConfig(base_delay_ms=500, max_delay_ms=5000, backoff_multiplier=1.5)
    return RateLimiter(config, clock=clock, sleep=clock.sleep)


@pytest.fixture
def make_source() -> Callable[..., FakeSource]:
    """Return the ``FakeSource`` constructor."""
    return FakeSource


@pytest.fixture
def segments() -> list[TranscriptSegment]:
    """Return two ordinary caption segments."""
    return [
        TranscriptSegment(text="Hello world", offset=0, duration=2),
        TranscriptSegment(text="Second line", offset=2, duration=3),
    ]
