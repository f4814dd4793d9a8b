"""Randomised delays between requests."""

from __future__ import annotations

import random
from dataclasses import dataclass
from datetime import timedelta

_U64_MAX = 2**64 - 1


@dataclass(frozen=True)
class TimingJitter:
    """A uniform delay range in milliseconds, both ends inclusive."""

    min_ms: int
    max_ms: int

    def __post_init__(self) -> None:
        if self.min_ms < 0 or self.max_ms < 0:
            raise ValueError("jitter bounds must be non-negative")

    def sample_delay(self, rng: random.Random) -> timedelta:
        """Draw a delay; an inverted range always yields ``min_ms``."""
        span = max(self.max_ms - self.min_ms, 0)
        offset = rng.randint(0, span) if span else 0
        return timedelta(milliseconds=min(self.min_ms + offset, _U64_MAX))

    def burstiness(self) -> bool:
        """True when the width of the range is even."""
        return max(self.max_ms - self.min_ms, 0) % 2 == 0


@dataclass(frozen=True)
class TimingJitterConfig:
    """Serialisable jitter settings."""

    min_ms: int = 80
    max_ms: int = 350

    def to_jitter(self) -> TimingJitter:
        return TimingJitter(self.min_ms, self.max_ms)