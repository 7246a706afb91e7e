"""Injectable time sources.

All reads of "now" by the filter go through a clock object, so tests can
pin the current instant instead of racing the system clock.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Protocol


class Clock(Protocol):
    """Anything that can report the current time in epoch seconds."""

    def now(self) -> float: ...


class SystemClock:
    """Wall-clock time with sub-second precision."""

    def now(self) -> float:
        return time.time()

    def __repr__(self) -> str:
        return "SystemClock()"


@dataclass
class FixedClock:
    """A clock that only moves when told to.

    Example usage:
        clock = FixedClock(1_700_000_000.0)
        clock.advance(5)
        assert clock.now() == 1_700_000_005.0
    """

    instant: float

    def now(self) -> float:
        return self.instant

    def advance(self, seconds: float) -> None:
        """Move the clock forward (or backward, for negative values)."""
        self.instant += seconds
