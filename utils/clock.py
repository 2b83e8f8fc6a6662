import time
from typing import Protocol


class Clock(Protocol):
    def now(self) -> int:
        """Current time in epoch seconds."""
        ...


class SystemClock:
    def now(self) -> int:
        return int(time.time())


class FixedClock:
    """A clock that only moves when told to; used by tests."""

    def __init__(self, now: int):
        self._now = int(now)

    def now(self) -> int:
        return self._now

    def advance(self, seconds: int) -> None:
        self._now += int(seconds)
