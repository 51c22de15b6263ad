"""Collaborator protocols for the task service.

The service depends on two outside capabilities only: something that hands
out unique id strings and something that tells the time. Both are protocols so
that tests and embedding applications can supply their own.
"""

import threading
import time
from collections.abc import Callable
from typing import Protocol, runtime_checkable
from uuid import uuid4


@runtime_checkable
class IdFactory(Protocol):
    """Produces globally unique task ids."""

    def __call__(self) -> str:
        """Return a fresh id."""
        ...


@runtime_checkable
class Clock(Protocol):
    """Source of non-decreasing timestamps in nanoseconds."""

    def now(self) -> int:
        """Return the current time."""
        ...


def uuid4_id_factory() -> str:
    """Default id factory backed by random UUIDs."""
    return str(uuid4())


class MonotonicClock:
    """Wall-clock nanoseconds that never go backwards within a process.

    If the wall clock steps back (NTP adjustment, manual change) the last
    returned value is repeated until real time catches up.
    """

    def __init__(self, source: Callable[[], int] = time.time_ns):
        """Initialize with a raw nanosecond time source."""
        self._source = source
        self._last = 0
        self._lock = threading.Lock()

    def now(self) -> int:
        """Return the current time, clamped to be non-decreasing."""
        with self._lock:
            current = max(int(self._source()), self._last)
            self._last = current
            return current
