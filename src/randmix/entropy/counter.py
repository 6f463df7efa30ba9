"""Process-wide monotonic counters shared by all instances of a source type.

A counter decorrelates successive digest rounds when the wall clock does
not advance between them. Counters live in :class:`CounterRegistry`, keyed
by source type, and are created lazily on first request. They are seeded
at most once per process and every read-modify-write happens under a lock,
so concurrently running instances never observe the same value.
"""

from __future__ import annotations

import sys
import threading
from typing import ClassVar

INT_MAX = sys.maxsize
INT_MIN = -sys.maxsize - 1
_INT_SPAN = INT_MAX - INT_MIN + 1


def fold_signed(value: int) -> int:
    """Map an arbitrary integer into ``[INT_MIN, INT_MAX]`` by wrap-around."""
    return (value - INT_MIN) % _INT_SPAN + INT_MIN


class MonotonicCounter:
    """Lock-protected counter that wraps from ``INT_MAX`` to ``INT_MIN``.

    An unseeded counter advances from zero. :meth:`seed` is compare-and-set:
    only the first call takes effect.

    Args:
        value: Optional starting value. Passing one marks the counter seeded.
    """

    def __init__(self, value: int | None = None) -> None:
        self._lock = threading.Lock()
        self._value = 0 if value is None else fold_signed(value)
        self._seeded = value is not None

    @property
    def seeded(self) -> bool:
        """Whether :meth:`seed` (or an explicit start value) has taken effect."""
        with self._lock:
            return self._seeded

    @property
    def value(self) -> int:
        """The last value handed out (or the seed)."""
        with self._lock:
            return self._value

    def seed(self, value: int) -> bool:
        """Set the counter's value unless it has been seeded already.

        Args:
            value: Any integer; folded into the platform's signed range.

        Returns:
            ``True`` if this call seeded the counter, ``False`` if another
            caller got there first.
        """
        with self._lock:
            if self._seeded:
                return False
            self._value = fold_signed(value)
            self._seeded = True
            return True

    def advance(self) -> int:
        """Step the counter and return the new value."""
        with self._lock:
            if self._value >= INT_MAX:
                self._value = INT_MIN
            else:
                self._value += 1
            return self._value


class CounterRegistry:
    """Source-type-level owner of the shared counters."""

    _counters: ClassVar[dict[str, MonotonicCounter]] = {}
    _lock: ClassVar[threading.Lock] = threading.Lock()

    @classmethod
    def get(cls, key: str) -> MonotonicCounter:
        """Return the counter for *key*, creating it on first use."""
        with cls._lock:
            counter = cls._counters.get(key)
            if counter is None:
                counter = cls._counters[key] = MonotonicCounter()
            return counter

    @classmethod
    def _reset(cls) -> None:
        """Drop all counters. **Test-only**."""
        with cls._lock:
            cls._counters.clear()


shared_counter = CounterRegistry.get
