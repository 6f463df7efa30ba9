"""Very weak entropy from wall-clock time and volatile process state.

The source folds microsecond timestamps, memory usage and a shared
counter through SHA-512. Its output is hard to predict but in no way
secret, so it is rated ``VERY_LOW`` and is only useful mixed with
stronger sources.
"""

from __future__ import annotations

import hashlib
import logging
import struct
from typing import TYPE_CHECKING

from randmix.entropy.base import EntropySource, validate_size
from randmix.entropy.counter import INT_MAX, shared_counter
from randmix.entropy.registry import register_entropy_source
from randmix.entropy.signals import AmbientSignals
from randmix.strength import Strength

if TYPE_CHECKING:
    from randmix.config import RandMixConfig
    from randmix.entropy.counter import MonotonicCounter

logger = logging.getLogger("randmix")

# Bytes of each round digest that reach the caller. The rest stays private
# so earlier output never reveals the full state.
STRIDE = 8

# Enough bytes to cover INT_MAX written in hex (16 on 64-bit builds).
_COUNTER_SEED_SIZE = len(format(INT_MAX, "x"))


def _digest(data: bytes) -> bytes:
    return hashlib.sha512(data).digest()


def pack_counter(value: int) -> bytes:
    """Low 32 bits of *value*, 4 bytes little-endian."""
    return struct.pack("<I", value & 0xFFFFFFFF)


@register_entropy_source("microtime")
class MicroTimeSource(EntropySource):
    """Time-based weak source.

    Not safe for concurrent ``generate()`` calls on one instance. The
    counter it advances is shared process-wide and is safe across
    instances.

    Args:
        config: Optional configuration; ``microtime_gc_jitter`` decides
            whether a GC pass perturbs timing before each call.
        signals: Platform signals to draw on. Defaults to
            :meth:`AmbientSignals.system`.
        counter: Counter to advance per round. Defaults to the counter
            shared by every ``MicroTimeSource`` in the process.
    """

    counter_key = "microtime"

    def __init__(
        self,
        config: RandMixConfig | None = None,
        signals: AmbientSignals | None = None,
        counter: MonotonicCounter | None = None,
    ) -> None:
        if signals is None:
            gc_jitter = config.microtime_gc_jitter if config is not None else True
            signals = AmbientSignals.system(gc_jitter=gc_jitter)
        self._signals = signals
        self._counter = counter if counter is not None else shared_counter(self.counter_key)
        self._state = _digest(signals.seed_material())

        if not self._counter.seeded:
            seed = self.generate(_COUNTER_SEED_SIZE)
            if self._counter.seed(int.from_bytes(seed, "big", signed=True)):
                logger.debug("Seeded %r counter from source output", self.counter_key)

    @property
    def name(self) -> str:
        """Return ``'microtime'``."""
        return "microtime"

    @property
    def is_available(self) -> bool:
        """Always ``True``; the clock is always there."""
        return True

    def report_strength(self) -> Strength:
        """Always ``Strength.VERY_LOW``."""
        return Strength.VERY_LOW

    def generate(self, size: int) -> bytes:
        """Return *size* weak pseudorandom bytes.

        The state is first reseeded with the clock and memory usage, then
        stepped once per 8-byte stride with a fresh timestamp, the stride
        offset and the next counter value. Each stride contributes only the
        first 8 bytes of its digest.

        Args:
            size: Number of bytes to generate.

        Returns:
            Exactly *size* bytes. ``generate(0)`` returns ``b""`` and leaves
            the state untouched.

        Raises:
            InvalidArgumentError: If *size* is negative or not an integer.
        """
        validate_size(size)
        if size == 0:
            return b""

        signals = self._signals
        reseed = signals.clock() + (signals.memory_usage() or b"")
        self._state = _digest(self._state + reseed)

        if signals.jitter is not None:
            signals.jitter()

        result = bytearray()
        for offset in range(0, size, STRIDE):
            self._state = _digest(
                self._state
                + signals.clock()
                + (offset & 0xFFFFFFFF).to_bytes(4, "big")
                + pack_counter(self._counter.advance())
            )
            result += self._state[:STRIDE]
        return bytes(result[:size])

    def close(self) -> None:
        """No-op; the state dies with the instance."""
