"""Best-effort ambient process signals used as weak seed material.

Each probe returns ``bytes`` or ``None``. ``None`` means the signal is not
available on this platform and simply contributes nothing; probes never
raise for an unavailable signal.
"""

from __future__ import annotations

import gc
import json
import logging
import os
import sys
import time
from collections.abc import Callable
from dataclasses import dataclass

try:
    import resource
except ImportError:  # Not available on Windows.
    resource = None  # type: ignore[assignment]

logger = logging.getLogger("randmix")

Probe = Callable[[], bytes | None]


def clock() -> bytes:
    """Wall-clock reading as ``b'<seconds>.<microseconds>'``."""
    seconds, nanos = divmod(time.time_ns(), 1_000_000_000)
    return f"{seconds}.{nanos // 1000:06d}".encode("ascii")


def cpu_times() -> bytes | None:
    """Process user/system CPU times and elapsed real time."""
    try:
        times = os.times()
    except OSError:
        return None
    return repr(tuple(times)).encode("ascii")


def process_id() -> bytes | None:
    """Current process identifier."""
    return str(os.getpid()).encode("ascii")


def memory_usage() -> bytes | None:
    """Snapshot of the interpreter's memory use.

    Combines the number of live allocator blocks with the resident set
    high-water mark where ``resource`` exists.
    """
    parts: list[str] = []
    getblocks = getattr(sys, "getallocatedblocks", None)
    if getblocks is not None:
        parts.append(str(getblocks()))
    if resource is not None:
        try:
            parts.append(str(resource.getrusage(resource.RUSAGE_SELF).ru_maxrss))
        except (OSError, ValueError):
            pass
    if not parts:
        return None
    return ":".join(parts).encode("ascii")


def environment() -> bytes | None:
    """Sorted JSON snapshot of the process environment."""
    snapshot = dict(os.environ)
    if not snapshot:
        return None
    return json.dumps(snapshot, sort_keys=True).encode("utf-8", "surrogateescape")


@dataclass(frozen=True)
class AmbientSignals:
    """The set of platform services a weak time-based source draws on.

    Attributes:
        clock: High-resolution wall-clock reading, read on every round.
        memory_usage: Memory snapshot, read once per ``generate()`` call.
        seed_probes: Named probes read once at construction.
        jitter: Optional hook run before the round loop to perturb timing.
            ``None`` disables it, at the cost of slightly more predictable
            timestamps.
    """

    clock: Callable[[], bytes]
    memory_usage: Probe
    seed_probes: tuple[tuple[str, Probe], ...]
    jitter: Callable[[], object] | None = gc.collect

    @classmethod
    def system(cls, gc_jitter: bool = True) -> AmbientSignals:
        """Signals backed by the running interpreter and OS."""
        return cls(
            clock=clock,
            memory_usage=memory_usage,
            seed_probes=(
                ("cpu_times", cpu_times),
                ("pid", process_id),
                ("memory_usage", memory_usage),
                ("environment", environment),
            ),
            jitter=gc.collect if gc_jitter else None,
        )

    def seed_material(self) -> bytes:
        """Concatenate every available seed probe, skipping missing ones."""
        material = bytearray()
        for probe_name, probe in self.seed_probes:
            value = probe()
            if value is None:
                logger.debug("Ambient signal %r unavailable, omitting from seed", probe_name)
                continue
            material += value
        return bytes(material)
