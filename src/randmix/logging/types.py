"""Data types for the diagnostic logging subsystem."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class GenerationRecord:
    """Immutable record of one ``Generator`` call.

    Attributes:
        timestamp_ns: Wall-clock time of the call (nanoseconds since epoch).
        elapsed_ms: Time spent producing the bytes (milliseconds).
        operation: ``'bytes'`` or ``'int'``.
        size: Number of bytes handed to the caller (or drawn, for ints).
        source_name: Name of the top-level source.
        source_used: Name of the source that served the call; differs from
            ``source_name`` only when a fallback wrapper is involved.
        strength: Label of the source's strength at call time.
        is_fallback: True if a fallback source served the call.
    """

    timestamp_ns: int
    elapsed_ms: float
    operation: str
    size: int
    source_name: str
    source_used: str
    strength: str
    is_fallback: bool
