"""Diagnostic logging subsystem for randmix.

Provides immutable per-call generation records and a configurable logger
that supports none/summary/full verbosity and in-memory diagnostic mode.
"""

from randmix.logging.logger import GenerationLogger
from randmix.logging.types import GenerationRecord

__all__ = [
    "GenerationLogger",
    "GenerationRecord",
]
