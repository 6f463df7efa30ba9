"""Entropy source subsystem for randmix.

Re-exports the ABC, registry, and all built-in source implementations
for convenient access::

    from randmix.entropy import EntropySource, EntropySourceRegistry
    from randmix.entropy import MicroTimeSource, SystemEntropySource
"""

from randmix.entropy.base import EntropySource, validate_size
from randmix.entropy.counter import CounterRegistry, MonotonicCounter, shared_counter
from randmix.entropy.fallback import FallbackEntropySource
from randmix.entropy.microtime import MicroTimeSource
from randmix.entropy.mixed import MixedEntropySource
from randmix.entropy.mock import MockUniformSource
from randmix.entropy.registry import EntropySourceRegistry, register_entropy_source
from randmix.entropy.signals import AmbientSignals
from randmix.entropy.system import SystemEntropySource

__all__ = [
    "AmbientSignals",
    "CounterRegistry",
    "EntropySource",
    "EntropySourceRegistry",
    "FallbackEntropySource",
    "MicroTimeSource",
    "MixedEntropySource",
    "MockUniformSource",
    "MonotonicCounter",
    "SystemEntropySource",
    "register_entropy_source",
    "shared_counter",
    "validate_size",
]
