"""Shared pytest fixtures for randmix tests.

Provides configuration objects, deterministic ambient signals for the
time-based source, and isolation of the process-wide counters.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator

import pytest

from randmix.config import RandMixConfig
from randmix.entropy.counter import CounterRegistry
from randmix.entropy.mock import MockUniformSource
from randmix.entropy.signals import AmbientSignals

FIXED_CLOCK = b"1700000000.123456"
FIXED_MEMORY = b"4096:1024"
FIXED_SEED = b"pid=1234;env={}"


@pytest.fixture(autouse=True)
def _isolate_counters() -> Iterator[None]:
    """Give every test a fresh set of shared counters."""
    CounterRegistry._reset()
    yield
    CounterRegistry._reset()


@pytest.fixture
def default_config() -> RandMixConfig:
    """Return a RandMixConfig with all default values."""
    return RandMixConfig()


@pytest.fixture
def silent_config() -> RandMixConfig:
    """Return a config with no log output."""
    return RandMixConfig(log_level="none")


@pytest.fixture
def fixed_signals() -> Callable[..., AmbientSignals]:
    """Factory for fully deterministic ambient signals.

    The clock never moves and there is no jitter hook, so two sources built
    from the same signals and equal counters produce identical output.
    """

    def make(
        clock: bytes = FIXED_CLOCK,
        memory: bytes | None = FIXED_MEMORY,
        seed: bytes | None = FIXED_SEED,
        jitter: Callable[[], object] | None = None,
    ) -> AmbientSignals:
        return AmbientSignals(
            clock=lambda: clock,
            memory_usage=lambda: memory,
            seed_probes=(("fixed", lambda: seed),),
            jitter=jitter,
        )

    return make


@pytest.fixture
def mock_entropy_source() -> MockUniformSource:
    """Return a MockUniformSource at the unbiased mean with a fixed seed."""
    return MockUniformSource(mean=127.5, seed=42)
