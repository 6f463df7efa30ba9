"""Configurable mock entropy source for testing and bias simulation.

Generates bytes from a normal distribution with configurable mean, allowing
deterministic tests (via seed) and controlled bias experiments.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from randmix.entropy.base import EntropySource, validate_size
from randmix.entropy.registry import register_entropy_source
from randmix.strength import Strength

if TYPE_CHECKING:
    from randmix.config import RandMixConfig


@register_entropy_source("mock_uniform")
class MockUniformSource(EntropySource):
    """Seeded mock source. Rated ``VERY_LOW``; never use outside tests.

    Args:
        mean: Centre of the normal distribution bytes are drawn from.
        seed: Optional RNG seed for reproducible output.
        config: When given, ``mock_mean`` and ``mock_seed`` replace *mean*
            and *seed*.
    """

    _MOCK_BYTE_STD: float = 40.0

    def __init__(
        self,
        mean: float = 127.5,
        seed: int | None = None,
        config: RandMixConfig | None = None,
    ) -> None:
        if config is not None:
            mean, seed = config.mock_mean, config.mock_seed
        self._mean = mean
        self._rng = np.random.default_rng(seed)

    @property
    def name(self) -> str:
        """Return ``'mock_uniform'``."""
        return "mock_uniform"

    @property
    def is_available(self) -> bool:
        """Always returns ``True``."""
        return True

    def report_strength(self) -> Strength:
        """Always ``Strength.VERY_LOW``."""
        return Strength.VERY_LOW

    def generate(self, size: int) -> bytes:
        """Draw *size* bytes from ``N(mean, 40)`` clamped to ``[0, 255]``."""
        validate_size(size)
        samples = self._rng.normal(loc=self._mean, scale=self._MOCK_BYTE_STD, size=size)
        return np.clip(samples, 0, 255).astype(np.uint8).tobytes()

    def close(self) -> None:
        """No-op."""
