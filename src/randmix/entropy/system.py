"""System entropy source using ``os.urandom()``.

The default fallback and the strongest built-in source. Always available;
rated ``MEDIUM`` since randmix cannot vouch for the platform CSPRNG beyond
what the OS promises.
"""

from __future__ import annotations

import os

from randmix.entropy.base import EntropySource, validate_size
from randmix.entropy.registry import register_entropy_source
from randmix.strength import Strength


@register_entropy_source("system")
class SystemEntropySource(EntropySource):
    """``os.urandom()`` wrapper, always available."""

    @property
    def name(self) -> str:
        """Return ``'system'``."""
        return "system"

    @property
    def is_available(self) -> bool:
        """Always returns ``True``."""
        return True

    def report_strength(self) -> Strength:
        """Always ``Strength.MEDIUM``."""
        return Strength.MEDIUM

    def generate(self, size: int) -> bytes:
        """Return *size* bytes from the OS CSPRNG."""
        return os.urandom(validate_size(size))

    def close(self) -> None:
        """No-op; no resources to release."""
