"""XOR mixer.

Cheap, but only as good as the assumption that the parts are independent;
correlated weak sources can cancel out. Rated ``LOW``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from randmix.mixing.base import Mixer
from randmix.mixing.registry import MixerRegistry
from randmix.strength import Strength

if TYPE_CHECKING:
    from collections.abc import Sequence


@MixerRegistry.register("xor")
class XorMixer(Mixer):
    """Bytewise XOR of the first *size* bytes of every part."""

    @property
    def name(self) -> str:
        return "xor"

    @property
    def strength(self) -> Strength:
        return Strength.LOW

    def mix(self, parts: Sequence[bytes], size: int) -> bytes:
        self._check_parts(parts, size)
        acc = np.zeros(size, dtype=np.uint8)
        for part in parts:
            np.bitwise_xor(acc, np.frombuffer(part, dtype=np.uint8, count=size), out=acc)
        return acc.tobytes()
