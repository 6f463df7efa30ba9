"""SHA-512 block mixer."""

from __future__ import annotations

import hashlib
from typing import TYPE_CHECKING

from randmix.mixing.base import Mixer
from randmix.mixing.registry import MixerRegistry
from randmix.strength import Strength

if TYPE_CHECKING:
    from collections.abc import Sequence

BLOCK_SIZE = hashlib.sha512().digest_size


@MixerRegistry.register("hash")
class HashMixer(Mixer):
    """Hash each 64-byte column of the parts together.

    Output block *i* is ``sha512(i || parts[0][i] || parts[1][i] || ...)``
    where ``parts[k][i]`` is the *i*-th 64-byte block of part *k*. A single
    unpredictable part makes every output block unpredictable.
    """

    @property
    def name(self) -> str:
        return "hash"

    @property
    def strength(self) -> Strength:
        return Strength.MEDIUM

    def mix(self, parts: Sequence[bytes], size: int) -> bytes:
        self._check_parts(parts, size)
        out = bytearray()
        for index, start in enumerate(range(0, size, BLOCK_SIZE)):
            h = hashlib.sha512(index.to_bytes(4, "big"))
            for part in parts:
                h.update(part[start : start + BLOCK_SIZE])
            out += h.digest()
        return bytes(out[:size])
