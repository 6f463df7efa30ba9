"""Base class for mixers.

A mixer folds several equal-purpose byte strings, one per source, into a
single output. A good mixer keeps the output at least as unpredictable as
its least predictable input, up to the mixer's own strength.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from randmix.exceptions import MixingError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from randmix.strength import Strength


class Mixer(ABC):
    """Abstract base class for mixing algorithms."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Registered identifier of the mixer."""

    @property
    @abstractmethod
    def strength(self) -> Strength:
        """Ceiling on the strength of anything this mixer produces."""

    @abstractmethod
    def mix(self, parts: Sequence[bytes], size: int) -> bytes:
        """Combine *parts* into exactly *size* bytes.

        Args:
            parts: One byte string per source, each at least *size* long.
            size: Output length.

        Returns:
            Exactly *size* bytes.

        Raises:
            MixingError: If *parts* is empty or a part is too short.
        """

    @staticmethod
    def _check_parts(parts: Sequence[bytes], size: int) -> None:
        if not parts:
            raise MixingError("Nothing to mix: no parts given")
        for index, part in enumerate(parts):
            if len(part) < size:
                raise MixingError(
                    f"Part {index} has {len(part)} bytes, need at least {size}"
                )
