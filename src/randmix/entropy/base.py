"""Abstract base class for all entropy sources.

Every entropy source (OS randomness, process timing, a composite of other
sources, or a test mock) implements this interface. The ABC provides a
concrete ``health_check()`` and the shared ``validate_size()`` guard. Subclasses must
implement the five abstract members: ``name``, ``is_available``,
``report_strength()``, ``generate()``, and ``close()``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from randmix.exceptions import InvalidArgumentError

if TYPE_CHECKING:
    from randmix.strength import Strength


def validate_size(size: object) -> int:
    """Check a requested byte count before any state is touched.

    Args:
        size: The requested number of bytes.

    Returns:
        *size*, unchanged.

    Raises:
        InvalidArgumentError: If *size* is not a non-negative integer.
    """
    if isinstance(size, bool) or not isinstance(size, int):
        raise InvalidArgumentError(f"size must be an integer, got {type(size).__name__}")
    if size < 0:
        raise InvalidArgumentError(f"size must be non-negative, got {size}")
    return size


class EntropySource(ABC):
    """Abstract base for all entropy sources.

    A source produces bytes on demand and rates its own trustworthiness.
    Instances are not safe for concurrent ``generate()`` calls; callers
    that share an instance across threads must serialize access.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable source identifier (e.g., ``'microtime'``, ``'system'``)."""

    @property
    @abstractmethod
    def is_available(self) -> bool:
        """Whether the source can currently provide entropy."""

    @abstractmethod
    def report_strength(self) -> Strength:
        """Return how far this source's output can be trusted.

        Must be free of side effects.
        """

    @abstractmethod
    def generate(self, size: int) -> bytes:
        """Return exactly *size* bytes.

        Args:
            size: Number of bytes to generate. ``0`` returns ``b""``.

        Returns:
            Exactly *size* bytes.

        Raises:
            InvalidArgumentError: If *size* is negative or not an integer.
            EntropyUnavailableError: If the source cannot provide bytes.
        """

    @abstractmethod
    def close(self) -> None:
        """Release resources held by the source."""

    def health_check(self) -> dict[str, Any]:
        """Return a status dictionary for this source.

        Returns:
            Dictionary with at least ``'source'``, ``'healthy'`` and
            ``'strength'`` keys.
        """
        return {
            "source": self.name,
            "healthy": self.is_available,
            "strength": self.report_strength().label,
        }
