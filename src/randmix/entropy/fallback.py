"""Fallback entropy source: composition wrapper with transparent failover.

``FallbackEntropySource`` wraps a *primary* and a *fallback* source. When the
primary raises :class:`~randmix.exceptions.EntropyUnavailableError`, the
wrapper delegates to the fallback. **All other exceptions propagate
unchanged**, including ``InvalidArgumentError``: a bad request is the
caller's bug and must not be masked by a second source.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from randmix.entropy.base import EntropySource, validate_size
from randmix.exceptions import EntropyUnavailableError

if TYPE_CHECKING:
    from randmix.strength import Strength

logger = logging.getLogger("randmix")


class FallbackEntropySource(EntropySource):
    """Tries *primary*, falls back on ``EntropyUnavailableError``.

    The reported strength is the weaker of the two, since a caller cannot
    know in advance which one will serve a request. :attr:`last_source_used`
    tells afterwards.

    Args:
        primary: The preferred entropy source.
        fallback: The source to use when the primary is unavailable.
    """

    def __init__(self, primary: EntropySource, fallback: EntropySource) -> None:
        self._primary = primary
        self._fallback = fallback
        self._last_source_used: str = primary.name
        self._used_fallback = False

    @property
    def name(self) -> str:
        """Return a compound name: ``'<primary>+<fallback>'``."""
        return f"{self._primary.name}+{self._fallback.name}"

    @property
    def is_available(self) -> bool:
        """``True`` if either the primary or fallback is available."""
        return self._primary.is_available or self._fallback.is_available

    @property
    def primary(self) -> EntropySource:
        return self._primary

    @property
    def fallback(self) -> EntropySource:
        return self._fallback

    @property
    def last_source_used(self) -> str:
        """Name of the source that provided bytes on the last call."""
        return self._last_source_used

    @property
    def used_fallback(self) -> bool:
        """Whether the last call was served by the fallback."""
        return self._used_fallback

    def report_strength(self) -> Strength:
        """The weaker of the primary's and the fallback's strength."""
        return min(self._primary.report_strength(), self._fallback.report_strength())

    def generate(self, size: int) -> bytes:
        """Fetch bytes from the primary source, falling back if unavailable.

        Raises:
            InvalidArgumentError: If *size* is invalid; neither source is
                called.
            EntropyUnavailableError: If **both** sources fail.
        """
        validate_size(size)
        try:
            data = self._primary.generate(size)
            self._last_source_used = self._primary.name
            self._used_fallback = False
            return data
        except EntropyUnavailableError:
            logger.warning(
                "Primary entropy source %r unavailable, falling back to %r",
                self._primary.name,
                self._fallback.name,
            )
            data = self._fallback.generate(size)
            self._last_source_used = self._fallback.name
            self._used_fallback = True
            return data

    def close(self) -> None:
        """Close both primary and fallback sources."""
        self._primary.close()
        self._fallback.close()

    def health_check(self) -> dict[str, Any]:
        """Return health status for both sources."""
        health = super().health_check()
        health.update(
            primary=self._primary.health_check(),
            fallback=self._fallback.health_check(),
            last_source_used=self._last_source_used,
            used_fallback=self._used_fallback,
        )
        return health
