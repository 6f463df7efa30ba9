"""Composite source that mixes the output of several sources.

``MixedEntropySource`` is itself an :class:`EntropySource`, so mixed sources
can be chained, wrapped in a fallback, or mixed again.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any

from randmix.entropy.base import EntropySource, validate_size
from randmix.exceptions import EntropyUnavailableError, InvalidArgumentError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from randmix.mixing.base import Mixer
    from randmix.strength import Strength

logger = logging.getLogger("randmix")


class MixedEntropySource(EntropySource):
    """Query every available source for *size* bytes and mix the results.

    Sources are consulted weakest first. Each source is guarded by a lock
    owned by this wrapper, so concurrent calls through one
    ``MixedEntropySource`` never enter a child twice at once. The locks are
    not shared between wrappers: a child placed in two ``MixedEntropySource``
    instances must be serialized by the caller.

    Strength is ``min(mixer.strength, max(source strengths))``: mixing
    cannot make output weaker than its strongest input, nor stronger than
    the mixer. The rating holds for every call; if no source rated at least
    that strength contributes, ``generate()`` fails instead of returning
    weaker output.

    Args:
        sources: One or more sources to mix.
        mixer: Mixer folding the per-source outputs.

    Raises:
        InvalidArgumentError: If *sources* is empty.
    """

    def __init__(self, sources: Sequence[EntropySource], mixer: Mixer) -> None:
        if not sources:
            raise InvalidArgumentError("MixedEntropySource needs at least one source")
        self._sources = sorted(sources, key=lambda s: s.report_strength())
        self._locks = [threading.Lock() for _ in self._sources]
        self._mixer = mixer

    @property
    def name(self) -> str:
        """Return ``'<mixer>(<a>,<b>,...)'``, sources in consultation order."""
        return f"{self._mixer.name}({','.join(s.name for s in self._sources)})"

    @property
    def is_available(self) -> bool:
        """``True`` if a source backing the reported strength is available."""
        rating = self.report_strength()
        return any(
            s.is_available and s.report_strength() >= rating for s in self._sources
        )

    @property
    def sources(self) -> list[EntropySource]:
        """Child sources, weakest first."""
        return list(self._sources)

    @property
    def mixer(self) -> Mixer:
        return self._mixer

    def report_strength(self) -> Strength:
        strongest = max(s.report_strength() for s in self._sources)
        return min(self._mixer.strength, strongest)

    def generate(self, size: int) -> bytes:
        """Mix *size* bytes from every available child.

        Children that report themselves unavailable, or raise
        ``EntropyUnavailableError``, are skipped as long as a child rated at
        least :meth:`report_strength` still contributes.

        Raises:
            InvalidArgumentError: If *size* is invalid.
            EntropyUnavailableError: If no child backing the reported
                strength produced bytes.
        """
        validate_size(size)
        if size == 0:
            return b""

        rating = self.report_strength()
        parts: list[bytes] = []
        backed = False
        for source, lock in zip(self._sources, self._locks):
            if not source.is_available:
                logger.debug("Skipping unavailable entropy source %r", source.name)
                continue
            try:
                with lock:
                    parts.append(source.generate(size))
            except EntropyUnavailableError:
                logger.debug("Entropy source %r failed, skipping", source.name, exc_info=True)
                continue
            backed = backed or source.report_strength() >= rating

        if not backed:
            raise EntropyUnavailableError(
                f"No source in {self.name} rated {rating.label} or stronger "
                f"could provide bytes"
            )
        return self._mixer.mix(parts, size)

    def close(self) -> None:
        """Close every child source."""
        for source in self._sources:
            source.close()

    def health_check(self) -> dict[str, Any]:
        health = super().health_check()
        health["mixer"] = self._mixer.name
        health["sources"] = [s.health_check() for s in self._sources]
        return health
