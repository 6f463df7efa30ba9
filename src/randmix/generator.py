"""Caller-facing facade over an assembled entropy source.

``Generator`` owns one source graph, serializes access to it, and logs
every call through :class:`~randmix.logging.logger.GenerationLogger`.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import TYPE_CHECKING, Any

from randmix.config import RandMixConfig, resolve_config
from randmix.entropy.base import validate_size
from randmix.entropy.fallback import FallbackEntropySource
from randmix.exceptions import ConfigValidationError, InvalidArgumentError
from randmix.factory import build_entropy_source
from randmix.logging.logger import GenerationLogger
from randmix.logging.types import GenerationRecord

if TYPE_CHECKING:
    from types import TracebackType

    from randmix.entropy.base import EntropySource
    from randmix.strength import Strength

logger = logging.getLogger("randmix")


class Generator:
    """Thread-safe random byte generator.

    Args:
        config: Configuration; loaded from the environment when omitted.
        source: Pre-built source. When omitted, one is assembled from
            *config* by :func:`~randmix.factory.build_entropy_source`.
    """

    def __init__(
        self,
        config: RandMixConfig | None = None,
        source: EntropySource | None = None,
    ) -> None:
        self._config = config if config is not None else RandMixConfig()
        self._source = source if source is not None else build_entropy_source(self._config)
        self._lock = threading.Lock()
        self._logger = GenerationLogger(self._config)
        logger.info(
            "randmix generator ready: source=%s strength=%s",
            self._source.name,
            self._source.report_strength().label,
        )

    @property
    def source(self) -> EntropySource:
        return self._source

    @property
    def config(self) -> RandMixConfig:
        return self._config

    @property
    def generation_logger(self) -> GenerationLogger:
        return self._logger

    @property
    def strength(self) -> Strength:
        """Strength of the underlying source."""
        return self._source.report_strength()

    def generate(self, size: int, overrides: dict[str, Any] | None = None) -> bytes:
        """Return exactly *size* bytes.

        Args:
            size: Number of bytes.
            overrides: Per-call config overrides: ``min_strength`` to demand
                a stronger source for this call, ``log_level`` to change its
                verbosity.

        Raises:
            InvalidArgumentError: If *size* is invalid.
            ConfigValidationError: If *overrides* are invalid or the source
                is weaker than the requested ``min_strength``.
            EntropyUnavailableError: If no source can serve the request.
        """
        validate_size(size)
        log_level = None
        if overrides:
            call_config = resolve_config(self._config, overrides)
            self._require_strength(call_config.strength_floor)
            log_level = call_config.log_level
        t0 = time.perf_counter()
        with self._lock:
            data = self._source.generate(size)
            record = self._build_record("bytes", size, t0)
        self._logger.log_generation(record, log_level=log_level)
        return data

    def generate_int(self, low: int, high: int) -> int:
        """Return a uniformly distributed integer in ``[low, high]``.

        Draws the minimum number of bytes covering the range and rejects
        values outside it, so no modulo bias is introduced.

        Raises:
            InvalidArgumentError: If ``low > high``.
        """
        if low > high:
            raise InvalidArgumentError(f"Empty range: low={low} > high={high}")
        span = high - low
        if span == 0:
            return low

        bits = span.bit_length()
        nbytes = (bits + 7) // 8
        mask = (1 << bits) - 1
        t0 = time.perf_counter()
        drawn = 0
        with self._lock:
            while True:
                value = int.from_bytes(self._source.generate(nbytes), "big") & mask
                drawn += nbytes
                if value <= span:
                    break
            record = self._build_record("int", drawn, t0)
        self._logger.log_generation(record)
        return low + value

    def close(self) -> None:
        """Close the underlying source."""
        self._source.close()

    def __enter__(self) -> Generator:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _require_strength(self, floor: Strength) -> None:
        strength = self._source.report_strength()
        if strength < floor:
            raise ConfigValidationError(
                f"Entropy source {self._source.name!r} is rated {strength.label}, "
                f"call requires {floor.label}"
            )

    def _build_record(self, operation: str, size: int, t0: float) -> GenerationRecord:
        # Caller holds self._lock so the fallback state belongs to this call.
        source = self._source
        if isinstance(source, FallbackEntropySource):
            is_fallback = source.used_fallback
            used = source.last_source_used
        else:
            is_fallback = False
            used = source.name
        return GenerationRecord(
            timestamp_ns=time.time_ns(),
            elapsed_ms=(time.perf_counter() - t0) * 1000.0,
            operation=operation,
            size=size,
            source_name=source.name,
            source_used=used,
            strength=source.report_strength().label,
            is_fallback=is_fallback,
        )
