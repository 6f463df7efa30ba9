"""Diagnostic logger for generation events.

Uses the standard ``logging`` module with the ``"randmix"`` logger.
No ``print()`` statements. Supports three verbosity levels and an
in-memory diagnostic mode for post-hoc analysis.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from randmix.config import RandMixConfig
    from randmix.logging.types import GenerationRecord

logger = logging.getLogger("randmix")


class GenerationLogger:
    """Per-call diagnostic logger.

    Log levels:
        ``"none"``: No output. Records are still stored if
        ``diagnostic_mode=True``.

        ``"summary"``: One line per call with size, source, strength and
        timing.

        ``"full"``: JSON dump of the whole record.

    Never logs generated bytes.
    """

    def __init__(self, config: RandMixConfig) -> None:
        self._log_level = config.log_level
        self._diagnostic_mode = config.diagnostic_mode
        self._records: list[GenerationRecord] = []

    def log_generation(self, record: GenerationRecord, log_level: str | None = None) -> None:
        """Log a single generation event.

        Args:
            record: The event.
            log_level: Verbosity for this event only; defaults to the
                configured level.
        """
        if self._diagnostic_mode:
            self._records.append(record)

        level = log_level or self._log_level
        if level == "none":
            return

        if level == "summary":
            logger.info(
                "op=%s size=%d source=%s%s strength=%s elapsed=%.3fms",
                record.operation,
                record.size,
                record.source_used,
                " [FALLBACK]" if record.is_fallback else "",
                record.strength,
                record.elapsed_ms,
            )
        elif level == "full":
            logger.info("generation_record: %s", json.dumps(asdict(record), default=str))

    def get_diagnostic_data(self) -> list[GenerationRecord]:
        """Return all stored records (empty unless ``diagnostic_mode=True``)."""
        return list(self._records)

    def get_summary_stats(self) -> dict[str, Any]:
        """Aggregate statistics over stored records, or ``{}`` if none."""
        if not self._records:
            return {}

        n = len(self._records)
        elapsed = [r.elapsed_ms for r in self._records]
        fallback_count = sum(1 for r in self._records if r.is_fallback)
        return {
            "total_calls": n,
            "total_bytes": sum(r.size for r in self._records),
            "mean_elapsed_ms": sum(elapsed) / n,
            "max_elapsed_ms": max(elapsed),
            "fallback_count": fallback_count,
            "fallback_rate": fallback_count / n,
        }
