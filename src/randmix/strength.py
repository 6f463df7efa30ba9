"""Ordinal strength ratings for entropy sources and mixers."""

from __future__ import annotations

import functools
from enum import Enum

from randmix.exceptions import InvalidArgumentError


@functools.total_ordering
class Strength(Enum):
    """How far a source's output can be trusted.

    Members are totally ordered so an aggregator can rank sources, but they
    are deliberately not integers: strengths are compared, never added.
    """

    VERY_LOW = 1
    LOW = 3
    MEDIUM = 5
    HIGH = 7

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Strength):
            return NotImplemented
        return self.value < other.value

    @property
    def label(self) -> str:
        """Lower-case name, as used in configuration (e.g. ``'very_low'``)."""
        return self.name.lower()

    @classmethod
    def parse(cls, value: Strength | str | int) -> Strength:
        """Coerce *value* into a Strength member.

        Accepts a member, a member name (case-insensitive, underscores
        optional) or a numeric level.

        Args:
            value: The level to parse.

        Returns:
            The matching Strength.

        Raises:
            InvalidArgumentError: If *value* names no known level.
        """
        if isinstance(value, Strength):
            return value
        if isinstance(value, str):
            key = value.strip().upper().replace("-", "_")
            for member in cls:
                if key in (member.name, member.name.replace("_", "")):
                    return member
        elif isinstance(value, int) and not isinstance(value, bool):
            for member in cls:
                if member.value == value:
                    return member
        known = ", ".join(m.label for m in cls)
        raise InvalidArgumentError(f"Unknown strength level {value!r}. Known: {known}")
