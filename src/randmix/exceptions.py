"""Exception hierarchy for randmix.

All exceptions derive from RandMixError, enabling broad catch patterns
at the application boundary while allowing fine-grained handling internally.
"""


class RandMixError(Exception):
    """Base exception for all randmix errors."""


class InvalidArgumentError(RandMixError, ValueError):
    """A caller passed an argument outside the accepted domain.

    Raised for negative or non-integer byte counts, unknown strength
    levels and empty integer ranges. Raising it never mutates source state.
    """


class EntropyUnavailableError(RandMixError):
    """No entropy source can provide bytes.

    This is the only condition that triggers failover in
    FallbackEntropySource. All other errors propagate.
    """


class ConfigValidationError(RandMixError):
    """Configuration validation failed.

    Raised for unknown or non-overridable override keys, unknown source or
    mixer names, and source graphs that do not meet the configured
    strength floor.
    """


class MixingError(RandMixError):
    """A mixer received unusable input.

    Raised when there are no parts to mix or a part is shorter than the
    requested output.
    """
