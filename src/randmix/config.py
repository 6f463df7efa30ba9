"""Configuration system for randmix.

Uses pydantic-settings for declarative, layered configuration:
init kwargs -> environment variables (RANDMIX_*) -> .env file -> field defaults.

Per-call overrides are applied via resolve_config() which creates a new
config instance without mutating the defaults. Only the strength floor and
the log level can change per call; everything else is fixed once a Generator
has built its sources.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from randmix.exceptions import ConfigValidationError, InvalidArgumentError
from randmix.strength import Strength

FallbackMode = Literal["system", "mock_uniform", "error"]
LogLevel = Literal["none", "summary", "full"]

# Fields that can be overridden per call. Everything that shapes the source
# graph or the in-memory diagnostic store is fixed once a Generator exists.
_PER_CALL_FIELDS: frozenset[str] = frozenset(
    {
        "min_strength",
        "log_level",
    }
)

# All known config field names (populated after class definition).
_ALL_FIELDS: frozenset[str] = frozenset()


class RandMixConfig(BaseSettings):
    """Configuration for randmix.

    Resolution order: init kwargs -> env vars (RANDMIX_*) -> .env file -> defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix="RANDMIX_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Source graph (NOT per-call overridable) ---

    source_types: str = Field(
        default="microtime,system",
        description="Comma-separated registered source names to mix",
    )
    fallback_mode: FallbackMode = Field(
        default="system",
        description="Fallback entropy source: 'error', 'system', 'mock_uniform'",
    )
    microtime_gc_jitter: bool = Field(
        default=True,
        description="Force a GC pass before each microtime generation round",
    )
    mock_mean: float = Field(
        default=127.5,
        description="Centre of the mock source's byte distribution",
    )
    mock_seed: int | None = Field(
        default=None,
        description="Seed for the mock source (None = nondeterministic)",
    )

    # --- Mixing ---

    mixer_type: str = Field(
        default="hash",
        description="Mixer used to combine several sources: 'hash' or 'xor'",
    )

    # --- Strength floor (per-call overridable) ---

    min_strength: str = Field(
        default="very_low",
        description="Lowest acceptable strength of the assembled source",
    )

    # --- Logging (log_level per-call overridable) ---

    log_level: LogLevel = Field(
        default="summary",
        description="Logging verbosity: 'none', 'summary', 'full'",
    )
    diagnostic_mode: bool = Field(
        default=False,
        description="Store all generation records in memory for analysis",
    )

    @field_validator("min_strength")
    @classmethod
    def _check_strength(cls, value: str) -> str:
        try:
            return Strength.parse(value).label
        except InvalidArgumentError as e:
            raise ValueError(str(e)) from e

    @property
    def source_names(self) -> list[str]:
        """``source_types`` split into a list, blanks removed."""
        return [s.strip() for s in self.source_types.split(",") if s.strip()]

    @property
    def strength_floor(self) -> Strength:
        """``min_strength`` as a Strength member."""
        return Strength.parse(self.min_strength)


# Populate _ALL_FIELDS now that the class is defined.
_ALL_FIELDS = frozenset(RandMixConfig.model_fields.keys())


def validate_overrides(overrides: dict[str, Any]) -> None:
    """Validate per-call override keys without creating a config.

    Args:
        overrides: Mapping of field name to override value.

    Raises:
        ConfigValidationError: If any key is unknown or non-overridable.
    """
    for key in overrides:
        if key not in _ALL_FIELDS:
            raise ConfigValidationError(f"Unknown config field: '{key}'")
        if key not in _PER_CALL_FIELDS:
            raise ConfigValidationError(
                f"Field '{key}' is fixed once a Generator exists and cannot be "
                f"overridden per call"
            )


def resolve_config(
    defaults: RandMixConfig,
    overrides: dict[str, Any] | None,
) -> RandMixConfig:
    """Create a new config instance merging defaults with per-call overrides.

    Args:
        defaults: The base configuration loaded from environment.
        overrides: Per-call overrides keyed by field name.

    Returns:
        A new RandMixConfig with overrides applied, or *defaults* itself
        when there is nothing to override.

    Raises:
        ConfigValidationError: If any key is unknown, non-overridable, or
            its value fails validation.
    """
    if not overrides:
        return defaults

    validate_overrides(overrides)

    # model_copy(update=...) skips validation; model_validate coerces and
    # runs field validators.
    merged = defaults.model_dump()
    merged.update(overrides)
    try:
        return RandMixConfig.model_validate(merged)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid override: {e}") from e
