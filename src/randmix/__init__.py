"""randmix: combine heterogeneous entropy sources into one rated byte stream.

Every source implements :class:`~randmix.entropy.base.EntropySource` and
reports a :class:`~randmix.strength.Strength`. Sources are mixed, wrapped
in fallbacks and handed to callers through :class:`~randmix.generator.Generator`.
"""

from __future__ import annotations

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("randmix")
except PackageNotFoundError:
    __version__ = "0.0.0"

from randmix.config import RandMixConfig, resolve_config, validate_overrides
from randmix.exceptions import (
    ConfigValidationError,
    EntropyUnavailableError,
    InvalidArgumentError,
    MixingError,
    RandMixError,
)
from randmix.factory import build_entropy_source
from randmix.generator import Generator
from randmix.strength import Strength

__all__ = [
    "ConfigValidationError",
    "EntropyUnavailableError",
    "Generator",
    "InvalidArgumentError",
    "MixingError",
    "RandMixConfig",
    "RandMixError",
    "Strength",
    "__version__",
    "build_entropy_source",
    "resolve_config",
    "validate_overrides",
]
