"""Build a source graph from configuration.

``build_entropy_source()`` turns a :class:`~randmix.config.RandMixConfig`
into a single :class:`~randmix.entropy.base.EntropySource`:

1. every name in ``source_types`` is instantiated through the registry;
2. more than one source is wrapped in a ``MixedEntropySource``;
3. unless ``fallback_mode`` is ``'error'``, the result is wrapped in a
   ``FallbackEntropySource``;
4. the final strength is checked against ``min_strength``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from randmix.entropy.fallback import FallbackEntropySource
from randmix.entropy.mixed import MixedEntropySource
from randmix.entropy.registry import EntropySourceRegistry
from randmix.exceptions import ConfigValidationError
from randmix.mixing.registry import MixerRegistry

if TYPE_CHECKING:
    from randmix.config import RandMixConfig
    from randmix.entropy.base import EntropySource
    from randmix.mixing.base import Mixer

logger = logging.getLogger("randmix")


def _create(name: str, config: RandMixConfig) -> EntropySource:
    try:
        return EntropySourceRegistry.create(name, config)
    except KeyError as e:
        raise ConfigValidationError(str(e.args[0])) from e


def build_mixer(config: RandMixConfig) -> Mixer:
    """Instantiate ``config.mixer_type``.

    Raises:
        ConfigValidationError: If the mixer name is unknown.
    """
    try:
        return MixerRegistry.build(config)
    except KeyError as e:
        raise ConfigValidationError(str(e.args[0])) from e


def build_entropy_source(config: RandMixConfig) -> EntropySource:
    """Assemble the source described by *config*.

    Args:
        config: Configuration naming sources, mixer, fallback and floor.

    Returns:
        A ready-to-use source.

    Raises:
        ConfigValidationError: If a name is unknown, no source is listed, or
            the assembled source is weaker than ``min_strength``.
    """
    names = config.source_names
    if not names:
        raise ConfigValidationError("source_types lists no entropy sources")

    sources = [_create(name, config) for name in names]
    if len(sources) == 1:
        source = sources[0]
    else:
        source = MixedEntropySource(sources, build_mixer(config))

    if config.fallback_mode != "error":
        source = FallbackEntropySource(source, _create(config.fallback_mode, config))

    strength = source.report_strength()
    if strength < config.strength_floor:
        source.close()
        raise ConfigValidationError(
            f"Entropy source {source.name!r} is rated {strength.label}, "
            f"below min_strength={config.min_strength}"
        )

    logger.debug("Built entropy source %r (strength=%s)", source.name, strength.label)
    return source
