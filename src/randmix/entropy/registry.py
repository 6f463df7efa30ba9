"""Entropy source registry with entry-point auto-discovery.

Built-in sources register themselves at import time via the
``@register_entropy_source`` decorator. Sources shipped by other packages
are discovered lazily, on the first lookup that misses, through the
``randmix.entropy_sources`` entry-point group.
"""

from __future__ import annotations

import importlib.metadata
import inspect
import logging
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from collections.abc import Callable

    from randmix.config import RandMixConfig
    from randmix.entropy.base import EntropySource

logger = logging.getLogger("randmix")

_ENTRY_POINT_GROUP = "randmix.entropy_sources"


def _accepts_config(source_cls: type) -> bool:
    """Whether *source_cls* takes a ``config`` constructor argument."""
    try:
        params = inspect.signature(source_cls).parameters
    except (TypeError, ValueError):
        return False
    return "config" in params


class EntropySourceRegistry:
    """Name -> class mapping for entropy sources.

    Lookup order:

    1. Classes registered with ``@register_entropy_source``
    2. ``randmix.entropy_sources`` entry points, loaded once on the first
       miss (a decorator registration is never replaced by an entry point)
    """

    _registry: ClassVar[dict[str, type[EntropySource]]] = {}
    _entry_points_loaded: ClassVar[bool] = False

    @classmethod
    def register(cls, name: str) -> Callable[[type[EntropySource]], type[EntropySource]]:
        """Decorator registering a source class under *name*.

        Example::

            @EntropySourceRegistry.register("lava_lamp")
            class LavaLampSource(EntropySource):
                ...
        """

        def decorator(source_cls: type[EntropySource]) -> type[EntropySource]:
            cls._registry[name] = source_cls
            return source_cls

        return decorator

    @classmethod
    def get(cls, name: str) -> type[EntropySource]:
        """Look up a source class by name.

        Args:
            name: Registered identifier for the source.

        Returns:
            The entropy source class (not an instance).

        Raises:
            KeyError: If *name* is unknown even after loading entry points.
        """
        if name in cls._registry:
            return cls._registry[name]

        if not cls._entry_points_loaded:
            cls._load_entry_points()
            if name in cls._registry:
                return cls._registry[name]

        available = ", ".join(sorted(cls._registry.keys())) or "(none)"
        raise KeyError(f"Unknown entropy source: {name!r}. Available: {available}")

    @classmethod
    def create(cls, name: str, config: RandMixConfig) -> EntropySource:
        """Instantiate the source registered under *name*.

        *config* is passed to constructors that declare a ``config``
        parameter; other sources are built with no arguments.

        Raises:
            KeyError: If *name* is unknown.
        """
        source_cls = cls.get(name)
        if _accepts_config(source_cls):
            return source_cls(config=config)  # type: ignore[call-arg]
        return source_cls()

    @classmethod
    def list_available(cls) -> list[str]:
        """Return all registered source names, sorted.

        Triggers entry-point loading if not yet done.
        """
        if not cls._entry_points_loaded:
            cls._load_entry_points()
        return sorted(cls._registry.keys())

    @classmethod
    def _load_entry_points(cls) -> None:
        """Register sources advertised in the entry-point group.

        A plugin that fails to import is logged and skipped; it never stops
        the remaining plugins from loading.
        """
        cls._entry_points_loaded = True
        try:
            eps = importlib.metadata.entry_points(group=_ENTRY_POINT_GROUP)
        except Exception:  # Intentional: must not crash on broken metadata
            logger.warning("Failed to read entry points for %s", _ENTRY_POINT_GROUP, exc_info=True)
            return

        for ep in eps:
            if ep.name in cls._registry:
                continue
            try:
                cls._registry[ep.name] = ep.load()
                logger.debug("Loaded entropy source %r from entry point", ep.name)
            except Exception:  # Intentional: one bad plugin must not block others
                logger.warning(
                    "Failed to load entropy source entry point %r: %s",
                    ep.name,
                    ep.value,
                    exc_info=True,
                )

    @classmethod
    def _reset(cls) -> None:
        """Forget every registration. **Test-only**."""
        cls._registry.clear()
        cls._entry_points_loaded = False


register_entropy_source = EntropySourceRegistry.register
