"""Registry for mixer implementations.

Uses a decorator pattern for registration, so built-in and third-party
mixers register themselves at import time.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:
    from collections.abc import Callable

    from randmix.mixing.base import Mixer


class MixerRegistry:
    """Registry mapping string names to Mixer classes.

    ``build()`` instantiates the mixer named by a config's ``mixer_type``.
    """

    _registry: ClassVar[dict[str, type[Mixer]]] = {}

    @classmethod
    def register(cls, name: str) -> Callable[[type[Mixer]], type[Mixer]]:
        """Decorator that registers a Mixer class under *name*.

        Raises:
            ValueError: If *name* is already registered.
        """

        def decorator(klass: type[Mixer]) -> type[Mixer]:
            if name in cls._registry:
                raise ValueError(f"Mixer '{name}' is already registered")
            cls._registry[name] = klass
            return klass

        return decorator

    @classmethod
    def get(cls, name: str) -> type[Mixer]:
        """Return the mixer class registered under *name*.

        Raises:
            KeyError: If *name* is not registered.
        """
        if name not in cls._registry:
            available = ", ".join(sorted(cls._registry)) or "(none)"
            raise KeyError(f"Unknown mixer '{name}'. Available: {available}")
        return cls._registry[name]

    @classmethod
    def build(cls, config: Any) -> Mixer:
        """Instantiate the mixer specified by *config.mixer_type*."""
        return cls.get(config.mixer_type)()

    @classmethod
    def list_available(cls) -> list[str]:
        return sorted(cls._registry)
