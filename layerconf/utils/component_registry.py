"""
layerconf.utils.component_registry
==================================

Single authoritative plugin registry.

* Register:   ``@register("config_type", "yaml")``
* Discover:   ``parser = get("config_type", "yaml")``
* Enumerate:  ``available("config_type")  ->  ("dotenv", "env", "ini", ...)``
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Callable, Dict, Tuple

logger = logging.getLogger(__name__)

# {category: {name: factory}}
_REGISTRY: Dict[str, Dict[str, Callable[..., Any]]] = defaultdict(dict)


# --------------------------------------------------------------------------- #
# Public API                                                                  #
# --------------------------------------------------------------------------- #
def register(category: str, *names: str):
    """
    Decorator for registering a factory under *category* / each of *names*.

    Example
    -------
    ```python
    @register("config_type", "yaml", "yml")
    def parse_yaml(text: str) -> dict:
        ...
    ```
    """

    def decorator(factory: Callable[..., Any]):
        for name in names:
            _REGISTRY[category][name] = factory
            logger.debug("Registered %s:%s", category, name)
        return factory

    return decorator


def get(category: str, name: str):
    """Return a **class or factory** registered as *category:name*."""
    if category not in _REGISTRY:
        raise KeyError(f"No such category registered: {category!r}")
    if name not in _REGISTRY[category]:
        raise KeyError(f"No {category!r} named {name!r} available.")
    return _REGISTRY[category][name]


def available(category: str) -> Tuple[str, ...]:
    """Return the sorted, frozen list of available names for *category*."""
    return tuple(sorted(_REGISTRY.get(category, {}).keys()))
