"""
layerconf.config.store
======================

In-memory key/value store that accumulates configuration layers.

Fragments are deep-merged in the order they arrive (later wins). Keys are
case-insensitive and addressed with dotted paths (``db.port``). When automatic
environment lookup is on, every recognized key can be overridden by an
environment variable named ``<PREFIX>_<KEY>`` where dots in the key are
replaced by underscores, e.g. ``APP_DB_PORT`` for ``db.port``.
"""

from __future__ import annotations

import copy
import logging
import os
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple

from layerconf.config import formats
from layerconf.config.binding import bind
from layerconf.utils.mappings import deep_merge, leaf_keys, lower_keys, set_path

logger = logging.getLogger(__name__)


class ConfigStore:
    """
    Layered configuration state for a single initialization run.

    Parameters
    ----------
    config_type : str
        Format token shared by every fragment merged into this store.
    env_prefix : str
        Prefix of overriding environment variables; upper-cased.
    automatic_env : bool
        Consult the environment for every recognized key.
    key_replacer : tuple of str
        ``(old, new)`` substitution applied to keys to build variable names.
    """

    def __init__(
        self,
        config_type: str,
        env_prefix: str = "",
        automatic_env: bool = True,
        key_replacer: Tuple[str, str] = (".", "_"),
    ) -> None:
        self._config_type = formats.ensure_supported(config_type)
        self._env_prefix = env_prefix.upper()
        self._automatic_env = automatic_env
        self._key_replacer = key_replacer
        self._data: Dict[str, Any] = {}
        self._registered: Set[str] = set()

    @property
    def config_type(self) -> str:
        return self._config_type

    @property
    def env_prefix(self) -> str:
        return self._env_prefix

    # ------------------------------------------------------------------ #
    # Layers                                                             #
    # ------------------------------------------------------------------ #
    def merge_config(self, data: bytes) -> None:
        """Parse one fragment and merge it over the current state."""
        self.merge_mapping(formats.parse(self._config_type, data))

    def merge_mapping(self, mapping: Dict[str, Any]) -> None:
        self._data = deep_merge(self._data, lower_keys(mapping))

    def register_keys(self, keys: Iterable[str]) -> None:
        """Declare keys that may be supplied by the environment alone."""
        self._registered.update(k.lower() for k in keys)

    # ------------------------------------------------------------------ #
    # Lookup                                                             #
    # ------------------------------------------------------------------ #
    def env_key(self, key: str) -> str:
        name = key.upper().replace(*self._key_replacer)
        return f"{self._env_prefix}_{name}" if self._env_prefix else name

    def keys(self) -> List[str]:
        """Sorted dotted paths of every key known from files or registration."""
        return sorted(set(leaf_keys(self._data)) | self._registered)

    def _env_value(self, key: str) -> Optional[str]:
        if not self._automatic_env:
            return None
        # empty variables do not count as set
        return os.environ.get(self.env_key(key)) or None

    def get(self, key: str, default: Any = None) -> Any:
        key = key.lower()
        env_value = self._env_value(key)
        if env_value is not None:
            return env_value
        node: Any = self._data
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def all_settings(self) -> Dict[str, Any]:
        """Return the merged state with environment overrides applied."""
        merged = copy.deepcopy(self._data)
        for key in self.keys():
            env_value = self._env_value(key)
            if env_value is not None:
                logger.debug("Key %s overridden by $%s", key, self.env_key(key))
                set_path(merged, key, env_value)
        return merged

    def unmarshal(self, destination: Any) -> None:
        """Bind :meth:`all_settings` onto *destination*."""
        bind(destination, self.all_settings())
