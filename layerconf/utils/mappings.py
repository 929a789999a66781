"""Helpers for nested ``dict`` configuration data."""
from __future__ import annotations

from typing import Any, Dict, List


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge *override* into *base* (override wins)."""
    result: Dict[str, Any] = {**base}
    for k, v in override.items():
        if (
            k in result
            and isinstance(result[k], dict)
            and isinstance(v, dict)
        ):
            result[k] = deep_merge(result[k], v)
        else:
            result[k] = v
    return result


def lower_keys(data: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of *data* with every key lower-cased, recursively."""
    return {
        str(k).lower(): lower_keys(v) if isinstance(v, dict) else v
        for k, v in data.items()
    }


def leaf_keys(data: Dict[str, Any], prefix: str = "") -> List[str]:
    """Dotted paths of every non-mapping value in *data*."""
    keys: List[str] = []
    for k, v in data.items():
        path = f"{prefix}{k}"
        if isinstance(v, dict) and v:
            keys.extend(leaf_keys(v, path + "."))
        else:
            keys.append(path)
    return keys


def set_path(data: Dict[str, Any], key: str, value: Any) -> None:
    """Set dotted *key* in *data*, creating (or replacing) intermediate mappings."""
    node = data
    parts = key.split(".")
    for part in parts[:-1]:
        child = node.get(part)
        if not isinstance(child, dict):
            child = node[part] = {}
        node = child
    node[parts[-1]] = value


def nest_dotted(flat: Dict[str, Any]) -> Dict[str, Any]:
    """Turn ``{"db.port": "1"}`` into ``{"db": {"port": "1"}}``."""
    nested: Dict[str, Any] = {}
    for key, value in flat.items():
        set_path(nested, key, value)
    return nested
