"""
layerconf.config.merge
======================

Merge configuration fragments from one file source into a :class:`ConfigStore`
and bind the result onto the destination.

Fragments are located by glob patterns. Patterns are processed in order and
each pattern's matches in sorted order, so the same inputs always merge the
same way. A fragment that cannot be read or parsed is skipped: only binding
the merged result onto the destination can fail.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, List

from pydantic import BaseModel

from layerconf.config.binding import schema_keys
from layerconf.config.constants import EMBEDDED_PARAMS_PATTERN, REGULAR_PARAMS_PATTERN
from layerconf.config.filesystem import DiskFS, EmbeddedFS, FileSource
from layerconf.config.store import ConfigStore

logger = logging.getLogger(__name__)


def new_store(config_type: str, app_name: str, destination: Any = None) -> ConfigStore:
    """
    Build a store prefixed with ``APP_NAME`` whose keys may come from the env.

    When *destination* is a pydantic model, its declared fields are registered
    so that an environment variable alone can set them.
    """
    store = ConfigStore(config_type, env_prefix=app_name.upper(), automatic_env=True)
    if isinstance(destination, BaseModel):
        store.register_keys(schema_keys(type(destination)))
    return store


def _merge_matches(source: FileSource, paths: Iterable[str], store: ConfigStore) -> int:
    merged = 0
    for path in paths:
        try:
            store.merge_config(source.read_bytes(path))
        except Exception as exc:  # noqa: BLE001
            logger.debug("Skipping config fragment %s: %s", path, exc)
            continue
        logger.debug("Merged config fragment %s", path)
        merged += 1
    return merged


def merge_from_fs(
    destination: Any,
    embedded_fs: EmbeddedFS,
    patterns: Iterable[str],
    store: ConfigStore,
) -> int:
    """
    Merge embedded fragments matching *patterns* (plus the embedded params
    directory) and bind the store onto *destination*.

    Returns the number of fragments merged.
    """
    merged = 0
    for pattern in [*patterns, EMBEDDED_PARAMS_PATTERN]:
        merged += _merge_matches(embedded_fs, embedded_fs.glob(pattern), store)
    logger.info("Merged %d embedded config fragment(s)", merged)
    store.unmarshal(destination)
    return merged


def merge_from_files(
    destination: Any,
    disk_fs: DiskFS,
    patterns: Iterable[str],
    store: ConfigStore,
) -> int:
    """
    Merge on-disk fragments matching *patterns* over the current store state
    and bind the store onto *destination*. Missing files are skipped.
    """
    merged = 0
    for pattern in patterns:
        existing: List[str] = [path for path in disk_fs.glob(pattern) if disk_fs.exists(path)]
        merged += _merge_matches(disk_fs, existing, store)
    logger.info("Merged %d on-disk config fragment(s)", merged)
    store.unmarshal(destination)
    return merged


def regular_patterns(patterns: Iterable[str], work_dir: Any) -> List[str]:
    """Caller patterns followed by the params directory under *work_dir*."""
    return [*patterns, f"{work_dir}{REGULAR_PARAMS_PATTERN}"]
