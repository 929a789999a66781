"""
layerconf.config.pipeline
=========================

Run the initialization steps in a fixed order and build a :class:`ConfigHandle`.

Order:

1. validate the configuration type token
2. resolve the process time zone
3. resolve the working directory and load the embedded ``.env``
4. load the on-disk ``.env`` (override)
5. merge embedded config fragments
6. merge on-disk config fragments
7. fill unset fields with their declared defaults

Each step receives the previous step's result. The first exception stops the
run and reaches the caller unchanged. Steps only add information (environment
variables, merged keys), so nothing is rolled back.

The process environment and time zone are global, so only one run may be in
progress at a time; :func:`initialize` is meant to be called once at startup.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple, Union

from layerconf.config import formats
from layerconf.config.constants import EMBEDDED_ENV_PATH, REGULAR_PARAMS_ENV
from layerconf.config.defaults import apply_defaults
from layerconf.config.env import load_embedded_env, load_regular_env
from layerconf.config.filesystem import DiskFS, EmbeddedFS
from layerconf.config.handle import ConfigHandle
from layerconf.config.merge import merge_from_files, merge_from_fs, new_store, regular_patterns
from layerconf.config.store import ConfigStore
from layerconf.config.timezone import TimeZoneInfo, resolve_time_zone
from layerconf.config.workdir import resolve_work_dir
from layerconf.utils.exceptions import (
    InitializationCancelledError,
    InitializationInProgressError,
)

logger = logging.getLogger(__name__)

Step = Tuple[str, Callable[[Any], Any]]

_RUN_LOCK = threading.Lock()


def run_steps(steps: Sequence[Step], cancel: Optional[threading.Event] = None, initial: Any = None) -> Any:
    """
    Run *steps* in order, feeding each the previous result.

    *cancel* is checked before every step; once set, the next step does not
    start and :class:`InitializationCancelledError` is raised.
    """
    result = initial
    for name, step in steps:
        if cancel is not None and cancel.is_set():
            raise InitializationCancelledError(name)
        logger.debug("Running step %s", name)
        result = step(result)
    return result


@dataclass
class _Resolution:
    """Values accumulated while the steps run."""
    config_type: str = ""
    time_zone: Optional[TimeZoneInfo] = None
    work_dir: Path = Path()
    store: Optional[ConfigStore] = None
    fragments: List[int] = field(default_factory=list)


def initialize(
    destination: Any,
    embedded_fs: EmbeddedFS,
    disk_fs: DiskFS,
    extra_search_paths: Iterable[str] = (),
    config_type: str = "yaml",
    app_name: str = "",
    default_time_zone: str = "",
    *,
    cancel: Optional[threading.Event] = None,
    work_dir: Optional[Union[str, Path]] = None,
) -> ConfigHandle:
    """
    Resolve the runtime configuration into *destination*.

    Parameters
    ----------
    destination : pydantic.BaseModel | MutableMapping
        Caller-owned target, populated in place.
    embedded_fs : EmbeddedFS
        Bundled defaults (``embeds/envs/.env`` and ``embeds/params/*``).
    disk_fs : DiskFS
        Filesystem holding on-disk overrides under ``<work_dir>/params/``.
    extra_search_paths : iterable of str
        Additional glob patterns, applied to both file sources.
    config_type : str
        Format of every config fragment (``yaml``, ``json``, ``toml``, ...).
    app_name : str
        Application name; ``APP_NAME_`` prefixes environment overrides.
    default_time_zone : str
        Zone used when ``TZ`` is not already set.
    cancel : threading.Event, optional
        Checked before each step.
    work_dir : str | Path, optional
        Use this directory instead of resolving it from the executable.

    Raises
    ------
    UnsupportedConfigTypeError, EnvWriteError, EmbeddedEnvError, UnmarshalError
        The first fatal error of the run.
    InitializationCancelledError
        If *cancel* was set before a step started.
    InitializationInProgressError
        If another run is in progress in this process.
    """
    if not _RUN_LOCK.acquire(blocking=False):
        raise InitializationInProgressError("Configuration initialization is already running")
    try:
        return _initialize(
            destination, embedded_fs, disk_fs, list(extra_search_paths),
            config_type, app_name, default_time_zone, cancel, work_dir,
        )
    finally:
        _RUN_LOCK.release()


def _initialize(
    destination: Any,
    embedded_fs: EmbeddedFS,
    disk_fs: DiskFS,
    search_paths: List[str],
    config_type: str,
    app_name: str,
    default_time_zone: str,
    cancel: Optional[threading.Event],
    work_dir: Optional[Union[str, Path]],
) -> ConfigHandle:
    def check_type(res: _Resolution) -> _Resolution:
        res.config_type = formats.ensure_supported(config_type)
        return res

    def time_zone(res: _Resolution) -> _Resolution:
        res.time_zone = resolve_time_zone(default_time_zone)
        return res

    def embedded_env(res: _Resolution) -> _Resolution:
        res.work_dir = Path(work_dir) if work_dir is not None else resolve_work_dir()
        load_embedded_env(embedded_fs, EMBEDDED_ENV_PATH)
        return res

    def regular_env(res: _Resolution) -> _Resolution:
        load_regular_env(disk_fs, res.work_dir, REGULAR_PARAMS_ENV)
        return res

    def embedded_config(res: _Resolution) -> _Resolution:
        res.store = new_store(res.config_type, app_name, destination)
        res.fragments.append(merge_from_fs(destination, embedded_fs, search_paths, res.store))
        return res

    def regular_config(res: _Resolution) -> _Resolution:
        patterns = regular_patterns(search_paths, res.work_dir)
        res.fragments.append(merge_from_files(destination, disk_fs, patterns, res.store))
        return res

    def defaults(res: _Resolution) -> _Resolution:
        apply_defaults(destination)
        return res

    steps: List[Step] = [
        ("config_type", check_type),
        ("time_zone", time_zone),
        ("embedded_env", embedded_env),
        ("regular_env", regular_env),
        ("embedded_config", embedded_config),
        ("regular_config", regular_config),
        ("defaults", defaults),
    ]
    res: _Resolution = run_steps(steps, cancel=cancel, initial=_Resolution())

    handle = ConfigHandle(
        data=destination,
        app_name=app_name,
        work_dir=res.work_dir,
        time_zone=res.time_zone.name,
        time_offset=res.time_zone.offset,
        time_location=res.time_zone.location,
    )
    logger.info(
        "Configuration for %s initialized: work_dir=%s zone=%s (%+ds), %s fragment(s) merged",
        app_name or "<unnamed>", handle.work_dir, handle.time_zone, handle.time_offset,
        sum(res.fragments),
    )
    return handle
