"""
layerconf.config.env
====================

Load environment overlays before configuration files are merged.

The embedded ``.env`` ships with the application and never replaces variables
the process already has. The optional on-disk ``.env`` next to the executable
replaces them unconditionally.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Union

from dotenv import load_dotenv
from dotenv.parser import parse_stream

from layerconf.config.constants import EMBEDDED_ENV_PATH, REGULAR_PARAMS_ENV
from layerconf.config.filesystem import DiskFS, EmbeddedFS
from layerconf.utils.exceptions import EmbeddedEnvError

logger = logging.getLogger(__name__)


def load_embedded_env(embedded_fs: EmbeddedFS, path: str = EMBEDDED_ENV_PATH) -> None:
    """
    Apply the embedded default ``.env`` without overriding existing variables.

    Raises
    ------
    EmbeddedEnvError
        If the file is missing, cannot be decoded, or holds a line that is
        not a valid binding.
    """
    try:
        content = embedded_fs.read_bytes(path).decode("utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise EmbeddedEnvError(f"Cannot load embedded env file {path!r}: {exc}") from exc
    broken = [binding.original.line for binding in parse_stream(io.StringIO(content)) if binding.error]
    if broken:
        lines = ", ".join(str(line) for line in broken)
        raise EmbeddedEnvError(f"Embedded env file {path!r} is malformed at line(s) {lines}")
    load_dotenv(stream=io.StringIO(content), override=False)
    logger.debug("Loaded embedded env file %s", path)


def load_regular_env(
    disk_fs: DiskFS,
    work_dir: Union[str, Path],
    relative_path: str = REGULAR_PARAMS_ENV,
) -> bool:
    """
    Apply ``<work_dir><relative_path>`` over the process environment, if present.

    Returns ``True`` when a file was loaded. A missing or unreadable file is
    not an error.
    """
    path = f"{work_dir}{relative_path}"
    if not disk_fs.exists(path):
        logger.debug("No on-disk env file at %s", path)
        return False
    try:
        content = disk_fs.read_bytes(path).decode("utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Ignoring unreadable env file %s: %s", path, exc)
        return False
    load_dotenv(stream=io.StringIO(content), override=True)
    logger.info("Loaded env overrides from %s", path)
    return True


def load_env(
    embedded_fs: EmbeddedFS,
    disk_fs: DiskFS,
    work_dir: Union[str, Path],
    embedded_env_path: str = EMBEDDED_ENV_PATH,
    regular_env_path: str = REGULAR_PARAMS_ENV,
) -> None:
    """Load the embedded env file, then the optional on-disk one."""
    load_embedded_env(embedded_fs, embedded_env_path)
    load_regular_env(disk_fs, work_dir, regular_env_path)
