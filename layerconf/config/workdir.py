"""Working directory resolution for on-disk override files."""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


def _executable_path() -> Optional[Path]:
    """Return the path of the running program, or ``None`` if unknown."""
    if getattr(sys, "frozen", False) and sys.executable:
        return Path(sys.executable)
    script = sys.argv[0] if sys.argv else ""
    if script and script not in ("-c", "-m"):
        candidate = Path(script)
        if candidate.is_file():
            return candidate
    return None


def resolve_work_dir() -> Path:
    """
    Return the directory containing the current executable.

    Falls back to the user's home directory when the executable path cannot
    be determined. The returned path is not checked for existence.
    """
    try:
        home = Path.home()
    except RuntimeError:
        home = Path("~")
    try:
        executable = _executable_path()
    except OSError:
        executable = None
    if executable is None:
        logger.debug("Executable path unknown; using home directory %s", home)
        return home
    return executable.resolve().parent
