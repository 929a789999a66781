"""
Runtime configuration initialization.

Merges, in increasing precedence:

1. Declared field defaults (fill gaps only, applied last)
2. Embedded config fragments shipped with the application
3. On-disk config fragments next to the executable
4. Environment variables (``APP_NAME_SECTION_KEY``)

and resolves the process time zone and working directory along the way.

Usage:
    from layerconf.config import initialize, EmbeddedFS, DiskFS

    handle = initialize(settings, EmbeddedFS.from_package("myapp"), DiskFS(),
                        config_type="yaml", app_name="myapp",
                        default_time_zone="Europe/Berlin")
"""

from layerconf.config.filesystem import DiskFS, EmbeddedFS
from layerconf.config.handle import ConfigHandle
from layerconf.config.pipeline import initialize, run_steps
from layerconf.config.store import ConfigStore
from layerconf.config.timezone import TimeZoneInfo, resolve_time_zone
from layerconf.config.workdir import resolve_work_dir
from layerconf.config.env import load_env, load_embedded_env, load_regular_env
from layerconf.config.formats import supported_types
from layerconf.config.defaults import apply_defaults

__all__ = [
    'initialize',
    'run_steps',
    'ConfigHandle',
    'ConfigStore',
    'EmbeddedFS',
    'DiskFS',
    'TimeZoneInfo',
    'resolve_time_zone',
    'resolve_work_dir',
    'load_env',
    'load_embedded_env',
    'load_regular_env',
    'supported_types',
    'apply_defaults',
]
