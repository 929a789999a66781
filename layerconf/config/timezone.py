"""
layerconf.config.timezone
=========================

Resolve the effective time zone of the process.

The requested zone only applies when the environment does not already provide
``TZ``. The OS-reported zone is then reconciled against the named location:
if the two disagree on the current UTC offset, the process-wide default zone
is switched to the named location. A zone that cannot be loaded is not an
error; resolution falls back to whatever the host reports.
"""

from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from layerconf.config.constants import TZ
from layerconf.utils.exceptions import EnvWriteError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TimeZoneInfo:
    """Result of time zone resolution."""
    name: str
    location: tzinfo
    offset: int


def _set_env(key: str, value: str) -> None:
    os.environ[key] = value


def _zone_of(moment: datetime) -> Tuple[str, int]:
    """Return the abbreviated zone name and UTC offset (seconds) of *moment*."""
    offset = moment.utcoffset()
    return moment.tzname() or "", int(offset.total_seconds()) if offset is not None else 0


def _apply_process_zone() -> None:
    """Make the C library re-read ``TZ`` so local time follows it."""
    if hasattr(time, "tzset"):
        time.tzset()


def resolve_time_zone(requested: str) -> TimeZoneInfo:
    """
    Resolve the process time zone, honouring an existing ``TZ`` variable.

    Parameters
    ----------
    requested : str
        Zone name (e.g. ``"Europe/Berlin"``) used when ``TZ`` is not set.
        May be empty, in which case the OS defaults apply.

    Raises
    ------
    EnvWriteError
        If ``TZ`` cannot be written to the process environment.
    """
    zone_name = os.environ.get(TZ, "")
    if not zone_name and requested:
        try:
            _set_env(TZ, requested)
        except (OSError, ValueError) as exc:
            raise EnvWriteError(f"Cannot set {TZ}={requested!r}: {exc}") from exc
        zone_name = requested

    local_now = datetime.now().astimezone()
    base_name, base_offset = _zone_of(local_now)

    if not zone_name:
        logger.debug("No time zone requested; using host zone %s", base_name)
        return TimeZoneInfo(name=base_name, location=local_now.tzinfo, offset=base_offset)

    try:
        location = ZoneInfo(zone_name)
    except (ZoneInfoNotFoundError, ValueError, OSError) as exc:
        logger.warning(
            "Time zone %r could not be loaded (%s); using host zone %s", zone_name, exc, base_name
        )
        return TimeZoneInfo(name=base_name, location=local_now.tzinfo, offset=base_offset)

    localized_name, localized_offset = _zone_of(datetime.now(location))
    if localized_offset != base_offset:
        logger.info(
            "Host zone %s (%+ds) differs from %s (%+ds); switching process zone",
            base_name, base_offset, zone_name, localized_offset,
        )
        _apply_process_zone()
        return TimeZoneInfo(name=localized_name, location=location, offset=localized_offset)

    return TimeZoneInfo(name=localized_name, location=location, offset=base_offset)
