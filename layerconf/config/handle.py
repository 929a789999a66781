"""The immutable result of configuration initialization."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, tzinfo
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class ConfigHandle:
    """
    Process-lifetime view of the resolved runtime configuration.

    Attributes
    ----------
    data : Any
        The caller's destination, populated with the merged values.
    app_name : str
        Application name; its upper-cased form prefixes environment overrides.
    work_dir : Path
        Directory searched for on-disk overrides.
    time_zone : str
        Resolved zone name as reported for the current instant (e.g. ``CET``).
    time_offset : int
        Resolved UTC offset in seconds.
    time_location : tzinfo
        Resolved location, usable with ``datetime.now(tz=...)``.
    """
    data: Any
    app_name: str
    work_dir: Path
    time_zone: str
    time_offset: int
    time_location: tzinfo

    def now(self) -> datetime:
        """Current time in the resolved location."""
        return datetime.now(self.time_location)

    def summary(self) -> dict:
        """JSON-friendly description of the handle, without the data."""
        return {
            "app_name": self.app_name,
            "work_dir": str(self.work_dir),
            "time_zone": self.time_zone,
            "time_offset": self.time_offset,
            "time_location": str(self.time_location),
        }
