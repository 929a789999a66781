"""Tests for time zone resolution."""
import os
import time
from datetime import datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import pytest

import layerconf.config.timezone as tz_module
from layerconf.config.timezone import resolve_time_zone
from layerconf.utils.exceptions import EnvWriteError


def _has_zone(name: str) -> bool:
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        return False
    return True


needs_tzdata = pytest.mark.skipif(
    not all(_has_zone(name) for name in ("Asia/Tokyo", "Europe/Paris", "Etc/GMT-14", "Africa/Abidjan")),
    reason="time zone database not available",
)


@pytest.fixture
def zone_switches(monkeypatch):
    calls = []
    monkeypatch.setattr(tz_module, "_apply_process_zone", lambda: calls.append(True))
    return calls


@needs_tzdata
def test_requested_zone_used_when_tz_unset(monkeypatch):
    monkeypatch.delenv("TZ", raising=False)

    info = resolve_time_zone("Asia/Tokyo")

    assert os.environ["TZ"] == "Asia/Tokyo"
    assert info.location == ZoneInfo("Asia/Tokyo")
    assert info.offset == 9 * 3600
    assert info.name == datetime.now(ZoneInfo("Asia/Tokyo")).tzname()


@needs_tzdata
def test_existing_tz_is_not_overwritten(monkeypatch):
    monkeypatch.setenv("TZ", "Europe/Paris")
    time.tzset()

    info = resolve_time_zone("Asia/Tokyo")

    paris_now = datetime.now(ZoneInfo("Europe/Paris"))
    assert os.environ["TZ"] == "Europe/Paris"
    assert info.offset == int(paris_now.utcoffset().total_seconds())
    assert info.name == paris_now.tzname()


@needs_tzdata
def test_offset_mismatch_switches_process_zone(monkeypatch, zone_switches):
    monkeypatch.delenv("TZ", raising=False)

    info = resolve_time_zone("Etc/GMT-14")

    assert zone_switches == [True]
    assert info.offset == 14 * 3600
    assert info.name == "+14"
    assert info.location == ZoneInfo("Etc/GMT-14")


@needs_tzdata
def test_matching_offset_keeps_process_zone(monkeypatch, zone_switches):
    monkeypatch.setenv("TZ", "UTC")
    time.tzset()

    info = resolve_time_zone("")

    assert zone_switches == []
    assert info.offset == 0
    assert info.name == datetime.now(ZoneInfo("UTC")).tzname()


@needs_tzdata
def test_same_offset_zone_reports_its_own_name(monkeypatch, zone_switches):
    # host runs on UTC; TZ then names a different zone with the same offset
    monkeypatch.setenv("TZ", "UTC")
    time.tzset()
    monkeypatch.setenv("TZ", "Africa/Abidjan")

    info = resolve_time_zone("")

    abidjan_now = datetime.now(ZoneInfo("Africa/Abidjan"))
    assert zone_switches == []
    assert info.location == ZoneInfo("Africa/Abidjan")
    assert info.offset == int(abidjan_now.utcoffset().total_seconds()) == 0
    assert info.name == abidjan_now.tzname()


def test_unknown_zone_falls_back_to_host(monkeypatch, zone_switches):
    monkeypatch.delenv("TZ", raising=False)

    info = resolve_time_zone("Nowhere/Atlantis")

    host = datetime.now().astimezone()
    assert info.name == host.tzname()
    assert info.offset == int(host.utcoffset().total_seconds())
    assert info.location.utcoffset(None) == host.utcoffset()
    assert zone_switches == []


def test_empty_requested_zone_leaves_environment_alone(monkeypatch):
    monkeypatch.delenv("TZ", raising=False)

    info = resolve_time_zone("")

    host = datetime.now().astimezone()
    assert "TZ" not in os.environ
    assert info.name == host.tzname()
    assert info.offset == int(host.utcoffset().total_seconds())


def test_env_write_failure_raises(monkeypatch):
    monkeypatch.delenv("TZ", raising=False)

    with pytest.raises(EnvWriteError):
        resolve_time_zone("Bad\x00Zone")


def test_env_write_os_error_raises(monkeypatch):
    monkeypatch.delenv("TZ", raising=False)

    def refuse(key, value):
        raise OSError("read-only environment")

    monkeypatch.setattr(tz_module, "_set_env", refuse)

    with pytest.raises(EnvWriteError) as excinfo:
        resolve_time_zone("Europe/Paris")
    assert isinstance(excinfo.value.__cause__, OSError)
