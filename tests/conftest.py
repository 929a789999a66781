# tests/conftest.py
import os
import shutil
import time
from pathlib import Path

import pytest


def _write(path: Path, text: str) -> Path:
    """Create *path* (and parents) with *text* as content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def isolate_fs(tmp_path: Path, monkeypatch):
    """Prevent tests from accidentally touching real project files."""
    monkeypatch.chdir(tmp_path)
    yield
    # cleanup
    shutil.rmtree(tmp_path, ignore_errors=True)


@pytest.fixture(autouse=True)
def restore_environment():
    """Undo env writes made outside monkeypatch (dotenv, TZ) and reset the zone."""
    saved = dict(os.environ)
    yield
    os.environ.clear()
    os.environ.update(saved)
    if hasattr(time, "tzset"):
        time.tzset()


@pytest.fixture
def bundle(tmp_path: Path) -> Path:
    """Directory with an empty embedded env file and params directory."""
    root = tmp_path / "bundle"
    _write(root / "embeds" / "envs" / ".env", "")
    (root / "embeds" / "params").mkdir(parents=True)
    return root


@pytest.fixture
def work_dir(tmp_path: Path) -> Path:
    """Stand-in for the directory holding the executable."""
    path = tmp_path / "bin"
    path.mkdir()
    return path


@pytest.fixture
def write():
    """Return a helper that writes a text file, creating parent directories."""
    return _write
