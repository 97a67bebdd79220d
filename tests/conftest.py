"""Pytest fixtures for dbprobe tests."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

import pytest

_TEST_CONFIG_DIR = Path(tempfile.mkdtemp(prefix="dbprobe-test-config-"))
os.environ.setdefault("DBPROBE_CONFIG_DIR", str(_TEST_CONFIG_DIR))
os.environ.pop("DBPROBE_SETTINGS_PATH", None)


@pytest.fixture(autouse=True)
def _reset_logging():
    """Drop handlers the CLI installs so they never outlive a captured stream."""
    import dbprobe.shared.core.logging as probe_logging

    yield
    root = logging.getLogger("dbprobe")
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.setLevel(logging.NOTSET)
    probe_logging._configured = False


@pytest.fixture
def settings_path(tmp_path, monkeypatch) -> Path:
    """Point the settings store at a fresh file."""
    path = tmp_path / "settings.json"
    monkeypatch.setenv("DBPROBE_SETTINGS_PATH", str(path))
    return path


@pytest.fixture
def sqlite_db(tmp_path) -> Path:
    """A real SQLite database file with one table."""
    import sqlite3

    path = tmp_path / "inventory.db"
    conn = sqlite3.connect(path)
    try:
        conn.execute("CREATE TABLE items (id INTEGER PRIMARY KEY, name TEXT)")
        conn.commit()
    finally:
        conn.close()
    return path
