"""Unit tests for the settings store."""

from __future__ import annotations

import json

import pytest

from dbprobe.domains.shell.store.settings import (
    ProbeSettings,
    SettingsStore,
    load_probe_settings,
    load_settings,
    parse_setting,
)


def test_defaults_when_file_missing(settings_path):
    settings = load_probe_settings()

    assert not settings_path.exists()
    assert settings == ProbeSettings()
    assert settings.connect_timeout_ms == 10_000
    assert settings.list_timeout_ms == 10_000
    assert settings.default_kind == "mysql"
    assert settings.log_level == "WARNING"


def test_values_loaded_from_file(settings_path):
    settings_path.write_text(
        json.dumps({"connect_timeout_ms": 2500, "list_timeout_ms": "4000", "default_kind": "Postgres", "log_level": "debug"})
    )

    settings = load_probe_settings()

    assert settings.connect_timeout_ms == 2500
    assert settings.list_timeout_ms == 4000
    assert settings.default_kind == "postgres"
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize(
    "data",
    [
        {"connect_timeout_ms": -5, "list_timeout_ms": 0, "default_kind": "", "log_level": "LOUD"},
        {"connect_timeout_ms": "soon", "list_timeout_ms": None, "default_kind": 42, "log_level": 10},
        {"connect_timeout_ms": True},
    ],
)
def test_invalid_values_fall_back_to_defaults(settings_path, data):
    settings_path.write_text(json.dumps(data))

    assert load_probe_settings() == ProbeSettings()


def test_corrupt_file_is_ignored(settings_path):
    settings_path.write_text("{not json")

    assert load_settings() == {}
    assert load_probe_settings() == ProbeSettings()


def test_non_object_file_is_ignored(settings_path):
    settings_path.write_text("[1, 2, 3]")

    assert load_settings() == {}


def test_save_and_reload(settings_path):
    SettingsStore.get_instance().set("default_kind", "sqlite")

    assert json.loads(settings_path.read_text()) == {"default_kind": "sqlite"}
    assert load_probe_settings().default_kind == "sqlite"


def test_store_get_set_delete(tmp_path):
    store = SettingsStore(file_path=tmp_path / "nested" / "settings.json")

    assert store.exists() is False
    store.set("connect_timeout_ms", 3000)
    assert store.load_all() == {"connect_timeout_ms": 3000}
    assert store.delete("connect_timeout_ms") is True
    assert store.delete("connect_timeout_ms") is False
    assert store.load_all() == {}


def test_config_dir_override(tmp_path, monkeypatch):
    monkeypatch.delenv("DBPROBE_SETTINGS_PATH", raising=False)
    monkeypatch.setenv("DBPROBE_CONFIG_DIR", str(tmp_path / "cfg"))

    assert SettingsStore.get_instance().file_path == tmp_path / "cfg" / "settings.json"


def test_with_timeout_overrides_both_budgets():
    settings = ProbeSettings(connect_timeout_ms=1000, list_timeout_ms=2000, default_kind="oracle")

    overridden = settings.with_timeout(500)

    assert overridden.connect_timeout_ms == 500
    assert overridden.list_timeout_ms == 500
    assert overridden.default_kind == "oracle"
    assert settings.with_timeout(None) is settings


@pytest.mark.parametrize(
    ("key", "raw", "expected"),
    [
        ("connect_timeout_ms", " 2500 ", 2500),
        ("list_timeout_ms", "1", 1),
        ("default_kind", "Postgres", "postgres"),
        ("log_level", "debug", "DEBUG"),
    ],
)
def test_parse_setting(key, raw, expected):
    assert parse_setting(key, raw) == expected


@pytest.mark.parametrize(
    ("key", "raw"),
    [
        ("connect_timeout_ms", "0"),
        ("list_timeout_ms", "1.5s"),
        ("default_kind", "  "),
        ("log_level", "LOUD"),
        ("colour", "blue"),
    ],
)
def test_parse_setting_rejects_bad_values(key, raw):
    with pytest.raises(ValueError):
        parse_setting(key, raw)
