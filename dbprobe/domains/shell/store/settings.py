"""Settings store for managing probe settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from dbprobe.shared.core.store import JSONFileStore, get_config_dir

DEFAULT_CONNECT_TIMEOUT_MS = 10_000
DEFAULT_LIST_TIMEOUT_MS = 10_000
DEFAULT_KIND = "mysql"
DEFAULT_LOG_LEVEL = "WARNING"

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
_TIMEOUT_KEYS = ("connect_timeout_ms", "list_timeout_ms")
SETTING_KEYS = (*_TIMEOUT_KEYS, "default_kind", "log_level")


def _resolve_settings_path() -> Path:
    override = os.environ.get("DBPROBE_SETTINGS_PATH", "").strip()
    if override:
        return Path(override).expanduser()
    return get_config_dir() / "settings.json"


class SettingsStore(JSONFileStore):
    """Store for managing application settings.

    Settings are stored as a JSON object in ~/.dbprobe/settings.json
    """

    def __init__(self, file_path: Path | None = None) -> None:
        super().__init__(file_path or _resolve_settings_path())

    @classmethod
    def get_instance(cls) -> SettingsStore:
        """Get the store for the currently configured path."""
        return _get_store()

    def load_all(self) -> dict[str, Any]:
        """Load all settings.

        Returns:
            Dictionary of settings, or empty dict if none exist.
        """
        data = self._read_json()
        return data if isinstance(data, dict) else {}

    def save_all(self, settings: dict[str, Any]) -> None:
        """Save all settings, replacing existing."""
        self._write_json(settings)

    def set(self, key: str, value: Any) -> None:
        settings = self.load_all()
        settings[key] = value
        self.save_all(settings)

    def delete(self, key: str) -> bool:
        """Delete a specific setting.

        Returns:
            True if key existed and was deleted, False otherwise.
        """
        settings = self.load_all()
        if key in settings:
            del settings[key]
            self.save_all(settings)
            return True
        return False


@dataclass(frozen=True)
class ProbeSettings:
    """Typed view of the settings that affect probing."""

    connect_timeout_ms: int = DEFAULT_CONNECT_TIMEOUT_MS
    list_timeout_ms: int = DEFAULT_LIST_TIMEOUT_MS
    default_kind: str = DEFAULT_KIND
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProbeSettings:
        """Build settings from raw JSON, falling back to defaults for bad values."""
        return cls(
            connect_timeout_ms=_positive_int(data.get("connect_timeout_ms"), DEFAULT_CONNECT_TIMEOUT_MS),
            list_timeout_ms=_positive_int(data.get("list_timeout_ms"), DEFAULT_LIST_TIMEOUT_MS),
            default_kind=_non_empty_str(data.get("default_kind"), DEFAULT_KIND).lower(),
            log_level=_log_level(data.get("log_level")),
        )

    def with_timeout(self, timeout_ms: int | None) -> ProbeSettings:
        """Return a copy whose connect and list budgets are both ``timeout_ms``."""
        if timeout_ms is None:
            return self
        return ProbeSettings(
            connect_timeout_ms=timeout_ms,
            list_timeout_ms=timeout_ms,
            default_kind=self.default_kind,
            log_level=self.log_level,
        )


def _positive_int(value: Any, default: int) -> int:
    if isinstance(value, bool):
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


def _non_empty_str(value: Any, default: str) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default


def _log_level(value: Any) -> str:
    if isinstance(value, str) and value.strip().upper() in _LOG_LEVELS:
        return value.strip().upper()
    return DEFAULT_LOG_LEVEL


def parse_setting(key: str, raw: str) -> Any:
    """Convert a command-line value into the stored form for ``key``.

    Raises:
        ValueError: If ``key`` is unknown or ``raw`` is not valid for it.
    """
    value = raw.strip()
    if key in _TIMEOUT_KEYS:
        try:
            number = int(value)
        except ValueError:
            raise ValueError(f"{key} must be a whole number of milliseconds, got '{raw}'") from None
        if number <= 0:
            raise ValueError(f"{key} must be positive, got {number}")
        return number
    if key == "default_kind":
        if not value:
            raise ValueError("default_kind must not be empty")
        return value.lower()
    if key == "log_level":
        if value.upper() not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(sorted(_LOG_LEVELS))}")
        return value.upper()
    raise ValueError(f"Unknown setting '{key}'")


_store: SettingsStore | None = None
_store_path: Path | None = None


def _get_store() -> SettingsStore:
    global _store, _store_path
    path = _resolve_settings_path()
    if _store is None or _store_path != path:
        _store = SettingsStore(file_path=path)
        _store_path = path
    return _store


def load_settings() -> dict:
    """Load app settings from config file."""
    return _get_store().load_all()


def load_probe_settings() -> ProbeSettings:
    """Load :class:`ProbeSettings` from the settings file."""
    return ProbeSettings.from_dict(load_settings())
