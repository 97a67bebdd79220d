"""Persistent stores for the application shell."""

from dbprobe.domains.shell.store.settings import ProbeSettings, SettingsStore, load_probe_settings

__all__ = ["ProbeSettings", "SettingsStore", "load_probe_settings"]
