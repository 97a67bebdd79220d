"""CLI command handlers for dbprobe."""

from __future__ import annotations

import json
from dataclasses import asdict
from typing import Any

from dbprobe.domains.connections.app.probe_service import ProbeService, list_supported_kinds
from dbprobe.domains.connections.app.url_parser import parse_connection_url
from dbprobe.domains.connections.domain.descriptor import ConnectionDescriptor
from dbprobe.domains.connections.domain.result import ProbeResult
from dbprobe.domains.connections.providers.catalog import canonical_db_type, resolve
from dbprobe.domains.connections.providers.driver import is_driver_available
from dbprobe.domains.connections.providers.registry import get_default_port
from dbprobe.domains.shell.store.settings import (
    SETTING_KEYS,
    ProbeSettings,
    SettingsStore,
    load_probe_settings,
    parse_setting,
)

EXIT_OK = 0
EXIT_PROBE_FAILED = 1
EXIT_USAGE = 2


def build_descriptor_from_args(args: Any) -> ConnectionDescriptor:
    """Build a descriptor from a URL argument, then apply explicit flags on top.

    Raises:
        ValueError: If the URL cannot be parsed.
    """
    base = parse_connection_url(args.url) if getattr(args, "url", None) else ConnectionDescriptor()
    overrides = {
        "kind": getattr(args, "db_type", None),
        "host": getattr(args, "host", None),
        "port": getattr(args, "port", None),
        "username": getattr(args, "username", None),
        "password": getattr(args, "password", None),
        "database": getattr(args, "database", None),
    }
    data = asdict(base)
    data.update({key: value for key, value in overrides.items() if value is not None})
    if data["port"] in (None, "") and data["kind"]:
        data["port"] = get_default_port(data["kind"]) or None
    return ConnectionDescriptor.from_dict(data)


def _print_result(result: ProbeResult) -> None:
    if result.success:
        print(f"OK: {result.message}")
        if result.version:
            print(f"Version: {result.version}")
        databases = result.databases or []
        if databases:
            print(f"Databases ({len(databases)}):")
            for name in databases:
                print(f"  {name}")
        else:
            print("Databases: (none visible)")
        return

    kind = result.error_kind.value if result.error_kind else "Error"
    print(f"FAILED [{kind}]: {result.message}")
    if result.native_code:
        print(f"Native code: {result.native_code}")


def cmd_probe(args: Any, settings: ProbeSettings) -> int:
    try:
        descriptor = build_descriptor_from_args(args)
    except ValueError as exc:
        print(f"Error: {exc}")
        return EXIT_USAGE

    if args.timeout_ms is not None and args.timeout_ms <= 0:
        print("Error: --timeout-ms must be a positive number of milliseconds")
        return EXIT_USAGE

    service = ProbeService(settings=settings.with_timeout(args.timeout_ms))
    result = service.probe(descriptor)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2, default=str))
    else:
        _print_result(result)
    return EXIT_OK if result.success else EXIT_PROBE_FAILED


def _driver_status(kind: str) -> str:
    adapter = resolve(kind)
    if is_driver_available(adapter.driver):
        return "installed"
    return f'missing (pip install "dbprobe[{adapter.install_extra}]")'


def cmd_types(args: Any) -> int:
    kinds = list_supported_kinds()
    if args.json:
        print(json.dumps(kinds, indent=2))
        return EXIT_OK

    print(f"{'Type':<12} {'Name':<12} {'Port':<6} {'Description':<32} {'Driver'}")
    print("-" * 90)
    for entry in kinds:
        port = entry["defaultPort"] if entry["defaultPort"] is not None else "-"
        print(f"{entry['kind']:<12} {entry['displayName']:<12} {port!s:<6} {entry['description']:<32} {_driver_status(entry['kind'])}")
    return EXIT_OK


def cmd_settings_list(args: Any) -> int:
    """Show the effective probe settings and where they are stored."""
    store = SettingsStore.get_instance()
    stored = store.load_all()
    effective = asdict(load_probe_settings())
    print(f"Settings file: {store.file_path}")
    for key in SETTING_KEYS:
        source = "" if key in stored else "  (default)"
        print(f"{key:<20} {effective[key]}{source}")
    return EXIT_OK


def cmd_settings_set(args: Any) -> int:
    try:
        value = parse_setting(args.key, args.value)
    except ValueError as exc:
        print(f"Error: {exc}")
        return EXIT_USAGE

    if args.key == "default_kind":
        canonical = canonical_db_type(value)
        if canonical is None:
            print(f"Error: Unsupported database type '{value}'")
            return EXIT_USAGE
        value = canonical

    SettingsStore.get_instance().set(args.key, value)
    print(f"Saved {args.key} = {value}")
    return EXIT_OK


def cmd_settings_unset(args: Any) -> int:
    if not SettingsStore.get_instance().delete(args.key):
        print(f"Error: Setting '{args.key}' is not set.")
        return EXIT_PROBE_FAILED
    print(f"Setting '{args.key}' removed; the default applies again.")
    return EXIT_OK
