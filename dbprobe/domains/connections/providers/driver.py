"""Driver dependency descriptors and import helpers."""

from __future__ import annotations

import importlib
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class DriverDescriptor:
    driver_name: str
    import_names: tuple[str, ...]
    extra_name: str | None
    package_name: str | None


def import_driver_module(
    module_name: str,
    *,
    driver_name: str,
    extra_name: str | None,
    package_name: str | None,
) -> Any:
    """Import a driver module, raising MissingDriverError with detail if it fails."""
    if not extra_name or not package_name:
        return importlib.import_module(module_name)

    try:
        return importlib.import_module(module_name)
    except ImportError as e:
        from dbprobe.domains.connections.providers.exceptions import MissingDriverError

        raise MissingDriverError(
            driver_name,
            extra_name,
            package_name,
            module_name=module_name,
            import_error=str(e),
        ) from e


def is_driver_available(driver: DriverDescriptor) -> bool:
    """Return True when every import name of ``driver`` can be imported."""
    for module_name in driver.import_names:
        try:
            importlib.import_module(module_name)
        except ImportError:
            return False
    return True
