"""dbprobe - Probe database servers and list the databases they expose."""

from typing import TYPE_CHECKING, Any

__all__ = [
    "__version__",
    "ConnectionDescriptor",
    "ErrorKind",
    "ProbeResult",
    "ProbeService",
    "list_supported_kinds",
    "main",
    "probe",
    "probe_async",
]

__version__ = "0.1.0"

if TYPE_CHECKING:
    from dbprobe.cli import main
    from dbprobe.domains.connections.app.probe_service import (
        ProbeService,
        list_supported_kinds,
        probe,
        probe_async,
    )
    from dbprobe.domains.connections.domain import ConnectionDescriptor, ErrorKind, ProbeResult


def __getattr__(name: str) -> Any:
    """Lazy import so that ``import dbprobe`` stays side-effect free."""
    if name == "main":
        from dbprobe.cli import main

        return main
    if name in {"ProbeService", "list_supported_kinds", "probe", "probe_async"}:
        from dbprobe.domains.connections.app import probe_service

        return getattr(probe_service, name)
    if name in {"ConnectionDescriptor", "ErrorKind", "ProbeResult"}:
        from dbprobe.domains.connections import domain

        return getattr(domain, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
