"""Probe orchestration, error normalization and bounded calls."""

from dbprobe.domains.connections.app.probe_service import (
    ProbeService,
    ProbeState,
    list_supported_kinds,
    probe,
    probe_async,
    validate_descriptor,
)

__all__ = [
    "ProbeService",
    "ProbeState",
    "list_supported_kinds",
    "probe",
    "probe_async",
    "validate_descriptor",
]
