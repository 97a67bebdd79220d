"""Canonical probe outcome types."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Backend-independent classification of why a probe failed."""

    MISSING_PARAMETERS = "MissingParameters"
    INVALID_PORT = "InvalidPort"
    UNSUPPORTED_KIND = "UnsupportedKind"
    MISSING_FILE_PATH = "MissingFilePath"
    CONNECTION_FAILED = "ConnectionFailed"
    TIMEOUT = "Timeout"


@dataclass
class ConnectionCheck:
    """Outcome of an adapter's liveness check.

    ``error`` keeps the native exception for the normalizer; nothing else
    should look at it.
    """

    reachable: bool
    message: str = ""
    version: str | None = None
    native_code: str | None = None
    error: BaseException | None = field(default=None, repr=False)


@dataclass
class ProbeResult:
    """Uniform success/failure structure returned for every probe."""

    success: bool
    message: str
    version: str | None = None
    databases: list[str] | None = None
    error_kind: ErrorKind | None = None
    native_code: str | None = None
    connection_info: dict[str, Any] | None = None

    @classmethod
    def ok(
        cls,
        message: str,
        *,
        version: str | None = None,
        databases: list[str] | None = None,
        connection_info: dict[str, Any] | None = None,
    ) -> ProbeResult:
        return cls(
            success=True,
            message=message,
            version=version or None,
            databases=list(databases or []),
            connection_info=connection_info,
        )

    @classmethod
    def failure(cls, error_kind: ErrorKind, message: str, native_code: str | None = None) -> ProbeResult:
        return cls(success=False, message=message, error_kind=error_kind, native_code=native_code)

    def to_dict(self) -> dict[str, Any]:
        """Render the JSON shape handed to the HTTP layer."""
        payload: dict[str, Any] = {"success": self.success, "message": self.message}
        if self.success:
            if self.version:
                payload["version"] = self.version
            payload["databases"] = list(self.databases or [])
            if self.connection_info:
                payload["connectionInfo"] = dict(self.connection_info)
        else:
            if self.error_kind is not None:
                payload["errorKind"] = self.error_kind.value
            if self.native_code is not None:
                payload["error"] = self.native_code
        return payload
