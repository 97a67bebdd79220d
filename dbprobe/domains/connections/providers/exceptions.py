"""Custom exceptions for the probing layer."""

from __future__ import annotations

from typing import Any

from dbprobe.domains.connections.domain.result import ErrorKind


class ProbeError(Exception):
    """Base class for failures that carry a canonical error kind."""

    error_kind: ErrorKind = ErrorKind.CONNECTION_FAILED

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class MissingParametersError(ProbeError):
    """A required connection field was not supplied."""

    error_kind = ErrorKind.MISSING_PARAMETERS

    def __init__(self, missing: list[str]):
        self.missing = list(missing)
        fields = ", ".join(self.missing)
        super().__init__(f"Missing required connection parameters: {fields}")


class InvalidPortError(ProbeError):
    """The port is not an integer in the range 1-65535."""

    error_kind = ErrorKind.INVALID_PORT

    def __init__(self, port: Any):
        self.port = port
        super().__init__(f"Port must be an integer between 1 and 65535, got {port!r}")


class UnsupportedKindError(ProbeError):
    """The requested database kind is not in the catalog."""

    error_kind = ErrorKind.UNSUPPORTED_KIND

    def __init__(self, kind: str, supported: list[str] | None = None):
        self.kind = kind
        self.supported = list(supported or [])
        message = f"Unsupported database type: {kind}"
        if self.supported:
            message += f" (supported: {', '.join(self.supported)})"
        super().__init__(message)


class MissingFilePathError(ProbeError):
    """A file-based database was requested without a file path."""

    error_kind = ErrorKind.MISSING_FILE_PATH

    def __init__(self, display_name: str):
        super().__init__(f"{display_name} requires a database file path")


class ProbeConnectionError(ProbeError):
    """The backend refused or failed the connection."""

    error_kind = ErrorKind.CONNECTION_FAILED

    def __init__(self, message: str, native_code: str | None = None):
        self.native_code = native_code
        super().__init__(message)


class ProbeTimeoutError(ProbeError):
    """A bounded call did not finish within its budget."""

    error_kind = ErrorKind.TIMEOUT

    def __init__(self, operation: str, timeout_ms: int):
        self.operation = operation
        self.timeout_ms = timeout_ms
        super().__init__(f"{operation} timed out after {timeout_ms} ms")


class MissingDriverError(ConnectionError):
    """Exception raised when a required database driver package is not installed."""

    def __init__(
        self,
        driver_name: str,
        extra_name: str,
        package_name: str,
        *,
        module_name: str | None = None,
        import_error: str | None = None,
    ):
        self.driver_name = driver_name
        self.extra_name = extra_name
        self.package_name = package_name
        self.module_name = module_name
        self.import_error = import_error
        super().__init__(f"Missing driver for {driver_name}")

    @property
    def install_hint(self) -> str:
        return f'pip install "dbprobe[{self.extra_name}]"'
