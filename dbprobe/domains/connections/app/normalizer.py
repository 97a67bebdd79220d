"""Map backend-native failures onto the canonical error kinds.

This is the only module that looks inside driver exceptions. Adapters hand
over whatever they caught; callers only ever see :class:`NormalizedError`.
"""

from __future__ import annotations

import concurrent.futures
import errno
import re
import socket
from dataclasses import dataclass

from dbprobe.domains.connections.domain.result import ErrorKind
from dbprobe.domains.connections.providers.exceptions import (
    MissingDriverError,
    ProbeConnectionError,
    ProbeError,
)

MISSING_DRIVER_CODE = "MISSING_DRIVER"

_TIMEOUT_TYPES: tuple[type[BaseException], ...] = (
    TimeoutError,
    socket.timeout,
    concurrent.futures.TimeoutError,
)
# Driver timeout signatures. Each is multi-word or punctuated so a host name
# echoed into the message cannot match on its own.
_TIMEOUT_MESSAGE = re.compile(
    r"\(timed out\)"  # PyMySQL 2003 suffix
    r"|connection timed out"
    r"|operation timed out"
    r"|timeout expired"  # libpq, ODBC login timeout
    r"|\b(?:ORA-12170|ORA-12535|DPY-4024)\b",
    re.IGNORECASE,
)
_SQLSTATE = re.compile(r"^[0-9A-Z]{5}$")


@dataclass(frozen=True)
class NormalizedError:
    kind: ErrorKind
    message: str
    native_code: str | None = None


def is_timeout(error: BaseException) -> bool:
    """Return True if ``error`` carries a timeout signature."""
    if isinstance(error, _TIMEOUT_TYPES):
        return True
    if "Timeout" in type(error).__name__:
        return True
    if getattr(error, "errno", None) == errno.ETIMEDOUT:
        return True
    return bool(_TIMEOUT_MESSAGE.search(_error_text(error)))


def extract_native_code(error: BaseException) -> str | None:
    """Pull the backend's own error code out of a driver exception."""
    if isinstance(error, ProbeConnectionError):
        return error.native_code
    if isinstance(error, MissingDriverError):
        return MISSING_DRIVER_CODE

    args = getattr(error, "args", ())
    first = args[0] if args else None

    # oracledb: args[0] is an _Error with full_code like "ORA-01017"
    full_code = getattr(first, "full_code", None)
    if full_code:
        return str(full_code)

    # psycopg2 exposes the SQLSTATE as pgcode
    pgcode = getattr(error, "pgcode", None)
    if pgcode:
        return str(pgcode)

    # pymongo OperationFailure and friends
    code = getattr(error, "code", None)
    if code is not None:
        code_name = getattr(error, "code_name", None)
        return f"{code_name}({code})" if code_name else str(code)

    sqlite_name = getattr(error, "sqlite_errorname", None)
    if sqlite_name:
        return str(sqlite_name)

    # PyMySQL puts the numeric server code first; ODBC drivers put the SQLSTATE first
    if isinstance(first, int) and not isinstance(first, bool):
        return str(first)
    if isinstance(first, str) and _SQLSTATE.match(first):
        return first

    errno = getattr(error, "errno", None)
    if errno is not None:
        return str(errno)

    return type(error).__name__


def _error_text(error: BaseException) -> str:
    if isinstance(error, ProbeError):
        return error.message
    if isinstance(error, MissingDriverError):
        return f"{error} (install with: {error.install_hint})"
    args = getattr(error, "args", ())
    # PyMySQL: (code, message)
    if len(args) >= 2 and isinstance(args[0], int) and isinstance(args[1], str):
        return args[1]
    text = str(error).strip()
    return text or type(error).__name__


def normalize_error(error: BaseException, display_name: str | None = None) -> NormalizedError:
    """Convert any exception raised while probing into a :class:`NormalizedError`."""
    if isinstance(error, ProbeError):
        native_code = getattr(error, "native_code", None)
        return NormalizedError(error.error_kind, error.message, native_code)

    text = _error_text(error)
    prefix = f"{display_name} " if display_name else ""

    if not isinstance(error, MissingDriverError) and is_timeout(error):
        return NormalizedError(ErrorKind.TIMEOUT, f"{prefix}connection timed out: {text}")

    return NormalizedError(
        ErrorKind.CONNECTION_FAILED,
        f"{prefix}connection failed: {text}",
        extract_native_code(error),
    )
