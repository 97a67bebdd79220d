"""Unit tests for error normalization."""

from __future__ import annotations

import errno
import socket
import sqlite3

import pytest

from dbprobe.domains.connections.app.normalizer import (
    MISSING_DRIVER_CODE,
    extract_native_code,
    is_timeout,
    normalize_error,
)
from dbprobe.domains.connections.domain import ErrorKind
from dbprobe.domains.connections.providers.exceptions import (
    InvalidPortError,
    MissingDriverError,
    ProbeConnectionError,
    ProbeTimeoutError,
)


class ServerSelectionTimeoutError(Exception):
    pass


class OperationFailure(Exception):
    def __init__(self, message: str, code: int, code_name: str | None = None):
        super().__init__(message)
        self.code = code
        self.code_name = code_name


class TestTimeoutDetection:
    @pytest.mark.parametrize(
        "error",
        [
            TimeoutError(),
            socket.timeout("timed out"),
            ServerSelectionTimeoutError("No servers found"),
            OSError("Connection timed out"),
            OSError(errno.ETIMEDOUT, "Operation timed out"),
            Exception("08001", "[Microsoft][ODBC Driver 18 for SQL Server]Login timeout expired"),
            Exception(2003, "Can't connect to MySQL server on 'db.local' (timed out)"),
            Exception("ORA-12170: TNS:Connect timeout occurred"),
        ],
    )
    def test_timeout_signatures(self, error):
        assert is_timeout(error) is True

    @pytest.mark.parametrize(
        "error",
        [
            ConnectionRefusedError(111, "Connection refused"),
            Exception(2003, "Can't connect to MySQL server on 'timeout-db.internal' ([Errno 111] Connection refused)"),
            Exception('connection to server at "timeout.db.local" (10.0.0.5), port 5432 failed: FATAL:  password authentication failed'),
            Exception("ORA-01017: invalid username/password; logon denied (host timed-out-ora)"),
        ],
    )
    def test_host_names_are_not_timeout_signatures(self, error):
        assert is_timeout(error) is False

    def test_refused_on_timeout_like_host_keeps_native_code(self):
        error = Exception(2003, "Can't connect to MySQL server on 'timeout-db.internal' ([Errno 111] Connection refused)")

        normalized = normalize_error(error, "MySQL")

        assert normalized.kind is ErrorKind.CONNECTION_FAILED
        assert normalized.native_code == "2003"

    def test_timeout_maps_to_timeout_kind(self):
        normalized = normalize_error(socket.timeout("timed out"), "PostgreSQL")

        assert normalized.kind is ErrorKind.TIMEOUT
        assert normalized.message == "PostgreSQL connection timed out: timed out"


class TestNativeCodes:
    def test_pymysql_style_args(self):
        error = Exception(1045, "Access denied for user 'root'@'localhost' (using password: YES)")

        normalized = normalize_error(error, "MySQL")

        assert normalized.kind is ErrorKind.CONNECTION_FAILED
        assert normalized.native_code == "1045"
        assert normalized.message == "MySQL connection failed: Access denied for user 'root'@'localhost' (using password: YES)"

    def test_mongo_code_name(self):
        error = OperationFailure("Authentication failed.", 18, "AuthenticationFailed")

        assert extract_native_code(error) == "AuthenticationFailed(18)"

    def test_sqlite_error_name(self):
        error = sqlite3.OperationalError("unable to open database file")
        error.sqlite_errorname = "SQLITE_CANTOPEN"

        assert extract_native_code(error) == "SQLITE_CANTOPEN"

    def test_errno_fallback(self):
        error = OSError(113, "No route to host")

        assert extract_native_code(error) == "113"

    def test_class_name_fallback(self):
        class HandshakeError(Exception):
            pass

        assert extract_native_code(HandshakeError("bad handshake")) == "HandshakeError"

    def test_probe_connection_error_code(self):
        error = ProbeConnectionError("rejected", native_code="ELOGIN")

        normalized = normalize_error(error)

        assert normalized.kind is ErrorKind.CONNECTION_FAILED
        assert normalized.native_code == "ELOGIN"
        assert normalized.message == "rejected"


class TestProbeErrors:
    def test_probe_errors_keep_their_kind(self):
        assert normalize_error(InvalidPortError("99999")).kind is ErrorKind.INVALID_PORT
        assert normalize_error(ProbeTimeoutError("MySQL connection", 1000)).kind is ErrorKind.TIMEOUT

    def test_missing_driver_includes_install_hint(self):
        error = MissingDriverError("Oracle", "oracle", "oracledb", module_name="oracledb")

        normalized = normalize_error(error, "Oracle")

        assert normalized.kind is ErrorKind.CONNECTION_FAILED
        assert normalized.native_code == MISSING_DRIVER_CODE
        assert 'pip install "dbprobe[oracle]"' in normalized.message

    def test_empty_message_uses_class_name(self):
        normalized = normalize_error(RuntimeError(), None)

        assert normalized.message == "connection failed: RuntimeError"
