"""Microsoft SQL Server adapter using mssql-python."""

from __future__ import annotations

from typing import Any

from dbprobe.domains.connections.domain.descriptor import ConnectionDescriptor
from dbprobe.domains.connections.providers.adapters.base import (
    DEFAULT_TIMEOUT_MS,
    CursorBasedAdapter,
    timeout_seconds,
)

ADMIN_DATABASE = "master"
# ODBC connection attribute, applied before the login handshake
SQL_ATTR_LOGIN_TIMEOUT = 103


def _quote_odbc_value(value: str) -> str:
    """Brace-quote a connection string value when it contains special characters."""
    if not value or not any(ch in value for ch in ";{}= "):
        return value
    return "{" + value.replace("}", "}}") + "}"


class SQLServerAdapter(CursorBasedAdapter):
    """Adapter for Microsoft SQL Server using mssql-python.

    The server version is not read; a successful login is the liveness signal.
    """

    @property
    def name(self) -> str:
        return "SQL Server"

    @property
    def install_extra(self) -> str:
        return "mssql"

    @property
    def install_package(self) -> str:
        return "mssql-python"

    @property
    def driver_import_names(self) -> tuple[str, ...]:
        return ("mssql_python",)

    @property
    def system_databases(self) -> frozenset[str]:
        return frozenset({"master", "tempdb", "model", "msdb"})

    @property
    def listing_database(self) -> str | None:
        return ADMIN_DATABASE

    @property
    def databases_query(self) -> str:
        return "SELECT name FROM sys.databases ORDER BY name"

    def build_connection_string(self, descriptor: ConnectionDescriptor) -> str:
        parts = [
            f"SERVER={descriptor.host},{descriptor.port_number}",
            f"DATABASE={_quote_odbc_value(descriptor.database or ADMIN_DATABASE)}",
            f"UID={_quote_odbc_value(descriptor.username)}",
            f"PWD={_quote_odbc_value(descriptor.password)}",
            "Encrypt=yes",
            "TrustServerCertificate=yes",
        ]
        return ";".join(parts) + ";"

    def connect(self, descriptor: ConnectionDescriptor, *, timeout_ms: int = DEFAULT_TIMEOUT_MS) -> Any:
        """Connect to SQL Server, giving up on the login after ``timeout_ms``."""
        mssql_python = self._import_driver_module("mssql_python")

        conn = mssql_python.connect(
            self.build_connection_string(descriptor),
            attrs_before={SQL_ATTR_LOGIN_TIMEOUT: timeout_seconds(timeout_ms)},
        )
        conn.autocommit = True
        return conn
