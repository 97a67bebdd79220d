"""MySQL adapter using PyMySQL (pure Python)."""

from __future__ import annotations

from typing import Any

from dbprobe.domains.connections.domain.descriptor import ConnectionDescriptor
from dbprobe.domains.connections.providers.adapters.base import (
    DEFAULT_TIMEOUT_MS,
    CursorBasedAdapter,
    timeout_seconds,
)


class MySQLAdapter(CursorBasedAdapter):
    """Adapter for MySQL using PyMySQL."""

    @property
    def name(self) -> str:
        return "MySQL"

    @property
    def install_extra(self) -> str:
        return "mysql"

    @property
    def install_package(self) -> str:
        return "PyMySQL"

    @property
    def driver_import_names(self) -> tuple[str, ...]:
        return ("pymysql",)

    @property
    def system_databases(self) -> frozenset[str]:
        return frozenset({"information_schema", "performance_schema", "mysql", "sys"})

    @property
    def listing_database(self) -> str | None:
        # SHOW DATABASES needs no default schema selected
        return ""

    @property
    def version_query(self) -> str:
        return "SELECT VERSION()"

    @property
    def databases_query(self) -> str:
        return "SHOW DATABASES"

    def connect(self, descriptor: ConnectionDescriptor, *, timeout_ms: int = DEFAULT_TIMEOUT_MS) -> Any:
        """Connect to MySQL database."""
        pymysql = self._import_driver_module("pymysql")

        seconds = timeout_seconds(timeout_ms)
        return pymysql.connect(
            host=descriptor.host,
            port=descriptor.port_number,
            database=descriptor.database or None,
            user=descriptor.username,
            password=descriptor.password,
            connect_timeout=seconds,
            read_timeout=seconds,
            write_timeout=seconds,
            autocommit=True,
            charset="utf8mb4",
        )

    def ping(self, conn: Any) -> None:
        conn.ping(reconnect=False)
