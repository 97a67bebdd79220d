"""PostgreSQL adapter using psycopg2."""

from __future__ import annotations

from typing import Any

from dbprobe.domains.connections.domain.descriptor import ConnectionDescriptor
from dbprobe.domains.connections.providers.adapters.base import (
    DEFAULT_TIMEOUT_MS,
    CursorBasedAdapter,
    timeout_seconds,
)

ADMIN_DATABASE = "postgres"
# libpq treats any connect_timeout below 2 seconds as 2
LIBPQ_MIN_CONNECT_TIMEOUT = 2


class PostgreSQLAdapter(CursorBasedAdapter):
    """Adapter for PostgreSQL using psycopg2."""

    @property
    def name(self) -> str:
        return "PostgreSQL"

    @property
    def install_extra(self) -> str:
        return "postgres"

    @property
    def install_package(self) -> str:
        return "psycopg2-binary"

    @property
    def driver_import_names(self) -> tuple[str, ...]:
        return ("psycopg2",)

    @property
    def system_databases(self) -> frozenset[str]:
        return frozenset({"template0", "template1", ADMIN_DATABASE})

    @property
    def listing_database(self) -> str | None:
        return ADMIN_DATABASE

    @property
    def version_query(self) -> str:
        return "SELECT version()"

    @property
    def databases_query(self) -> str:
        return "SELECT datname FROM pg_database WHERE datistemplate = false ORDER BY datname"

    def connect(self, descriptor: ConnectionDescriptor, *, timeout_ms: int = DEFAULT_TIMEOUT_MS) -> Any:
        """Connect to PostgreSQL database.

        The driver timeout never goes below two seconds, so with a shorter
        ``timeout_ms`` the worker can outlive the bounded call by up to the
        difference before it closes its handle.
        """
        psycopg2 = self._import_driver_module("psycopg2")

        conn = psycopg2.connect(
            host=descriptor.host,
            port=descriptor.port_number,
            dbname=descriptor.database or ADMIN_DATABASE,
            user=descriptor.username,
            password=descriptor.password,
            connect_timeout=max(LIBPQ_MIN_CONNECT_TIMEOUT, timeout_seconds(timeout_ms)),
        )
        # Read-only probing queries; avoid leaving an open transaction behind
        conn.autocommit = True
        return conn
