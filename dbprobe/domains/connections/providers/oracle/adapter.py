"""Oracle Database adapter using oracledb."""

from __future__ import annotations

from typing import Any

from dbprobe.domains.connections.domain.descriptor import ConnectionDescriptor
from dbprobe.domains.connections.providers.adapters.base import (
    DEFAULT_TIMEOUT_MS,
    CursorBasedAdapter,
    timeout_seconds,
)

DEFAULT_SERVICE_NAME = "XE"


class OracleAdapter(CursorBasedAdapter):
    """Adapter for Oracle Database using oracledb (thin mode).

    Oracle has one database per instance; the pluggable databases listed
    from ``v$pdbs`` stand in for catalogs and need elevated privileges.
    """

    @property
    def name(self) -> str:
        return "Oracle"

    @property
    def install_extra(self) -> str:
        return "oracle"

    @property
    def install_package(self) -> str:
        return "oracledb"

    @property
    def driver_import_names(self) -> tuple[str, ...]:
        return ("oracledb",)

    @property
    def system_databases(self) -> frozenset[str]:
        return frozenset({"pdb$seed"})

    @property
    def test_query(self) -> str:
        return "SELECT 1 FROM DUAL"

    @property
    def version_query(self) -> str:
        return "SELECT banner FROM v$version WHERE ROWNUM = 1"

    @property
    def databases_query(self) -> str:
        return "SELECT name FROM v$pdbs ORDER BY name"

    def build_dsn(self, descriptor: ConnectionDescriptor) -> str:
        # Easy Connect string format: host:port/service_name
        service = descriptor.database or DEFAULT_SERVICE_NAME
        return f"{descriptor.host}:{descriptor.port_number}/{service}"

    def connect(self, descriptor: ConnectionDescriptor, *, timeout_ms: int = DEFAULT_TIMEOUT_MS) -> Any:
        """Connect to Oracle database."""
        oracledb = self._import_driver_module("oracledb")

        return oracledb.connect(
            user=descriptor.username,
            password=descriptor.password,
            dsn=self.build_dsn(descriptor),
            tcp_connect_timeout=timeout_seconds(timeout_ms),
        )
