"""MongoDB adapter using pymongo."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote_plus

from dbprobe.domains.connections.domain.descriptor import ConnectionDescriptor
from dbprobe.domains.connections.providers.adapters.base import DEFAULT_TIMEOUT_MS, DatabaseAdapter


def build_mongo_uri(descriptor: ConnectionDescriptor) -> str:
    """Build a ``mongodb://`` URI.

    Credentials are only embedded when both username and password are set.
    """
    auth = ""
    if descriptor.username and descriptor.password:
        auth = f"{quote_plus(descriptor.username)}:{quote_plus(descriptor.password)}@"
    uri = f"mongodb://{auth}{descriptor.host}:{descriptor.port_number}"
    if descriptor.database:
        uri += f"/{descriptor.database}"
    return uri


class MongoDBAdapter(DatabaseAdapter):
    """Adapter for MongoDB using pymongo."""

    @property
    def name(self) -> str:
        return "MongoDB"

    @property
    def install_extra(self) -> str:
        return "mongodb"

    @property
    def install_package(self) -> str:
        return "pymongo"

    @property
    def driver_import_names(self) -> tuple[str, ...]:
        return ("pymongo",)

    @property
    def system_databases(self) -> frozenset[str]:
        return frozenset({"admin", "local", "config"})

    @property
    def listing_database(self) -> str | None:
        return ""

    def connect(self, descriptor: ConnectionDescriptor, *, timeout_ms: int = DEFAULT_TIMEOUT_MS) -> Any:
        """Create a client; pymongo connects lazily on the first command."""
        pymongo = self._import_driver_module("pymongo")

        return pymongo.MongoClient(
            build_mongo_uri(descriptor),
            serverSelectionTimeoutMS=timeout_ms,
            connectTimeoutMS=timeout_ms,
            socketTimeoutMS=timeout_ms,
        )

    def ping(self, conn: Any) -> None:
        conn.admin.command("ping")

    def get_version(self, conn: Any) -> str | None:
        build_info = conn.admin.command("buildInfo")
        return build_info.get("version")

    def get_databases(self, conn: Any) -> list[str]:
        return list(conn.list_database_names())
