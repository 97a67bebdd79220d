"""SQLite adapter using built-in sqlite3."""

from __future__ import annotations

from typing import Any

from dbprobe.domains.connections.domain.descriptor import ConnectionDescriptor
from dbprobe.domains.connections.providers.adapters.base import (
    DEFAULT_TIMEOUT_MS,
    DatabaseAdapter,
    resolve_file_path,
    timeout_seconds,
)
from dbprobe.domains.connections.providers.exceptions import MissingFilePathError


class SQLiteAdapter(DatabaseAdapter):
    """Adapter for SQLite using built-in sqlite3.

    The descriptor's ``database`` is the file path. Files are opened
    read-write without create, so probing never creates a database.
    """

    @property
    def name(self) -> str:
        return "SQLite"

    @property
    def test_query(self) -> str:
        # Fails with "file is not a database" for non-SQLite files
        return "PRAGMA schema_version"

    def validate_descriptor(self, descriptor: ConnectionDescriptor) -> None:
        if not descriptor.database or not descriptor.database.strip():
            raise MissingFilePathError(self.name)

    def connect(self, descriptor: ConnectionDescriptor, *, timeout_ms: int = DEFAULT_TIMEOUT_MS) -> Any:
        """Open an existing SQLite database file."""
        import sqlite3

        file_path = resolve_file_path(descriptor.database)
        # check_same_thread=False: the handle is opened and closed on a worker thread
        return sqlite3.connect(
            f"{file_path.as_uri()}?mode=rw",
            uri=True,
            timeout=timeout_seconds(timeout_ms),
            check_same_thread=False,
        )

    def get_databases(self, conn: Any) -> list[str]:
        """Return the file path of each attached database (the main file)."""
        cursor = conn.cursor()
        try:
            cursor.execute("PRAGMA database_list")
            # PRAGMA database_list returns: seq, name, file
            return [row[2] or row[1] for row in cursor.fetchall() if row[1] != "temp"]
        finally:
            cursor.close()
