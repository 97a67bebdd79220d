"""Base class and common helpers for database adapters."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import replace
from pathlib import Path
from typing import Any

from dbprobe.domains.connections.domain.descriptor import ConnectionDescriptor
from dbprobe.domains.connections.domain.result import ConnectionCheck
from dbprobe.domains.connections.providers.driver import DriverDescriptor, import_driver_module
from dbprobe.shared.core.logging import get_logger

DEFAULT_TIMEOUT_MS = 10_000

logger = get_logger(__name__)


def resolve_file_path(path_str: str) -> Path:
    """Resolve a file path for file-based databases.

    Handles:
    - Expanding ~ to home directory
    - Adding leading slash if path looks like it's missing one
    - Resolving to absolute path
    """
    path_str = path_str.strip()

    file_path = Path(path_str).expanduser()

    # If path doesn't exist and looks like a missing leading slash, try adding it
    if not file_path.exists() and not path_str.startswith(("/", "~", ".")):
        absolute_path = Path("/" + path_str)
        if absolute_path.exists():
            file_path = absolute_path

    return file_path.resolve()


def timeout_seconds(timeout_ms: int) -> int:
    """Driver-level timeout in whole seconds, never below one."""
    return max(1, -(-int(timeout_ms) // 1000))


class DatabaseAdapter(ABC):
    """Abstract base class for database adapters.

    An adapter knows how to open, check, enumerate and release connections
    for exactly one database kind. Every handle is acquired through
    :meth:`session`, which releases it on every exit path.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for this database type."""
        pass

    @property
    def driver_import_names(self) -> tuple[str, ...]:
        """Import names used to verify required driver dependencies are installed."""
        return ()

    @property
    def install_extra(self) -> str | None:
        """Name of the [extra] for pip install."""
        return None

    @property
    def install_package(self) -> str | None:
        """Name of the package on the index."""
        return None

    @property
    def driver(self) -> DriverDescriptor:
        return DriverDescriptor(
            driver_name=self.name,
            import_names=self.driver_import_names,
            extra_name=self.install_extra,
            package_name=self.install_package,
        )

    def _import_driver_module(self, module_name: str) -> Any:
        return import_driver_module(
            module_name,
            driver_name=self.name,
            extra_name=self.install_extra,
            package_name=self.install_package,
        )

    @property
    def system_databases(self) -> frozenset[str]:
        """Set of system database names to exclude from listings.

        Returns lowercase names for case-insensitive comparison.
        """
        return frozenset()

    @property
    def listing_database(self) -> str | None:
        """Database to connect to when enumerating databases.

        ``None`` keeps the descriptor's database, an empty string clears it.
        """
        return None

    @property
    def test_query(self) -> str:
        """A simple query to test the connection."""
        return "SELECT 1"

    def validate_descriptor(self, descriptor: ConnectionDescriptor) -> None:
        """Adapter-specific checks that run before any I/O."""
        return None

    def apply_database_override(self, descriptor: ConnectionDescriptor, database: str | None) -> ConnectionDescriptor:
        if database is None:
            return descriptor
        return replace(descriptor, database=database)

    @abstractmethod
    def connect(self, descriptor: ConnectionDescriptor, *, timeout_ms: int = DEFAULT_TIMEOUT_MS) -> Any:
        """Open a connection handle."""
        pass

    def disconnect(self, conn: Any) -> None:
        """Close a connection if the driver exposes a close method."""
        close_fn = getattr(conn, "close", None)
        if callable(close_fn):
            close_fn()

    @contextmanager
    def session(self, descriptor: ConnectionDescriptor, *, timeout_ms: int = DEFAULT_TIMEOUT_MS) -> Iterator[Any]:
        """Yield a connection that is released exactly once when the block exits."""
        conn = self.connect(descriptor, timeout_ms=timeout_ms)
        try:
            yield conn
        finally:
            try:
                self.disconnect(conn)
            except Exception as exc:
                logger.debug("Ignoring error while closing %s connection: %s", self.name, exc)

    def ping(self, conn: Any) -> None:
        """Execute a simple query to verify the connection works."""
        cursor = conn.cursor()
        try:
            cursor.execute(self.test_query)
            cursor.fetchone()
        finally:
            cursor.close()

    def get_version(self, conn: Any) -> str | None:
        """Return the server version string, if the backend exposes one."""
        return None

    @abstractmethod
    def get_databases(self, conn: Any) -> list[str]:
        """Get the raw list of databases visible on ``conn``."""
        pass

    def filter_system_databases(self, names: Iterable[str]) -> list[str]:
        excluded = self.system_databases
        return [name for name in names if name and name.lower() not in excluded]

    def test_connection(
        self, descriptor: ConnectionDescriptor, timeout_ms: int = DEFAULT_TIMEOUT_MS
    ) -> ConnectionCheck:
        """Open a handle, check liveness and read the version.

        Backend errors are returned in the check rather than raised.
        """
        from dbprobe.domains.connections.app.normalizer import extract_native_code

        try:
            with self.session(descriptor, timeout_ms=timeout_ms) as conn:
                self.ping(conn)
                version = self._read_version(conn)
        except Exception as exc:
            return ConnectionCheck(
                reachable=False,
                message=str(exc),
                native_code=extract_native_code(exc),
                error=exc,
            )
        return ConnectionCheck(
            reachable=True,
            message=f"{self.name} connection succeeded",
            version=version,
        )

    def _read_version(self, conn: Any) -> str | None:
        try:
            version = self.get_version(conn)
        except Exception as exc:
            logger.debug("Could not read %s version: %s", self.name, exc)
            return None
        return str(version).strip() if version else None

    def list_databases(self, descriptor: ConnectionDescriptor, timeout_ms: int = DEFAULT_TIMEOUT_MS) -> list[str]:
        """Enumerate user databases; returns an empty list when enumeration fails."""
        target = self.apply_database_override(descriptor, self.listing_database)
        try:
            with self.session(target, timeout_ms=timeout_ms) as conn:
                names = self.get_databases(conn)
        except Exception as exc:
            logger.warning(
                "Listing %s databases failed: %s",
                self.name,
                exc,
                extra={"kind": descriptor.kind, "status": "list_failed"},
            )
            return []
        return self.filter_system_databases(names)


class CursorBasedAdapter(DatabaseAdapter):
    """Base class for adapters whose databases are listed with one SQL query."""

    @property
    def databases_query(self) -> str:
        raise NotImplementedError(f"{self.name} does not define a databases query")

    @property
    def version_query(self) -> str | None:
        return None

    def _fetch_first_column(self, conn: Any, query: str) -> list[Any]:
        cursor = conn.cursor()
        try:
            cursor.execute(query)
            return [row[0] for row in cursor.fetchall()]
        finally:
            cursor.close()

    def get_version(self, conn: Any) -> str | None:
        if not self.version_query:
            return None
        rows = self._fetch_first_column(conn, self.version_query)
        return rows[0] if rows else None

    def get_databases(self, conn: Any) -> list[str]:
        return [str(name) for name in self._fetch_first_column(conn, self.databases_query)]


__all__ = [
    "CursorBasedAdapter",
    "DEFAULT_TIMEOUT_MS",
    "DatabaseAdapter",
    "resolve_file_path",
    "timeout_seconds",
]
