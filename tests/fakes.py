"""In-memory adapter used to exercise the probe service without a server."""

from __future__ import annotations

import threading
import time
from typing import Any
from unittest.mock import MagicMock

from dbprobe.domains.connections.domain.descriptor import ConnectionDescriptor
from dbprobe.domains.connections.providers.adapters.base import DEFAULT_TIMEOUT_MS, DatabaseAdapter


class FakeAdapter(DatabaseAdapter):
    """Counts every acquisition and release."""

    def __init__(
        self,
        *,
        connect_error: BaseException | None = None,
        connect_delay: float = 0.0,
        version: str | None = "1.2.3",
        databases: tuple[str, ...] = ("admin", "app", "Reports"),
        list_error: BaseException | None = None,
        list_delay: float = 0.0,
        validation_error: BaseException | None = None,
    ) -> None:
        self.connect_error = connect_error
        self.connect_delay = connect_delay
        self.version = version
        self.databases = databases
        self.list_error = list_error
        self.list_delay = list_delay
        self.validation_error = validation_error
        self.connect_calls = 0
        self.disconnect_calls = 0
        self.descriptors: list[ConnectionDescriptor] = []
        self.released = threading.Event()
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        return "Fake"

    @property
    def system_databases(self) -> frozenset[str]:
        return frozenset({"admin"})

    def validate_descriptor(self, descriptor: ConnectionDescriptor) -> None:
        if self.validation_error is not None:
            raise self.validation_error

    def connect(self, descriptor: ConnectionDescriptor, *, timeout_ms: int = DEFAULT_TIMEOUT_MS) -> Any:
        with self._lock:
            self.connect_calls += 1
            self.descriptors.append(descriptor)
        if self.connect_delay:
            time.sleep(self.connect_delay)
        if self.connect_error is not None:
            raise self.connect_error
        return MagicMock(name="connection")

    def disconnect(self, conn: Any) -> None:
        with self._lock:
            self.disconnect_calls += 1
        self.released.set()

    def ping(self, conn: Any) -> None:
        conn.ping()

    def get_version(self, conn: Any) -> str | None:
        return self.version

    def get_databases(self, conn: Any) -> list[str]:
        if self.list_delay:
            time.sleep(self.list_delay)
        if self.list_error is not None:
            raise self.list_error
        return list(self.databases)
