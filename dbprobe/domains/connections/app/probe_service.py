"""Probe orchestration: validate, dispatch, connect, list, assemble."""

from __future__ import annotations

import time
from collections.abc import Callable, Mapping
from dataclasses import replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from dbprobe.domains.connections.app.normalizer import normalize_error
from dbprobe.domains.connections.app.timeouts import run_bounded, run_bounded_async
from dbprobe.domains.connections.domain.descriptor import ConnectionDescriptor
from dbprobe.domains.connections.domain.result import ConnectionCheck, ErrorKind, ProbeResult
from dbprobe.domains.connections.providers.adapters.base import DatabaseAdapter
from dbprobe.domains.connections.providers.catalog import canonical_db_type, iter_provider_specs, resolve
from dbprobe.domains.connections.providers.exceptions import (
    InvalidPortError,
    MissingParametersError,
    ProbeError,
)
from dbprobe.domains.connections.providers.registry import get_display_name, is_file_based, requires_auth
from dbprobe.domains.shell.store.settings import ProbeSettings, load_probe_settings
from dbprobe.shared.core.logging import get_logger

logger = get_logger(__name__)

MIN_PORT = 1
MAX_PORT = 65535


class ProbeState(str, Enum):
    VALIDATING = "validating"
    DISPATCHING = "dispatching"
    CONNECTING = "connecting"
    LISTING_DATABASES = "listing_databases"
    DONE = "done"


def validate_descriptor(descriptor: ConnectionDescriptor) -> None:
    """Check required fields and the port range. Performs no I/O.

    Raises:
        MissingParametersError: If a field required for the kind is empty.
        InvalidPortError: If the port is not an integer in 1-65535.
    """
    if is_file_based(descriptor.kind):
        return

    missing = []
    if not descriptor.host.strip():
        missing.append("host")
    if descriptor.port is None or str(descriptor.port).strip() == "":
        missing.append("port")
    if requires_auth(descriptor.kind):
        if not descriptor.username:
            missing.append("username")
        if not descriptor.password:
            missing.append("password")
    if missing:
        raise MissingParametersError(missing)

    if isinstance(descriptor.port, bool):
        raise InvalidPortError(descriptor.port)
    try:
        port = descriptor.port_number
    except (TypeError, ValueError):
        raise InvalidPortError(descriptor.port) from None
    if not MIN_PORT <= port <= MAX_PORT:
        raise InvalidPortError(descriptor.port)


def _connection_info(descriptor: ConnectionDescriptor) -> dict[str, Any]:
    connected_at = datetime.now(timezone.utc).isoformat()
    if is_file_based(descriptor.kind):
        return {"type": descriptor.kind, "database": descriptor.database, "connectedAt": connected_at}
    return {
        "type": descriptor.kind,
        "host": descriptor.host,
        "port": descriptor.port_number,
        "username": descriptor.username,
        "connectedAt": connected_at,
    }


def _failure_from_check(check: ConnectionCheck, display_name: str) -> ProbeResult:
    if check.error is not None:
        normalized = normalize_error(check.error, display_name)
        return ProbeResult.failure(normalized.kind, normalized.message, normalized.native_code or check.native_code)
    message = check.message or f"{display_name} connection failed"
    return ProbeResult.failure(ErrorKind.CONNECTION_FAILED, message, check.native_code)


class ProbeService:
    """Runs probes against the catalog of database adapters.

    The service holds no per-probe state, so one instance can serve any
    number of concurrent probes.
    """

    def __init__(
        self,
        settings: ProbeSettings | None = None,
        resolver: Callable[[str], DatabaseAdapter] = resolve,
    ) -> None:
        self._settings = settings
        self._resolver = resolver

    @property
    def settings(self) -> ProbeSettings:
        if self._settings is None:
            self._settings = load_probe_settings()
        return self._settings

    def _enter(self, state: ProbeState, descriptor: ConnectionDescriptor) -> None:
        logger.debug("Probe state %s", state.value, extra={"kind": descriptor.kind, "state": state.value})

    def _coerce(self, descriptor: ConnectionDescriptor | Mapping[str, Any]) -> ConnectionDescriptor:
        if isinstance(descriptor, ConnectionDescriptor):
            return descriptor
        return ConnectionDescriptor.from_dict(descriptor)

    def _prepare(self, raw: ConnectionDescriptor | Mapping[str, Any]) -> tuple[ConnectionDescriptor, DatabaseAdapter]:
        """Validating and dispatching; raises :class:`ProbeError` on rejection."""
        descriptor = self._coerce(raw)
        self._enter(ProbeState.VALIDATING, descriptor)
        if not descriptor.kind.strip():
            descriptor = replace(descriptor, kind=self.settings.default_kind)
        validate_descriptor(descriptor)

        self._enter(ProbeState.DISPATCHING, descriptor)
        adapter = self._resolver(descriptor.kind)
        canonical = canonical_db_type(descriptor.kind) or descriptor.kind
        if canonical != descriptor.kind:
            descriptor = replace(descriptor, kind=canonical)
        adapter.validate_descriptor(descriptor)
        return descriptor, adapter

    def _finish(
        self,
        descriptor: ConnectionDescriptor,
        check: ConnectionCheck,
        databases: list[str],
    ) -> ProbeResult:
        self._enter(ProbeState.DONE, descriptor)
        return ProbeResult.ok(
            check.message or f"{get_display_name(descriptor.kind)} connection succeeded",
            version=check.version,
            databases=databases,
            connection_info=_connection_info(descriptor),
        )

    def _log_outcome(self, descriptor: ConnectionDescriptor | None, result: ProbeResult, started: float) -> None:
        elapsed_ms = int((time.monotonic() - started) * 1000)
        kind = descriptor.kind if descriptor is not None else None
        if result.success:
            logger.info(
                "Probe succeeded",
                extra={"kind": kind, "status": "ok", "elapsed_ms": elapsed_ms, "databases": len(result.databases or [])},
            )
        else:
            logger.info(
                "Probe failed: %s",
                result.message,
                extra={"kind": kind, "status": "failed", "error_kind": result.error_kind.value, "elapsed_ms": elapsed_ms},
            )

    def _list_failed(self, descriptor: ConnectionDescriptor, exc: BaseException) -> list[str]:
        logger.warning(
            "Listing databases failed, returning an empty list: %s",
            exc,
            extra={"kind": descriptor.kind, "status": "list_failed"},
        )
        return []

    def probe(self, raw: ConnectionDescriptor | Mapping[str, Any]) -> ProbeResult:
        """Probe one database server and return a :class:`ProbeResult`.

        Never raises: every failure, including unexpected ones, is returned
        as a failed result.
        """
        started = time.monotonic()
        descriptor: ConnectionDescriptor | None = None
        try:
            descriptor, adapter = self._prepare(raw)
            display_name = get_display_name(descriptor.kind)
            logger.info("Probing %s", display_name, extra=descriptor.redacted())
            settings = self.settings

            self._enter(ProbeState.CONNECTING, descriptor)
            check = run_bounded(
                adapter.test_connection,
                descriptor,
                settings.connect_timeout_ms,
                timeout_ms=settings.connect_timeout_ms,
                operation=f"{display_name} connection",
            )
            if not check.reachable:
                result = _failure_from_check(check, display_name)
            else:
                self._enter(ProbeState.LISTING_DATABASES, descriptor)
                try:
                    databases = run_bounded(
                        adapter.list_databases,
                        descriptor,
                        settings.list_timeout_ms,
                        timeout_ms=settings.list_timeout_ms,
                        operation=f"{display_name} database listing",
                    )
                except Exception as exc:
                    databases = self._list_failed(descriptor, exc)
                result = self._finish(descriptor, check, databases)
        except Exception as exc:
            result = self._failure(exc, descriptor)
        self._log_outcome(descriptor, result, started)
        return result

    async def probe_async(self, raw: ConnectionDescriptor | Mapping[str, Any]) -> ProbeResult:
        """Async counterpart of :meth:`probe` for event-loop callers."""
        started = time.monotonic()
        descriptor: ConnectionDescriptor | None = None
        try:
            descriptor, adapter = self._prepare(raw)
            display_name = get_display_name(descriptor.kind)
            logger.info("Probing %s", display_name, extra=descriptor.redacted())
            settings = self.settings

            self._enter(ProbeState.CONNECTING, descriptor)
            check = await run_bounded_async(
                adapter.test_connection,
                descriptor,
                settings.connect_timeout_ms,
                timeout_ms=settings.connect_timeout_ms,
                operation=f"{display_name} connection",
            )
            if not check.reachable:
                result = _failure_from_check(check, display_name)
            else:
                self._enter(ProbeState.LISTING_DATABASES, descriptor)
                try:
                    databases = await run_bounded_async(
                        adapter.list_databases,
                        descriptor,
                        settings.list_timeout_ms,
                        timeout_ms=settings.list_timeout_ms,
                        operation=f"{display_name} database listing",
                    )
                except Exception as exc:
                    databases = self._list_failed(descriptor, exc)
                result = self._finish(descriptor, check, databases)
        except Exception as exc:
            result = self._failure(exc, descriptor)
        self._log_outcome(descriptor, result, started)
        return result

    def _failure(self, exc: Exception, descriptor: ConnectionDescriptor | None) -> ProbeResult:
        if not isinstance(exc, ProbeError):
            logger.exception("Unexpected error while probing", extra={"kind": descriptor.kind if descriptor else None})
        display_name = get_display_name(descriptor.kind) if descriptor and descriptor.kind else None
        normalized = normalize_error(exc, display_name)
        return ProbeResult.failure(normalized.kind, normalized.message, normalized.native_code)


def probe(descriptor: ConnectionDescriptor | Mapping[str, Any], settings: ProbeSettings | None = None) -> ProbeResult:
    """Probe ``descriptor`` with a default :class:`ProbeService`."""
    return ProbeService(settings=settings).probe(descriptor)


async def probe_async(
    descriptor: ConnectionDescriptor | Mapping[str, Any], settings: ProbeSettings | None = None
) -> ProbeResult:
    return await ProbeService(settings=settings).probe_async(descriptor)


def list_supported_kinds() -> list[dict[str, Any]]:
    """Static table of supported kinds; performs no I/O."""
    return [
        {
            "kind": spec.db_type,
            "displayName": spec.display_name,
            "defaultPort": spec.default_port_number,
            "description": spec.description,
        }
        for spec in iter_provider_specs()
    ]
