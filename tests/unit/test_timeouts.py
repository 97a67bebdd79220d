"""Unit tests for bounded driver calls."""

from __future__ import annotations

import threading
import time

import pytest

from dbprobe.domains.connections.app.timeouts import run_bounded, run_bounded_async
from dbprobe.domains.connections.providers.exceptions import ProbeTimeoutError


def _slow(seconds: float, value: str = "done") -> str:
    time.sleep(seconds)
    return value


def _raise_timeout() -> None:
    raise TimeoutError("socket timed out")


class TestRunBounded:
    def test_returns_value(self):
        assert run_bounded(_slow, 0, "ok", timeout_ms=1000) == "ok"

    def test_propagates_errors_unchanged(self):
        with pytest.raises(ValueError, match="bad"):
            run_bounded(int, "bad", timeout_ms=1000)

    def test_budget_expiry(self):
        started = time.monotonic()

        with pytest.raises(ProbeTimeoutError) as exc_info:
            run_bounded(_slow, 2, timeout_ms=100, operation="MySQL connection")

        assert time.monotonic() - started < 1
        assert exc_info.value.timeout_ms == 100
        assert str(exc_info.value) == "MySQL connection timed out after 100 ms"

    def test_own_timeout_is_not_rewritten(self):
        with pytest.raises(TimeoutError) as exc_info:
            run_bounded(_raise_timeout, timeout_ms=1000)

        assert not isinstance(exc_info.value, ProbeTimeoutError)

    def test_worker_finishes_after_expiry(self):
        finished = threading.Event()

        def work():
            time.sleep(0.3)
            finished.set()

        with pytest.raises(ProbeTimeoutError):
            run_bounded(work, timeout_ms=50)

        assert finished.wait(timeout=5)


class TestRunBoundedAsync:
    @pytest.mark.asyncio
    async def test_returns_value(self):
        assert await run_bounded_async(_slow, 0, "ok", timeout_ms=1000) == "ok"

    @pytest.mark.asyncio
    async def test_budget_expiry(self):
        started = time.monotonic()

        with pytest.raises(ProbeTimeoutError):
            await run_bounded_async(_slow, 2, timeout_ms=100)

        assert time.monotonic() - started < 1

    @pytest.mark.asyncio
    async def test_own_timeout_is_not_rewritten(self):
        with pytest.raises(TimeoutError) as exc_info:
            await run_bounded_async(_raise_timeout, timeout_ms=1000)

        assert not isinstance(exc_info.value, ProbeTimeoutError)
