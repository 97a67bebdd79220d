"""Bounded execution of blocking driver calls.

Each call gets its own single-worker executor, so concurrent probes share
nothing. When the budget expires the caller gets :class:`ProbeTimeoutError`
right away; the worker is left to finish on its own and, because adapters
acquire handles through ``session()``, it still releases whatever it opened.
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import functools
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from typing import Any, TypeVar

from dbprobe.domains.connections.providers.exceptions import ProbeTimeoutError

T = TypeVar("T")


def _new_executor() -> ThreadPoolExecutor:
    return ThreadPoolExecutor(max_workers=1, thread_name_prefix="dbprobe-")


def run_bounded(fn: Callable[..., T], *args: Any, timeout_ms: int, operation: str = "operation") -> T:
    """Run ``fn(*args)`` on a worker thread and wait at most ``timeout_ms``.

    Raises:
        ProbeTimeoutError: If the budget expires first.
        Exception: Whatever ``fn`` raised, unchanged.
    """
    executor = _new_executor()
    future = executor.submit(fn, *args)
    try:
        return future.result(timeout=timeout_ms / 1000)
    except concurrent.futures.TimeoutError:
        if future.done():
            # fn raised a TimeoutError of its own
            raise
        future.cancel()
        raise ProbeTimeoutError(operation, timeout_ms) from None
    finally:
        executor.shutdown(wait=False, cancel_futures=True)


async def run_bounded_async(fn: Callable[..., T], *args: Any, timeout_ms: int, operation: str = "operation") -> T:
    """Async counterpart of :func:`run_bounded`."""
    loop = asyncio.get_running_loop()
    executor = _new_executor()
    inner = loop.run_in_executor(executor, functools.partial(fn, *args))
    try:
        return await asyncio.wait_for(inner, timeout=timeout_ms / 1000)
    except asyncio.TimeoutError:
        if inner.done() and not inner.cancelled():
            raise
        raise ProbeTimeoutError(operation, timeout_ms) from None
    finally:
        executor.shutdown(wait=False, cancel_futures=True)
