"""Base adapter types."""

from .base import (
    DEFAULT_TIMEOUT_MS,
    CursorBasedAdapter,
    DatabaseAdapter,
    resolve_file_path,
    timeout_seconds,
)

__all__ = [
    "DEFAULT_TIMEOUT_MS",
    "CursorBasedAdapter",
    "DatabaseAdapter",
    "resolve_file_path",
    "timeout_seconds",
]
