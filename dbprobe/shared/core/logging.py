"""
Logging helpers for dbprobe.

Modules obtain loggers through :func:`get_logger`; the command line entry
point calls :func:`configure_logging` once to install a stderr handler.
Structured fields passed via ``extra=`` (``kind``, ``state``, ``status``,
``elapsed_ms`` ...) are appended to each line as ``key=value`` pairs.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from copy import copy
from logging import Logger, LoggerAdapter
from typing import Any, Iterable, Mapping, MutableMapping, Optional, Sequence

DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_LEVEL = "WARNING"
ENV_LEVEL = "DBPROBE_LOG_LEVEL"
_ENV_COLOR = "DBPROBE_LOG_COLOR"
_EXTRA_FOCUS_ORDER: Sequence[str] = (
    "kind",
    "state",
    "status",
    "error_kind",
    "elapsed_ms",
    "host",
    "port",
)

_LEVEL_STYLES = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[95m",
}
_RESET = "\033[0m"

_RESERVED_ATTRS = set(logging.LogRecord("", 0, "", 0, "", (), None).__dict__) | {"message", "asctime"}

_configured = False


def resolve_level(level: Optional[int | str]) -> int:
    if isinstance(level, int):
        return level
    candidate = (level or os.getenv(ENV_LEVEL) or DEFAULT_LEVEL).strip().upper()
    resolved = logging.getLevelName(candidate)
    return resolved if isinstance(resolved, int) else logging.WARNING


def _coerce_bool(value: str) -> Optional[bool]:
    lowered = value.strip().lower()
    if lowered in {"1", "true", "yes", "on"}:
        return True
    if lowered in {"0", "false", "no", "off"}:
        return False
    return None


def _supports_color(stream: Any) -> bool:
    preference = os.getenv(_ENV_COLOR)
    if preference:
        resolved = _coerce_bool(preference)
        if resolved is not None:
            return resolved
    return hasattr(stream, "isatty") and bool(stream.isatty())


def _iter_extras(record: logging.LogRecord) -> Iterable[tuple[str, Any]]:
    payload = {
        key: value
        for key, value in record.__dict__.items()
        if key not in _RESERVED_ATTRS and not key.startswith("_") and value is not None
    }

    for key in _EXTRA_FOCUS_ORDER:
        if key in payload:
            yield key, payload.pop(key)

    for key in sorted(payload):
        yield key, payload[key]


def _format_extra_value(value: Any) -> str:
    if isinstance(value, (list, tuple, set)):
        return "[" + ", ".join(_format_extra_value(item) for item in value) + "]"
    if isinstance(value, Mapping):
        try:
            return json.dumps(value, ensure_ascii=False, default=str)
        except TypeError:
            return repr(dict(value))
    if isinstance(value, float):
        return f"{value:.4g}"
    return str(value)


class StructuredLogFormatter(logging.Formatter):
    """Formatter that appends structured extras and supports optional colour output."""

    def __init__(self, *, use_color: bool = False) -> None:
        super().__init__(DEFAULT_FORMAT, datefmt=DEFAULT_DATE_FORMAT)
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        working = copy(record)
        if self.use_color:
            working.levelname = self._colourise_level(working.levelname)
        base = super().format(working)
        extras = " ".join(f"{key}={_format_extra_value(value)}" for key, value in _iter_extras(record))
        if extras:
            return f"{base} | {extras}"
        return base

    @staticmethod
    def _colourise_level(levelname: str) -> str:
        style = _LEVEL_STYLES.get(levelname.strip().upper())
        if not style:
            return levelname
        return f"{style}{levelname}{_RESET}"


def _build_handler(level: Optional[int | str]) -> logging.Handler:
    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setLevel(resolve_level(level))
    handler.setFormatter(StructuredLogFormatter(use_color=_supports_color(handler.stream)))
    return handler


def configure_logging(level: Optional[int | str] = None, *, force: bool = False) -> None:
    """
    Install the stderr handler on the ``dbprobe`` logger unless already done.

    Parameters
    ----------
    level:
        Optional level override. Falls back to ``DBPROBE_LOG_LEVEL`` or ``WARNING``.
    force:
        When ``True`` existing handlers are replaced.
    """

    global _configured
    root = logging.getLogger("dbprobe")
    if _configured and not force:
        return
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.addHandler(_build_handler(level))
    root.setLevel(resolve_level(level))
    _configured = True


def _merge_extra(
    *,
    tags: Optional[Sequence[str]],
    extra: Optional[Mapping[str, object]],
) -> MutableMapping[str, object]:
    payload: MutableMapping[str, object] = {}
    if tags:
        payload["tags"] = tuple(tags)
    if extra:
        payload.update({key: value for key, value in extra.items() if value is not None})
    return payload


class _MergingAdapter(LoggerAdapter):
    """LoggerAdapter that merges call-site ``extra`` with the bound fields."""

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, MutableMapping[str, Any]]:
        bound = dict(self.extra) if isinstance(self.extra, Mapping) else {}
        call_extra = kwargs.get("extra") or {}
        kwargs["extra"] = {**bound, **call_extra}
        return msg, kwargs


def get_logger(
    name: str,
    *,
    tags: Optional[Sequence[str]] = None,
    extra: Optional[Mapping[str, object]] = None,
) -> LoggerAdapter:
    """
    Return a :class:`logging.LoggerAdapter` for ``name``.

    Parameters
    ----------
    name:
        Logger namespace, typically ``__name__``.
    tags:
        Optional observability tags attached to every entry.
    extra:
        Additional structured metadata recorded with each log entry.
    """

    base: Logger = logging.getLogger(name)
    return _MergingAdapter(base, _merge_extra(tags=tags, extra=extra))
