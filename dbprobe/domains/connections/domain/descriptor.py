"""Connection descriptor supplied by the caller of a probe."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping

# Wire keys accepted in place of the canonical field names.
_KEY_ALIASES = {
    "type": "kind",
    "db_type": "kind",
    "server": "host",
    "user": "username",
    "file_path": "database",
}


@dataclass
class ConnectionDescriptor:
    """Connection parameters for one probe.

    ``port`` is kept as received (int or str) so that validation can
    report an invalid value instead of failing during construction.
    """

    kind: str = ""
    host: str = ""
    port: Any = None
    username: str = ""
    password: str = ""
    database: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ConnectionDescriptor:
        """Create a descriptor from a request payload, with alias key support."""
        payload: dict[str, Any] = {}
        for key, value in data.items():
            target = _KEY_ALIASES.get(key, key)
            if target in payload and key != target:
                continue
            payload[target] = value

        known = {f.name for f in fields(cls)}
        values = {key: value for key, value in payload.items() if key in known}
        for name in ("kind", "host", "username", "password", "database"):
            value = values.get(name)
            values[name] = "" if value is None else str(value)
        return cls(**values)

    @property
    def port_number(self) -> int:
        """The port as an integer; only meaningful after validation."""
        return int(str(self.port).strip())

    def redacted(self) -> dict[str, Any]:
        """Fields safe to log."""
        return {
            "kind": self.kind,
            "host": self.host,
            "port": self.port,
            "username": self.username,
            "database": self.database,
        }
