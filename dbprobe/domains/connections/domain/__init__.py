"""Connection domain models."""

from dbprobe.domains.connections.domain.descriptor import ConnectionDescriptor
from dbprobe.domains.connections.domain.result import ConnectionCheck, ErrorKind, ProbeResult

__all__ = [
    "ConnectionCheck",
    "ConnectionDescriptor",
    "ErrorKind",
    "ProbeResult",
]
