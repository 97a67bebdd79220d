"""Provider metadata helpers.

These never raise for unknown kinds; callers that need to reject unknown
kinds go through :func:`dbprobe.domains.connections.providers.catalog.resolve`.
"""

from __future__ import annotations

from dbprobe.domains.connections.providers.catalog import get_provider_spec
from dbprobe.domains.connections.providers.exceptions import UnsupportedKindError
from dbprobe.domains.connections.providers.model import ProviderSpec


def _find_spec(kind: str) -> ProviderSpec | None:
    try:
        return get_provider_spec(kind)
    except UnsupportedKindError:
        return None


def get_default_port(kind: str) -> str:
    spec = _find_spec(kind)
    return spec.default_port if spec else ""


def get_display_name(kind: str) -> str:
    spec = _find_spec(kind)
    return spec.display_name if spec else kind


def is_file_based(kind: str) -> bool:
    spec = _find_spec(kind)
    return spec.is_file_based if spec else False


def requires_auth(kind: str) -> bool:
    """Check if this database kind requires credentials."""
    spec = _find_spec(kind)
    return spec.requires_auth if spec else True
