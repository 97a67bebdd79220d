"""Provider catalog, discovery and kind dispatch."""

from __future__ import annotations

import pkgutil
from functools import lru_cache
from importlib import import_module
from typing import TYPE_CHECKING

from dbprobe.domains.connections.providers.exceptions import UnsupportedKindError
from dbprobe.domains.connections.providers.model import ProviderSpec

if TYPE_CHECKING:
    from dbprobe.domains.connections.providers.adapters.base import DatabaseAdapter

_PROVIDERS: dict[str, ProviderSpec] = {}
_DISCOVERED = False


def register_provider(spec: ProviderSpec) -> None:
    """Register a provider specification."""
    _PROVIDERS[spec.db_type] = spec
    _get_alias_map.cache_clear()
    get_url_scheme_map.cache_clear()


def _discover_providers() -> None:
    """Discover provider packages and import their registrations."""
    global _DISCOVERED
    if _DISCOVERED:
        return

    if __package__ is None:
        return
    package = import_module(__package__)
    for module_info in pkgutil.iter_modules(package.__path__):
        name = module_info.name
        if not module_info.ispkg:
            continue
        if name in {"adapters", "__pycache__"}:
            continue
        import_module(f"{__package__}.{name}.provider")

    _DISCOVERED = True


def _ensure_discovered() -> None:
    _discover_providers()


def get_supported_db_types() -> list[str]:
    _ensure_discovered()
    return list(_PROVIDERS.keys())


def iter_provider_specs() -> list[ProviderSpec]:
    _ensure_discovered()
    return list(_PROVIDERS.values())


@lru_cache(maxsize=1)
def _get_alias_map() -> dict[str, str]:
    mapping: dict[str, str] = {}
    for spec in _PROVIDERS.values():
        mapping[spec.db_type.lower()] = spec.db_type
        for alias in spec.aliases:
            mapping[alias.lower()] = spec.db_type
    return mapping


def canonical_db_type(kind: str | None) -> str | None:
    """Map a kind or alias (any case) to its canonical db_type, or None."""
    if not kind:
        return None
    _ensure_discovered()
    return _get_alias_map().get(kind.strip().lower())


def get_provider_spec(kind: str) -> ProviderSpec:
    _ensure_discovered()
    db_type = canonical_db_type(kind)
    if db_type is None:
        raise UnsupportedKindError(kind, sorted(_PROVIDERS))
    return _PROVIDERS[db_type]


@lru_cache(maxsize=None)
def _load_adapter_class(module_name: str, class_name: str) -> type[DatabaseAdapter]:
    module = import_module(module_name)
    adapter_class = getattr(module, class_name, None)
    if not isinstance(adapter_class, type):
        raise ImportError(f"Adapter class '{class_name}' not found in {module_name}")
    return adapter_class


def get_adapter_class(kind: str) -> type[DatabaseAdapter]:
    spec = get_provider_spec(kind)
    return _load_adapter_class(*spec.adapter_path)


def resolve(kind: str) -> DatabaseAdapter:
    """Return a fresh adapter for ``kind``.

    Raises:
        UnsupportedKindError: If the kind (after alias normalization) is unknown.
    """
    return get_adapter_class(kind)()


@lru_cache(maxsize=1)
def get_url_scheme_map() -> dict[str, str]:
    _ensure_discovered()
    mapping: dict[str, str] = {}
    for spec in _PROVIDERS.values():
        for scheme in spec.url_schemes:
            mapping[scheme.lower()] = spec.db_type
    return mapping


def get_db_type_for_scheme(scheme: str) -> str | None:
    return get_url_scheme_map().get(scheme.lower())
