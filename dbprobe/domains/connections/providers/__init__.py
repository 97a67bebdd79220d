"""Database provider interfaces and catalog."""

from dbprobe.domains.connections.providers.adapters.base import DatabaseAdapter
from dbprobe.domains.connections.providers.catalog import (
    canonical_db_type,
    get_adapter_class,
    get_db_type_for_scheme,
    get_provider_spec,
    get_supported_db_types,
    get_url_scheme_map,
    iter_provider_specs,
    register_provider,
    resolve,
)
from dbprobe.domains.connections.providers.driver import DriverDescriptor, import_driver_module
from dbprobe.domains.connections.providers.model import ProviderSpec
from dbprobe.domains.connections.providers.registry import (
    get_default_port,
    get_display_name,
    is_file_based,
    requires_auth,
)

__all__ = [
    "DatabaseAdapter",
    "DriverDescriptor",
    "ProviderSpec",
    "canonical_db_type",
    "get_adapter_class",
    "get_db_type_for_scheme",
    "get_default_port",
    "get_display_name",
    "get_provider_spec",
    "get_supported_db_types",
    "get_url_scheme_map",
    "import_driver_module",
    "is_file_based",
    "iter_provider_specs",
    "register_provider",
    "requires_auth",
    "resolve",
]
