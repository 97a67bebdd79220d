"""Provider registration."""

from dbprobe.domains.connections.providers.catalog import register_provider
from dbprobe.domains.connections.providers.model import ProviderSpec

SPEC = ProviderSpec(
    db_type="sqlite",
    display_name="SQLite",
    adapter_path=("dbprobe.domains.connections.providers.sqlite.adapter", "SQLiteAdapter"),
    description="SQLite file database",
    is_file_based=True,
    default_port="",
    requires_auth=False,
    url_schemes=("sqlite",),
)

register_provider(SPEC)
