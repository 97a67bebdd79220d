"""Provider registration."""

from dbprobe.domains.connections.providers.catalog import register_provider
from dbprobe.domains.connections.providers.model import ProviderSpec

SPEC = ProviderSpec(
    db_type="postgresql",
    display_name="PostgreSQL",
    adapter_path=("dbprobe.domains.connections.providers.postgresql.adapter", "PostgreSQLAdapter"),
    description="PostgreSQL relational database",
    aliases=("postgres",),
    is_file_based=False,
    default_port="5432",
    requires_auth=True,
    url_schemes=("postgresql", "postgres"),
)

register_provider(SPEC)
