"""Provider registration."""

from dbprobe.domains.connections.providers.catalog import register_provider
from dbprobe.domains.connections.providers.model import ProviderSpec

SPEC = ProviderSpec(
    db_type="mssql",
    display_name="SQL Server",
    adapter_path=("dbprobe.domains.connections.providers.mssql.adapter", "SQLServerAdapter"),
    description="Microsoft SQL Server",
    aliases=("sqlserver",),
    is_file_based=False,
    default_port="1433",
    requires_auth=True,
    url_schemes=("mssql", "sqlserver"),
)

register_provider(SPEC)
