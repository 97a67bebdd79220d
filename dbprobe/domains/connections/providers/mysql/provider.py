"""Provider registration."""

from dbprobe.domains.connections.providers.catalog import register_provider
from dbprobe.domains.connections.providers.model import ProviderSpec

SPEC = ProviderSpec(
    db_type="mysql",
    display_name="MySQL",
    adapter_path=("dbprobe.domains.connections.providers.mysql.adapter", "MySQLAdapter"),
    description="MySQL relational database",
    is_file_based=False,
    default_port="3306",
    requires_auth=True,
    url_schemes=("mysql",),
)

register_provider(SPEC)
