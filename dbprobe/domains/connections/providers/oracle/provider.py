"""Provider registration."""

from dbprobe.domains.connections.providers.catalog import register_provider
from dbprobe.domains.connections.providers.model import ProviderSpec

SPEC = ProviderSpec(
    db_type="oracle",
    display_name="Oracle",
    adapter_path=("dbprobe.domains.connections.providers.oracle.adapter", "OracleAdapter"),
    description="Oracle Database",
    is_file_based=False,
    default_port="1521",
    requires_auth=True,
    url_schemes=("oracle",),
)

register_provider(SPEC)
