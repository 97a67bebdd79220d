"""Provider registration."""

from dbprobe.domains.connections.providers.catalog import register_provider
from dbprobe.domains.connections.providers.model import ProviderSpec

SPEC = ProviderSpec(
    db_type="mongodb",
    display_name="MongoDB",
    adapter_path=("dbprobe.domains.connections.providers.mongodb.adapter", "MongoDBAdapter"),
    description="MongoDB document database",
    aliases=("mongo",),
    is_file_based=False,
    default_port="27017",
    requires_auth=False,
    url_schemes=("mongodb", "mongo"),
)

register_provider(SPEC)
