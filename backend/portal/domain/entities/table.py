"""Logical entity names and their physical table definitions."""

from dataclasses import dataclass, field
from enum import Enum


class EntityName(str, Enum):
    """Logical entities served by the portal. Values double as URL slugs."""

    CLIENTS = "clients"
    TICKETS = "tickets"
    APPS = "apps"
    FEATURE_REQUESTS = "feature-requests"
    KNOWLEDGE_BASE = "knowledge-base"
    USERS = "users"
    ADMIN_USERS = "admin-users"
    RECENT_UPDATES = "recent-updates"
    POPULAR_TOPICS = "popular-topics"
    INVOICES = "invoices"
    QR_CODES = "qr-codes"

    @property
    def settings_field(self) -> str:
        """Name of the Settings attribute holding this entity's table override."""
        return f"dynamodb_{self.value.replace('-', '_')}_table"


@dataclass(frozen=True)
class TableDefinition:
    """Physical storage table for one entity.

    ``indexes`` maps a secondary index name to its partition attribute.
    Key and index attributes are strings unless listed in ``numeric_attributes``.
    """

    entity: EntityName
    table_name: str
    key_attribute: str = "id"
    indexes: dict[str, str] = field(default_factory=dict)
    numeric_attributes: frozenset[str] = frozenset()

    def attribute_type(self, attribute: str) -> str:
        """DynamoDB scalar type of a key or index attribute: ``"N"`` or ``"S"``."""
        return "N" if attribute in self.numeric_attributes else "S"

    def key_for(self, key_value: str) -> dict[str, str]:
        return {self.key_attribute: key_value}
