"""Maps logical entity names to physical storage tables."""

from collections.abc import Iterable, Iterator

from portal.config import Settings
from portal.domain.entities import EntityName, TableDefinition
from portal.domain.exceptions import ValidationError

# Secondary indexes: index name -> partition attribute
_INDEXES: dict[EntityName, dict[str, str]] = {
    EntityName.CLIENTS: {"EmailIndex": "email"},
    EntityName.TICKETS: {"ClientIndex": "clientId", "TicketNumberIndex": "ticketNumber"},
    EntityName.FEATURE_REQUESTS: {"AppIndex": "appId", "ClientIndex": "clientId"},
    EntityName.KNOWLEDGE_BASE: {"CategoryIndex": "category"},
    EntityName.USERS: {"EmailIndex": "email"},
    EntityName.RECENT_UPDATES: {"TypeIndex": "type"},
    EntityName.POPULAR_TOPICS: {"OrderIndex": "order"},
    EntityName.INVOICES: {"ClientIndex": "clientId"},
    EntityName.QR_CODES: {"ClientIndex": "clientId"},
}

_KEY_ATTRIBUTES: dict[EntityName, str] = {
    EntityName.QR_CODES: "code",
}

# Index attributes stored as numbers; every other key attribute is a string
_NUMERIC_ATTRIBUTES: dict[EntityName, frozenset[str]] = {
    EntityName.POPULAR_TOPICS: frozenset({"order"}),
}


def _compact(name: str) -> str:
    return name.replace("-", "").replace("_", "").lower()


class TableRegistry:
    """Resolves entity names, URL slugs and physical table names to definitions."""

    def __init__(self, definitions: Iterable[TableDefinition]):
        self._by_entity: dict[EntityName, TableDefinition] = {}
        self._by_name: dict[str, TableDefinition] = {}
        for definition in definitions:
            self._by_entity[definition.entity] = definition
            self._by_name[definition.table_name] = definition
            # Compact logical names, e.g. "FeatureRequests"
            self._by_name.setdefault(_compact(definition.entity.name), definition)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TableRegistry":
        return cls(
            TableDefinition(
                entity=entity,
                table_name=getattr(settings, entity.settings_field),
                key_attribute=_KEY_ATTRIBUTES.get(entity, "id"),
                indexes=dict(_INDEXES.get(entity, {})),
                numeric_attributes=_NUMERIC_ATTRIBUTES.get(entity, frozenset()),
            )
            for entity in EntityName
        )

    def resolve(self, name: "EntityName | str | TableDefinition") -> TableDefinition:
        if isinstance(name, TableDefinition):
            return name
        if isinstance(name, EntityName):
            return self._by_entity[name]
        try:
            return self._by_entity[EntityName(name)]
        except ValueError:
            pass
        definition = self._by_name.get(name) or self._by_name.get(_compact(name))
        if definition is None:
            raise ValidationError.single("table", f"Unknown table '{name}'")
        return definition

    def index_attribute(self, name: "EntityName | str | TableDefinition", index: str) -> str:
        """Partition attribute of ``index`` on the given table."""
        definition = self.resolve(name)
        try:
            return definition.indexes[index]
        except KeyError:
            raise ValidationError.single(
                "index", f"Table '{definition.table_name}' has no index '{index}'"
            ) from None

    def __iter__(self) -> Iterator[TableDefinition]:
        return iter(self._by_entity.values())

    def __len__(self) -> int:
        return len(self._by_entity)
