"""DTOs for relation store edges (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime

from topology.domain.enums import EntityKind, RelationTypeGroup
from topology.domain.value_objects import EntityId


@dataclass(frozen=True)
class RelationResult:
    """Directed relation edge read-model (result of create, query)."""

    id: str
    tenant_id: str
    from_id: str
    from_kind: EntityKind
    to_id: str
    to_kind: EntityKind
    relation_type: str
    type_group: RelationTypeGroup
    created_at: datetime | None = None

    @property
    def source(self) -> EntityId:
        return EntityId(self.from_kind, self.from_id)

    @property
    def target(self) -> EntityId:
        return EntityId(self.to_kind, self.to_id)
