"""DTOs for generic entity store records (no dependency on ORM)."""

from dataclasses import dataclass

from topology.application.dtos.paging import PageLink
from topology.domain.enums import EntityKind, RelationType, SearchDirection
from topology.domain.value_objects import EntityId


@dataclass(frozen=True)
class EntityResult:
    """Entity read-model (result of get_by_id, create, update, find_*)."""

    id: str
    tenant_id: str
    entity_kind: EntityKind
    entity_type: str
    name: str
    customer_id: str | None = None

    @property
    def entity_id(self) -> EntityId:
        return EntityId(self.entity_kind, self.id)


@dataclass(frozen=True)
class EntityDraft:
    """Entity to create (id is None) or update in place (id is set)."""

    name: str
    entity_type: str
    id: str | None = None

    @property
    def is_new(self) -> bool:
        return self.id is None


@dataclass(frozen=True)
class EntitySearchQuery:
    """Paged, type-filtered entity query, optionally restricted to one parent.

    With a parent, only entities one relation hop away (direction FROM the
    parent) are matched; without one, every entity of the type in the tenant.
    An entity_type of None matches any type.
    """

    entity_type: str | None
    page_link: PageLink
    parent: EntityId | None = None
    relation_type: RelationType = RelationType.CONTAINS
    direction: SearchDirection = SearchDirection.FROM
