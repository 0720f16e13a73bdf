"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

from topology.domain.enums import (
    EntityKind,
    RelationType,
    RelationTypeGroup,
    SearchDirection,
)

if TYPE_CHECKING:
    from topology.application.dtos.entity import (
        EntityDraft,
        EntityResult,
        EntitySearchQuery,
    )
    from topology.application.dtos.paging import PageData
    from topology.application.dtos.relation import RelationResult
    from topology.domain.value_objects import EntityId


# Entity store interface (one implementation per entity kind)
class IEntityRepository(Protocol):
    """Protocol for a generic tagged-entity store (assets or devices)."""

    async def get_by_id(self, tenant_id: str, entity_id: str) -> EntityResult | None:
        """Return entity by ID if it belongs to tenant."""

    async def get_by_ids(
        self, tenant_id: str, entity_ids: Sequence[str]
    ) -> list[EntityResult]:
        """Return entities for the given ids in this tenant, in input order. Unknown ids are skipped."""

    async def create(
        self,
        tenant_id: str,
        draft: EntityDraft,
        customer_id: str | None = None,
    ) -> EntityResult:
        """Create entity from draft; store assigns the identifier."""

    async def update(self, tenant_id: str, draft: EntityDraft) -> EntityResult | None:
        """Update name and type of an existing entity; None if not found in tenant."""

    async def delete(self, tenant_id: str, entity_id: str) -> bool:
        """Delete entity and every relation touching it; False if not found in tenant."""

    async def find_by_type(self, tenant_id: str, entity_type: str) -> list[EntityResult]:
        """Return all entities of entity_type in tenant, oldest first (unpaged)."""

    async def find_by_type_under_parent(
        self,
        tenant_id: str,
        parent: EntityId,
        child_type: str,
        relation_type: RelationType = RelationType.CONTAINS,
        max_level: int = 1,
        direction: SearchDirection = SearchDirection.FROM,
    ) -> list[EntityResult]:
        """Return entities of child_type reachable from parent via relation_type (unpaged)."""

    async def find_page(
        self,
        tenant_id: str,
        customer_id: str | None,
        query: EntitySearchQuery,
    ) -> PageData[EntityResult]:
        """Return one page of entities matching query (type, optional parent, text search, sort)."""


# Relation store interface
class IRelationRepository(Protocol):
    """Protocol for the directed relation store (tenant-scoped)."""

    async def exists(
        self,
        from_id: EntityId,
        to_id: EntityId,
        relation_type: RelationType,
        type_group: RelationTypeGroup = RelationTypeGroup.COMMON,
    ) -> bool:
        """Return True if the edge from_id --relation_type--> to_id exists."""

    async def create(
        self,
        from_id: EntityId,
        to_id: EntityId,
        relation_type: RelationType,
        type_group: RelationTypeGroup = RelationTypeGroup.COMMON,
    ) -> RelationResult:
        """Create the edge; return the existing edge when it is already present."""

    async def query(
        self,
        anchor: EntityId,
        direction: SearchDirection,
        relation_type: RelationType,
        target_kinds: Sequence[EntityKind] | None = None,
        max_level: int = 1,
    ) -> list[RelationResult]:
        """Return edges reachable from anchor within max_level hops, oldest first per hop."""
