"""Relation repository (IRelationRepository). Tenant-scoped directed edges."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import delete, or_, select, tuple_
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from topology.application.dtos.relation import RelationResult
from topology.domain.enums import (
    EntityKind,
    RelationType,
    RelationTypeGroup,
    SearchDirection,
)
from topology.domain.exceptions import ResourceNotFoundException, ValidationException
from topology.domain.value_objects import EntityId
from topology.infrastructure.persistence.models.asset import Asset
from topology.infrastructure.persistence.models.device import Device
from topology.infrastructure.persistence.models.relation import Relation
from topology.infrastructure.persistence.repositories.base import (
    TenantScopedRepository,
    guarded,
)
from topology.shared.utils.datetime import ensure_utc

_MODELS_BY_KIND: dict[EntityKind, type[Asset] | type[Device]] = {
    EntityKind.ASSET: Asset,
    EntityKind.DEVICE: Device,
}


def _to_result(r: Relation) -> RelationResult:
    """Map ORM to RelationResult."""
    return RelationResult(
        id=r.id,
        tenant_id=r.tenant_id,
        from_id=r.from_id,
        from_kind=EntityKind(r.from_kind),
        to_id=r.to_id,
        to_kind=EntityKind(r.to_kind),
        relation_type=r.relation_type,
        type_group=RelationTypeGroup(r.type_group),
        created_at=ensure_utc(r.created_at),
    )


def _type_value(relation_type: RelationType | str) -> str:
    return relation_type.value if isinstance(relation_type, RelationType) else relation_type


def _far_end(r: Relation, direction: SearchDirection) -> tuple[str, str]:
    if direction is SearchDirection.FROM:
        return r.to_id, r.to_kind
    return r.from_id, r.from_kind


async def walk_relations(
    db: AsyncSession,
    tenant_id: str,
    anchor: EntityId,
    direction: SearchDirection,
    relation_type: RelationType | str,
    max_level: int = 1,
) -> list[Relation]:
    """Breadth-first walk of relation_type edges from anchor, up to max_level hops.

    Edges are returned hop by hop, oldest first within a hop. Each entity is
    expanded once, so cycles terminate.
    """
    if max_level < 1:
        raise ValidationException("max_level must be at least 1", field="max_level")
    near_id, near_kind = (
        (Relation.from_id, Relation.from_kind)
        if direction is SearchDirection.FROM
        else (Relation.to_id, Relation.to_kind)
    )
    frontier = [(anchor.id, anchor.kind.value)]
    seen = set(frontier)
    edges: list[Relation] = []
    for _ in range(max_level):
        result = await db.execute(
            select(Relation)
            .where(
                Relation.tenant_id == tenant_id,
                Relation.relation_type == _type_value(relation_type),
                tuple_(near_id, near_kind).in_(frontier),
            )
            .order_by(Relation.created_at, Relation.id)
        )
        hop = list(result.scalars().all())
        edges.extend(hop)
        frontier = []
        for edge in hop:
            end = _far_end(edge, direction)
            if end not in seen:
                seen.add(end)
                frontier.append(end)
        if not frontier:
            break
    return edges


async def delete_incident_relations(db: AsyncSession, tenant_id: str, entity: EntityId) -> int:
    """Delete every edge that starts or ends at entity; return the number removed."""
    result = await db.execute(
        delete(Relation).where(
            Relation.tenant_id == tenant_id,
            or_(
                (Relation.from_id == entity.id) & (Relation.from_kind == entity.kind.value),
                (Relation.to_id == entity.id) & (Relation.to_kind == entity.kind.value),
            ),
        )
    )
    return result.rowcount or 0


class RelationRepository(TenantScopedRepository[Relation]):
    """Relation repository. All access scoped to a single tenant."""

    store_name = "relation"

    def __init__(self, db: AsyncSession, tenant_id: str) -> None:
        super().__init__(db, Relation, tenant_id)

    def _edge(
        self,
        from_id: EntityId,
        to_id: EntityId,
        relation_type: RelationType | str,
        type_group: RelationTypeGroup,
    ):
        return (
            Relation.tenant_id == self._tenant_id,
            Relation.from_id == from_id.id,
            Relation.from_kind == from_id.kind.value,
            Relation.to_id == to_id.id,
            Relation.to_kind == to_id.kind.value,
            Relation.relation_type == _type_value(relation_type),
            Relation.type_group == type_group.value,
        )

    @guarded
    async def exists(
        self,
        from_id: EntityId,
        to_id: EntityId,
        relation_type: RelationType,
        type_group: RelationTypeGroup = RelationTypeGroup.COMMON,
    ) -> bool:
        """Return True if the edge from_id --relation_type--> to_id exists."""
        result = await self.db.execute(
            select(Relation.id).where(*self._edge(from_id, to_id, relation_type, type_group)).limit(1)
        )
        return result.scalar_one_or_none() is not None

    @guarded
    async def create(
        self,
        from_id: EntityId,
        to_id: EntityId,
        relation_type: RelationType,
        type_group: RelationTypeGroup = RelationTypeGroup.COMMON,
    ) -> RelationResult:
        """Create the edge, or return it unchanged if it already exists.

        Both endpoints must exist in the tenant (ResourceNotFoundException).
        Concurrent creators race on the unique constraint, not on a read.
        """
        if from_id == to_id:
            raise ValidationException("An entity cannot relate to itself", field="to_id")
        for endpoint in (from_id, to_id):
            await self._ensure_endpoint(endpoint)
        await self.db.execute(
            pg_insert(Relation)
            .values(
                tenant_id=self._tenant_id,
                from_id=from_id.id,
                from_kind=from_id.kind.value,
                to_id=to_id.id,
                to_kind=to_id.kind.value,
                relation_type=_type_value(relation_type),
                type_group=type_group.value,
            )
            .on_conflict_do_nothing(constraint="uq_relation_tenant_from_to_type_group")
        )
        result = await self.db.execute(
            select(Relation).where(*self._edge(from_id, to_id, relation_type, type_group))
        )
        return _to_result(result.scalar_one())

    @guarded
    async def query(
        self,
        anchor: EntityId,
        direction: SearchDirection,
        relation_type: RelationType,
        target_kinds: Sequence[EntityKind] | None = None,
        max_level: int = 1,
    ) -> list[RelationResult]:
        """Return edges reachable from anchor within max_level hops, oldest first per hop."""
        edges = await walk_relations(
            self.db, self._tenant_id, anchor, direction, relation_type, max_level
        )
        if target_kinds is not None:
            kinds = {k.value for k in target_kinds}
            edges = [e for e in edges if _far_end(e, direction)[1] in kinds]
        return [_to_result(e) for e in edges]

    async def _ensure_endpoint(self, entity: EntityId) -> None:
        model = _MODELS_BY_KIND[entity.kind]
        result = await self.db.execute(
            select(model.id).where(model.id == entity.id, model.tenant_id == self._tenant_id)
        )
        if result.scalar_one_or_none() is None:
            raise ResourceNotFoundException(entity.kind.value, entity.id)
