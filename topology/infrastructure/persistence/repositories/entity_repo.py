"""Generic entity repository (IEntityRepository) shared by the asset and device stores."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from topology.application.dtos.entity import EntityDraft, EntityResult, EntitySearchQuery
from topology.application.dtos.paging import PageData, PageLink
from topology.domain.enums import (
    EntityKind,
    RelationType,
    SearchDirection,
    SortOrder,
)
from topology.domain.exceptions import ValidationException
from topology.domain.value_objects import EntityId
from topology.infrastructure.persistence.models.asset import Asset
from topology.infrastructure.persistence.models.device import Device
from topology.infrastructure.persistence.models.relation import Relation
from topology.infrastructure.persistence.repositories.base import (
    TenantScopedRepository,
    guarded,
)
from topology.infrastructure.persistence.repositories.relation_repo import (
    delete_incident_relations,
    walk_relations,
)

ModelType = TypeVar("ModelType", Asset, Device)


def _escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class EntityRepository(TenantScopedRepository[ModelType]):
    """Tenant-scoped store for one entity kind. Subclasses fix model and kind."""

    kind: EntityKind

    def __init__(self, db: AsyncSession, model: type[ModelType], tenant_id: str) -> None:
        super().__init__(db, model, tenant_id)
        self.store_name = self.kind.value

    def _to_result(self, row: ModelType) -> EntityResult:
        return EntityResult(
            id=row.id,
            tenant_id=row.tenant_id,
            entity_kind=self.kind,
            entity_type=row.type,
            name=row.name,
            customer_id=row.customer_id,
        )

    async def _load(self, entity_id: str) -> ModelType | None:
        model: Any = self.model
        result = await self.db.execute(
            select(self.model).where(model.id == entity_id, model.tenant_id == self._tenant_id)
        )
        return result.scalar_one_or_none()

    @guarded
    async def get_by_id(self, tenant_id: str, entity_id: str) -> EntityResult | None:
        """Return entity by ID if it belongs to tenant."""
        if not self._owns(tenant_id):
            return None
        row = await self._load(entity_id)
        return self._to_result(row) if row else None

    @guarded
    async def get_by_ids(
        self, tenant_id: str, entity_ids: Sequence[str]
    ) -> list[EntityResult]:
        """Return entities in input order; ids not in this tenant are skipped."""
        if not self._owns(tenant_id) or not entity_ids:
            return []
        model: Any = self.model
        result = await self.db.execute(
            select(self.model).where(
                model.id.in_(list(entity_ids)), model.tenant_id == self._tenant_id
            )
        )
        by_id = {row.id: row for row in result.scalars().all()}
        return [self._to_result(by_id[i]) for i in dict.fromkeys(entity_ids) if i in by_id]

    @guarded
    async def create(
        self,
        tenant_id: str,
        draft: EntityDraft,
        customer_id: str | None = None,
    ) -> EntityResult:
        """Create entity from draft; the id is generated here."""
        if not self._owns(tenant_id):
            raise ValidationException(
                f"Cannot create {self.kind.value} for another tenant", field="tenant_id"
            )
        row = self.model(
            tenant_id=self._tenant_id,
            name=draft.name,
            type=draft.entity_type,
            customer_id=customer_id,
        )
        created = await super().create(row)
        return self._to_result(created)

    @guarded
    async def update(self, tenant_id: str, draft: EntityDraft) -> EntityResult | None:
        """Update name and type; None if the entity is not in tenant."""
        if not self._owns(tenant_id) or draft.id is None:
            return None
        row = await self._load(draft.id)
        if row is None:
            return None
        row.name = draft.name
        row.type = draft.entity_type
        await self.db.flush()
        await self.db.refresh(row)
        return self._to_result(row)

    @guarded
    async def delete(self, tenant_id: str, entity_id: str) -> bool:
        """Delete entity and its incident relations; False if not found."""
        if not self._owns(tenant_id):
            return False
        row = await self._load(entity_id)
        if row is None:
            return False
        await delete_incident_relations(
            self.db, self._tenant_id, EntityId(self.kind, entity_id)
        )
        await super().delete(row)
        return True

    @guarded
    async def find_by_type(self, tenant_id: str, entity_type: str) -> list[EntityResult]:
        """Return all entities of entity_type in tenant, oldest first."""
        if not self._owns(tenant_id):
            return []
        model: Any = self.model
        result = await self.db.execute(
            select(self.model)
            .where(model.tenant_id == self._tenant_id, model.type == entity_type)
            .order_by(model.created_at, model.id)
        )
        return [self._to_result(row) for row in result.scalars().all()]

    @guarded
    async def find_by_type_under_parent(
        self,
        tenant_id: str,
        parent: EntityId,
        child_type: str,
        relation_type: RelationType = RelationType.CONTAINS,
        max_level: int = 1,
        direction: SearchDirection = SearchDirection.FROM,
    ) -> list[EntityResult]:
        """Return child_type entities reachable from parent, in edge order."""
        if not self._owns(tenant_id):
            return []
        edges = await walk_relations(
            self.db, self._tenant_id, parent, direction, relation_type, max_level
        )
        ids = [
            e.to_id if direction is SearchDirection.FROM else e.from_id
            for e in edges
            if (e.to_kind if direction is SearchDirection.FROM else e.from_kind)
            == self.kind.value
        ]
        return [e for e in await self.get_by_ids(tenant_id, ids) if e.entity_type == child_type]

    @guarded
    async def find_page(
        self,
        tenant_id: str,
        customer_id: str | None,
        query: EntitySearchQuery,
    ) -> PageData[EntityResult]:
        """Return one page of entities matching query.

        Filters: type (when set), customer (when set), one relation hop from
        query.parent (when set), and a case-insensitive substring match of
        page_link.text_search on name.
        """
        page_link = query.page_link
        if not self._owns(tenant_id):
            return PageData.of([], 0, page_link)
        stmt = self._search(customer_id, query)
        total = await self.db.scalar(select(func.count()).select_from(stmt.subquery()))
        result = await self.db.execute(
            self._ordered(stmt, page_link).offset(page_link.offset).limit(page_link.page_size)
        )
        rows = [self._to_result(row) for row in result.scalars().all()]
        return PageData.of(rows, total or 0, page_link)

    def _search(self, customer_id: str | None, query: EntitySearchQuery) -> Select:
        model: Any = self.model
        stmt = select(self.model).where(model.tenant_id == self._tenant_id)
        if query.entity_type is not None:
            stmt = stmt.where(model.type == query.entity_type)
        if customer_id is not None:
            stmt = stmt.where(model.customer_id == customer_id)
        if query.parent is not None:
            stmt = stmt.where(model.id.in_(self._children_of(query)))
        text = (query.page_link.text_search or "").strip()
        if text:
            stmt = stmt.where(model.name.ilike(f"%{_escape_like(text)}%", escape="\\"))
        return stmt

    def _children_of(self, query: EntitySearchQuery) -> Select:
        parent = query.parent
        if query.direction is SearchDirection.FROM:
            near_id, near_kind, far_id, far_kind = (
                Relation.from_id, Relation.from_kind, Relation.to_id, Relation.to_kind
            )
        else:
            near_id, near_kind, far_id, far_kind = (
                Relation.to_id, Relation.to_kind, Relation.from_id, Relation.from_kind
            )
        return select(far_id).where(
            Relation.tenant_id == self._tenant_id,
            Relation.relation_type == query.relation_type.value,
            near_id == parent.id,
            near_kind == parent.kind.value,
            far_kind == self.kind.value,
        )

    def _ordered(self, stmt: Select, page_link: PageLink) -> Select:
        model: Any = self.model
        column = getattr(model, page_link.sort_property or "created_at")
        primary = column.desc() if page_link.sort_order is SortOrder.DESC else column.asc()
        return stmt.order_by(primary, model.id)


class AssetRepository(EntityRepository[Asset]):
    """Asset store (territories, buildings, rooms)."""

    kind = EntityKind.ASSET

    def __init__(self, db: AsyncSession, tenant_id: str) -> None:
        super().__init__(db, Asset, tenant_id)


class DeviceRepository(EntityRepository[Device]):
    """Device store."""

    kind = EntityKind.DEVICE

    def __init__(self, db: AsyncSession, tenant_id: str) -> None:
        super().__init__(db, Device, tenant_id)
