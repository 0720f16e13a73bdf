"""Hierarchy operations: get, save, delete, list per level (one service for all levels).

Composes the level projection, the containment chain validator, the
access checker and the entity/relation stores. Every chain of depth two
or more is re-proven on each call; nothing is kept between requests.
"""

from __future__ import annotations

from collections.abc import Sequence

from topology.application.dtos.entity import EntityResult, EntitySearchQuery
from topology.application.dtos.paging import PageData, PageLink
from topology.application.dtos.security import Principal
from topology.application.dtos.topology import LevelView, Territory
from topology.application.interfaces.repositories import (
    IEntityRepository,
    IRelationRepository,
)
from topology.application.interfaces.services import IEntityAccessChecker
from topology.application.services.containment_validator import ContainmentChainValidator
from topology.application.services.entity_access_service import EntityAccessService
from topology.application.services.hierarchy_levels import LevelSpec, level_spec, typed_chain
from topology.application.services.level_projection import LevelProjection
from topology.domain.enums import (
    EntityKind,
    HierarchyLevel,
    Operation,
    RelationType,
    RelationTypeGroup,
    SearchDirection,
)
from topology.domain.exceptions import (
    ResourceNotFoundException,
    TypeMismatchException,
    ValidationException,
)
from topology.domain.value_objects import EntityId
from topology.shared.telemetry.logging import get_logger
from topology.shared.telemetry.tracing import traced

logger = get_logger(__name__)


class HierarchyService:
    """Per-level CRUD and listing over the Territory → Building → Room → Device forest."""

    def __init__(
        self,
        principal: Principal,
        asset_repo: IEntityRepository,
        device_repo: IEntityRepository,
        relation_repo: IRelationRepository,
        access_checker: IEntityAccessChecker | None = None,
        validator: ContainmentChainValidator | None = None,
        projection: LevelProjection | None = None,
    ) -> None:
        self.principal = principal
        self.stores: dict[EntityKind, IEntityRepository] = {
            EntityKind.ASSET: asset_repo,
            EntityKind.DEVICE: device_repo,
        }
        self.relation_repo = relation_repo
        self.access_checker = access_checker or EntityAccessService(principal, self.stores)
        self.validator = validator or ContainmentChainValidator(
            relation_repo, self.access_checker
        )
        self.projection = projection or LevelProjection()

    @property
    def tenant_id(self) -> str:
        return self.principal.tenant_id

    @traced("hierarchy.get")
    async def get(self, level: HierarchyLevel, chain: Sequence[str]) -> LevelView:
        """Return the view of the chain's leaf after proving the chain.

        Raises ResourceNotFoundException, AuthorizationException,
        ContainmentChainBrokenException or ChainCheckFailedException.
        """
        spec = level_spec(level)
        ids = self._chain_for(spec, chain, spec.depth + 1)
        entity = await self._prove(ids)
        self._ensure_type(spec, entity)
        return self.projection.to_view(entity, level)

    @traced("hierarchy.save")
    async def save(
        self,
        level: HierarchyLevel,
        parent_chain: Sequence[str],
        view: LevelView,
    ) -> LevelView:
        """Create the view under the chain's last id, or update it in place when it has an id.

        Creation writes the entity then the parent --Contains--> child edge; if
        the edge cannot be written the new entity is deleted again and the
        edge error is re-raised. An update never moves a node.
        """
        spec = level_spec(level)
        if len(parent_chain) != spec.depth:
            raise ValidationException(
                f"{spec.expected_type} needs {spec.depth} ancestor id(s), got {len(parent_chain)}",
                field="chain",
            )
        draft = self.projection.from_view(view, spec.expected_type)
        store = self.stores[spec.entity_kind]

        if draft.is_new:
            parents = typed_chain(parent_chain) if parent_chain else []
            if len(parents) >= 2:
                await self.validator.validate(parents)
            if parents:
                parent = await self.access_checker.check(parents[-1], Operation.WRITE)
                self._ensure_type(level_spec(spec.parent), parent)
            created = await store.create(
                self.tenant_id, draft, customer_id=self.principal.customer_id
            )
            if parents:
                await self._link(parents[-1], created, store)
            logger.info(
                "Created %s %s under %s",
                spec.expected_type,
                created.id,
                parents[-1] if parents else "tenant root",
            )
            return self.projection.to_view(created, level)

        ids = self._chain_for(spec, [*parent_chain, draft.id], spec.depth + 1)
        existing = await self.access_checker.check(ids[-1], Operation.WRITE)
        self._ensure_type(spec, existing)
        if len(ids) >= 2:
            await self.validator.validate(ids)
        updated = await store.update(self.tenant_id, draft)
        if updated is None:
            raise ResourceNotFoundException(spec.entity_kind.value, ids[-1].id)
        return self.projection.to_view(updated, level)

    @traced("hierarchy.delete")
    async def delete(self, level: HierarchyLevel, chain: Sequence[str]) -> None:
        """Delete the chain's leaf. The store removes the leaf's incident edges."""
        spec = level_spec(level)
        ids = self._chain_for(spec, chain, spec.depth + 1)
        if len(ids) >= 2:
            await self.validator.validate(ids)
        leaf = ids[-1]
        self._ensure_type(spec, await self.access_checker.check(leaf, Operation.DELETE))
        deleted = await self.stores[leaf.kind].delete(self.tenant_id, leaf.id)
        if not deleted:
            raise ResourceNotFoundException(leaf.kind.value, leaf.id)
        logger.info("Deleted %s %s", spec.expected_type, leaf.id)

    @traced("hierarchy.list_children")
    async def list_children(
        self, child_level: HierarchyLevel, parent_chain: Sequence[str]
    ) -> list[LevelView]:
        """Return views of every child_level entity directly contained by the chain's leaf."""
        spec = self._child_spec(child_level)
        parent = await self._prove(self._chain_for(spec, parent_chain, spec.depth))
        self._ensure_type(level_spec(spec.parent), parent)
        if spec.entity_kind is EntityKind.DEVICE:
            entities = await self._devices_under(parent.entity_id)
        else:
            entities = await self.stores[EntityKind.ASSET].find_by_type_under_parent(
                self.tenant_id, parent.entity_id, spec.expected_type
            )
        prototype = spec.view_factory()
        return [self.projection.assign(prototype, e) for e in self._visible(entities)]

    @traced("hierarchy.list_children_page")
    async def list_children_page(
        self,
        child_level: HierarchyLevel,
        parent_chain: Sequence[str],
        page_link: PageLink,
    ) -> PageData[LevelView]:
        """Paged variant of list_children; paging, search and sort run in the entity store."""
        spec = self._child_spec(child_level)
        parent = await self._prove(self._chain_for(spec, parent_chain, spec.depth))
        self._ensure_type(level_spec(spec.parent), parent)
        query = EntitySearchQuery(
            entity_type=self._listed_type(spec),
            page_link=page_link,
            parent=parent.entity_id,
        )
        page = await self.stores[spec.entity_kind].find_page(
            self.tenant_id, self.principal.customer_id, query
        )
        return self.projection.to_page(spec.view_factory(), page)

    async def list_devices(self, room_chain: Sequence[str]) -> list[LevelView]:
        return await self.list_children(HierarchyLevel.DEVICE, room_chain)

    async def list_devices_page(
        self, room_chain: Sequence[str], page_link: PageLink
    ) -> PageData[LevelView]:
        return await self.list_children_page(HierarchyLevel.DEVICE, room_chain, page_link)

    @traced("hierarchy.list_territories")
    async def list_territories(self) -> list[LevelView]:
        """Return every territory of the tenant (customer users: their own only)."""
        entities = await self.stores[EntityKind.ASSET].find_by_type(
            self.tenant_id, HierarchyLevel.TERRITORY.value
        )
        prototype = Territory()
        return [self.projection.assign(prototype, e) for e in self._visible(entities)]

    @traced("hierarchy.list_territories_page")
    async def list_territories_page(self, page_link: PageLink) -> PageData[LevelView]:
        query = EntitySearchQuery(
            entity_type=HierarchyLevel.TERRITORY.value, page_link=page_link
        )
        page = await self.stores[EntityKind.ASSET].find_page(
            self.tenant_id, self.principal.customer_id, query
        )
        return self.projection.to_page(Territory(), page)

    async def _prove(self, ids: list[EntityId]) -> EntityResult:
        """Validate the chain when it has two or more ids; return the readable leaf."""
        if len(ids) >= 2:
            await self.validator.validate(ids)
        return await self.access_checker.check(ids[-1], Operation.READ)

    async def _link(
        self, parent: EntityId, child: EntityResult, store: IEntityRepository
    ) -> None:
        """Write parent --Contains--> child; delete child again if that fails."""
        try:
            await self.relation_repo.create(
                parent, child.entity_id, RelationType.CONTAINS, RelationTypeGroup.COMMON
            )
        except Exception:
            logger.warning(
                "Contains edge %s -> %s not created; removing %s",
                parent,
                child.entity_id,
                child.entity_id,
            )
            try:
                await store.delete(self.tenant_id, child.id)
            except Exception:
                logger.exception("Compensating delete of %s failed", child.entity_id)
            raise

    async def _devices_under(self, room: EntityId) -> list[EntityResult]:
        """Resolve Contains targets of room against the device store, keeping edge order."""
        relations = await self.relation_repo.query(
            room,
            SearchDirection.FROM,
            RelationType.CONTAINS,
            target_kinds=[EntityKind.DEVICE],
            max_level=1,
        )
        device_ids = [r.to_id for r in relations]
        if not device_ids:
            return []
        return await self.stores[EntityKind.DEVICE].get_by_ids(self.tenant_id, device_ids)

    def _visible(self, entities: list[EntityResult]) -> list[EntityResult]:
        """Drop entities a customer user is not assigned to."""
        if not self.principal.is_customer_user:
            return entities
        return [e for e in entities if e.customer_id == self.principal.customer_id]

    @staticmethod
    def _ensure_type(spec: LevelSpec, entity: EntityResult) -> None:
        """Reject an asset whose stored type is not the level's; device types are free-form."""
        if spec.entity_kind is EntityKind.ASSET and entity.entity_type != spec.expected_type:
            raise TypeMismatchException(spec.expected_type, entity.entity_type)

    @staticmethod
    def _child_spec(child_level: HierarchyLevel) -> LevelSpec:
        spec = level_spec(child_level)
        if spec.parent is None:
            raise ValidationException(
                f"{spec.expected_type} has no parent level; use list_territories",
                field="level",
            )
        return spec

    @staticmethod
    def _listed_type(spec: LevelSpec) -> str | None:
        """Type filter for child listings; devices keep their free-form store type."""
        return None if spec.entity_kind is EntityKind.DEVICE else spec.expected_type

    @staticmethod
    def _chain_for(spec: LevelSpec, chain: Sequence[str], expected_len: int) -> list[EntityId]:
        if len(chain) != expected_len:
            raise ValidationException(
                f"Expected {expected_len} id(s) in chain for {spec.expected_type}, got {len(chain)}",
                field="chain",
            )
        return typed_chain(chain)
