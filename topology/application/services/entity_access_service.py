"""Entity access service: per-entity permission checks (IEntityAccessChecker).

Tenant administrators may read, write and delete any entity of their
tenant. Customer users may read and write only entities assigned to their
customer, and may not delete.
"""

from __future__ import annotations

from collections.abc import Mapping

from topology.application.dtos.entity import EntityResult
from topology.application.dtos.security import Principal
from topology.application.interfaces.repositories import IEntityRepository
from topology.domain.enums import EntityKind, Operation
from topology.domain.exceptions import AuthorizationException, ResourceNotFoundException
from topology.domain.value_objects import EntityId


class EntityAccessService:
    """Loads an entity and checks the principal may perform an operation on it."""

    def __init__(
        self,
        principal: Principal,
        stores: Mapping[EntityKind, IEntityRepository],
    ) -> None:
        self.principal = principal
        self.stores = stores

    async def check(self, entity_id: EntityId, operation: Operation) -> EntityResult:
        """Return the entity if operation is allowed.

        Raises ResourceNotFoundException if the entity is not in the
        principal's tenant, AuthorizationException if access is denied.
        """
        entity = await self.stores[entity_id.kind].get_by_id(
            self.principal.tenant_id, entity_id.id
        )
        if entity is None:
            raise ResourceNotFoundException(entity_id.kind.value, entity_id.id)
        if entity.tenant_id != self.principal.tenant_id:
            raise AuthorizationException(resource=str(entity_id), action=operation.value)
        if self.principal.is_customer_user:
            if operation is Operation.DELETE:
                raise AuthorizationException(resource=str(entity_id), action=operation.value)
            if entity.customer_id != self.principal.customer_id:
                raise AuthorizationException(resource=str(entity_id), action=operation.value)
        return entity
