"""Service interfaces (ports) for the application layer.

Protocols for services used by use cases; implementations live in
application/services.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from topology.domain.enums import Operation

if TYPE_CHECKING:
    from topology.application.dtos.entity import EntityResult
    from topology.domain.value_objects import EntityId


class IEntityAccessChecker(Protocol):
    """Protocol for per-entity permission checks."""

    async def check(self, entity_id: EntityId, operation: Operation) -> EntityResult:
        """Return the entity if the caller may perform operation on it.

        Raises ResourceNotFoundException when the entity does not exist and
        AuthorizationException when access is denied.
        """
