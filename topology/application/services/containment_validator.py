"""Containment chain validator.

Proves that an ordered, root-first list of entity ids is an unbroken path
of Contains edges. Pairs are checked strictly in chain order so the first
missing link reported is deterministic. Nothing is cached between calls.
"""

from __future__ import annotations

from collections.abc import Sequence

from topology.application.interfaces.repositories import IRelationRepository
from topology.application.interfaces.services import IEntityAccessChecker
from topology.domain.enums import Operation, RelationType, RelationTypeGroup
from topology.domain.exceptions import (
    ChainCheckFailedException,
    ContainmentChainBrokenException,
    ResourceNotFoundException,
    StoreUnavailableException,
    ValidationException,
)
from topology.domain.value_objects import EntityId
from topology.shared.telemetry.logging import get_logger
from topology.shared.telemetry.tracing import add_span_attributes

logger = get_logger(__name__)

# Faults that leave an edge unprovable rather than proven absent.
_STORE_FAULTS = (StoreUnavailableException, TimeoutError, ConnectionError)


class ContainmentChainValidator:
    """Validates root-to-node containment chains against the relation store."""

    def __init__(
        self,
        relation_repo: IRelationRepository,
        access_checker: IEntityAccessChecker,
        relation_type: RelationType = RelationType.CONTAINS,
        type_group: RelationTypeGroup = RelationTypeGroup.COMMON,
    ) -> None:
        self.relation_repo = relation_repo
        self.access_checker = access_checker
        self.relation_type = relation_type
        self.type_group = type_group

    async def validate(self, chain: Sequence[EntityId]) -> None:
        """Return if every consecutive pair is linked by a direct edge.

        Raises:
            ValidationException: chain has fewer than two ids.
            AuthorizationException: an endpoint may not be read.
            ContainmentChainBrokenException: first pair without an edge,
                including a pair whose endpoint no longer exists.
            ChainCheckFailedException: the entity or relation store failed mid-check.
        """
        if len(chain) < 2:
            raise ValidationException(
                "Containment chain needs at least two ids", field="chain"
            )
        add_span_attributes(chain_length=len(chain))
        for from_id, to_id in zip(chain, chain[1:]):
            try:
                await self.access_checker.check(from_id, Operation.READ)
                await self.access_checker.check(to_id, Operation.READ)
            except ResourceNotFoundException as e:
                # A vanished endpoint takes its edges with it.
                logger.info("Broken containment chain: %s or %s is gone", from_id, to_id)
                raise ContainmentChainBrokenException(from_id.id, to_id.id) from e
            except _STORE_FAULTS as e:
                raise ChainCheckFailedException(from_id.id, to_id.id, str(e)) from e
            try:
                exists = await self.relation_repo.exists(
                    from_id, to_id, self.relation_type, self.type_group
                )
            except _STORE_FAULTS as e:
                raise ChainCheckFailedException(from_id.id, to_id.id, str(e)) from e
            if not exists:
                logger.info("Broken containment chain: %s -/-> %s", from_id, to_id)
                raise ContainmentChainBrokenException(from_id.id, to_id.id)
