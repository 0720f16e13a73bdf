"""Application services: projection, chain validation, access checks."""

from topology.application.services.containment_validator import ContainmentChainValidator
from topology.application.services.entity_access_service import EntityAccessService
from topology.application.services.hierarchy_levels import LEVELS, LevelSpec, level_spec
from topology.application.services.level_projection import LevelProjection

__all__ = [
    "LEVELS",
    "ContainmentChainValidator",
    "EntityAccessService",
    "LevelProjection",
    "LevelSpec",
    "level_spec",
]
