"""Application layer: interfaces, services, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the entity, relation and access-check ports.
"""

from topology.application.interfaces import (
    IEntityAccessChecker,
    IEntityRepository,
    IRelationRepository,
)
from topology.application.use_cases import HierarchyService

__all__ = [
    "HierarchyService",
    "IEntityAccessChecker",
    "IEntityRepository",
    "IRelationRepository",
]
