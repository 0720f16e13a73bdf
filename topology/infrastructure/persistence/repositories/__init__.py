"""SQL implementations of the entity and relation stores."""

from topology.infrastructure.persistence.repositories.base import (
    BaseRepository,
    TenantScopedRepository,
    store_errors,
)
from topology.infrastructure.persistence.repositories.entity_repo import (
    AssetRepository,
    DeviceRepository,
    EntityRepository,
)
from topology.infrastructure.persistence.repositories.relation_repo import (
    RelationRepository,
)

__all__ = [
    "AssetRepository",
    "BaseRepository",
    "DeviceRepository",
    "EntityRepository",
    "RelationRepository",
    "TenantScopedRepository",
    "store_errors",
]
