"""Persistence models: ORM entities and mixins."""

from topology.infrastructure.persistence.models.asset import Asset
from topology.infrastructure.persistence.models.device import Device
from topology.infrastructure.persistence.models.mixins import (
    CuidMixin,
    MultiTenantModel,
    NamedEntityMixin,
    TenantMixin,
    TimestampMixin,
)
from topology.infrastructure.persistence.models.relation import Relation

__all__ = [
    "Asset",
    "CuidMixin",
    "Device",
    "MultiTenantModel",
    "NamedEntityMixin",
    "Relation",
    "TenantMixin",
    "TimestampMixin",
]
