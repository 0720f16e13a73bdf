"""Asset ORM model. Territories, buildings and rooms are assets tagged by type."""

from sqlalchemy import Index

from topology.infrastructure.persistence.database import Base
from topology.infrastructure.persistence.models.mixins import (
    MultiTenantModel,
    NamedEntityMixin,
)


class Asset(MultiTenantModel, NamedEntityMixin, Base):
    """Asset. Table: asset."""

    __tablename__ = "asset"

    __table_args__ = (Index("ix_asset_tenant_type", "tenant_id", "type"),)
