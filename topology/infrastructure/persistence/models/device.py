"""Device ORM model. Leaves of the hierarchy, contained by rooms."""

from sqlalchemy import Index

from topology.infrastructure.persistence.database import Base
from topology.infrastructure.persistence.models.mixins import (
    MultiTenantModel,
    NamedEntityMixin,
)


class Device(MultiTenantModel, NamedEntityMixin, Base):
    """Device. Table: device."""

    __tablename__ = "device"

    __table_args__ = (Index("ix_device_tenant_type", "tenant_id", "type"),)
