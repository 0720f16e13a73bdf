"""Relation ORM model. Directed, typed edge between two entities of any kind."""

from sqlalchemy import Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from topology.infrastructure.persistence.database import Base
from topology.infrastructure.persistence.models.mixins import MultiTenantModel


class Relation(MultiTenantModel, Base):
    """Edge from_id --relation_type--> to_id. Table: relation.

    Endpoints may be assets or devices, so they carry a kind column instead
    of a foreign key; repositories delete incident edges with the entity.
    Unique (tenant_id, from_id, to_id, relation_type, type_group).
    """

    __tablename__ = "relation"

    from_id: Mapped[str] = mapped_column(String, nullable=False)
    from_kind: Mapped[str] = mapped_column(String(16), nullable=False)
    to_id: Mapped[str] = mapped_column(String, nullable=False)
    to_kind: Mapped[str] = mapped_column(String(16), nullable=False)
    relation_type: Mapped[str] = mapped_column(String(100), nullable=False)
    type_group: Mapped[str] = mapped_column(String(32), nullable=False)

    __table_args__ = (
        UniqueConstraint(
            "tenant_id",
            "from_id",
            "to_id",
            "relation_type",
            "type_group",
            name="uq_relation_tenant_from_to_type_group",
        ),
        Index("ix_relation_from_type", "from_id", "relation_type"),
        Index("ix_relation_to_type", "to_id", "relation_type"),
    )
