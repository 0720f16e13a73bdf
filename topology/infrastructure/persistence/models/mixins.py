"""SQLAlchemy mixins shared by the asset, device and relation tables.

Provides: CuidMixin, TenantMixin, TimestampMixin, NamedEntityMixin and the
combined MultiTenantModel.
"""

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, declared_attr, mapped_column
from sqlalchemy.sql import func

from topology.shared.utils.generators import generate_cuid


class CuidMixin:
    """CUID primary key assigned on insert."""

    @declared_attr
    def id(cls) -> Mapped[str]:
        return mapped_column(String, primary_key=True, default=generate_cuid)


class TenantMixin:
    """Owning tenant. Tenants live outside this service, so there is no FK."""

    @declared_attr
    def tenant_id(cls) -> Mapped[str]:
        return mapped_column(String(64), nullable=False, index=True)


class TimestampMixin:
    """created_at and updated_at (server defaults, timezone-aware)."""

    @declared_attr
    def created_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True), server_default=func.now(), nullable=False
        )

    @declared_attr
    def updated_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True),
            server_default=func.now(),
            onupdate=func.now(),
            nullable=False,
        )


class NamedEntityMixin:
    """Name, free-form type tag and optional owning customer of an asset or device."""

    @declared_attr
    def name(cls) -> Mapped[str]:
        return mapped_column(String(255), nullable=False)

    @declared_attr
    def type(cls) -> Mapped[str]:
        return mapped_column(String(100), nullable=False, index=True)

    @declared_attr
    def customer_id(cls) -> Mapped[str | None]:
        return mapped_column(String(64), nullable=True, index=True)


class MultiTenantModel(CuidMixin, TenantMixin, TimestampMixin):
    """CUID + tenant_id + created_at/updated_at."""

    __abstract__ = True
