"""Hierarchy service and paging dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from topology.api.v1.dependencies.principal import get_principal
from topology.application.dtos.paging import PageLink
from topology.application.dtos.security import Principal
from topology.application.use_cases.topology import HierarchyService
from topology.core.config import get_settings
from topology.domain.enums import SortOrder
from topology.domain.exceptions import ValidationException
from topology.infrastructure.persistence.database import get_db, get_db_transactional
from topology.infrastructure.persistence.repositories import (
    AssetRepository,
    DeviceRepository,
    RelationRepository,
)


def build_hierarchy_service(db: AsyncSession, principal: Principal) -> HierarchyService:
    """Wire the SQL stores for one tenant into a HierarchyService."""
    return HierarchyService(
        principal=principal,
        asset_repo=AssetRepository(db, principal.tenant_id),
        device_repo=DeviceRepository(db, principal.tenant_id),
        relation_repo=RelationRepository(db, principal.tenant_id),
    )


async def get_hierarchy_service(
    principal: Annotated[Principal, Depends(get_principal)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> HierarchyService:
    """HierarchyService for read operations."""
    return build_hierarchy_service(db, principal)


async def get_hierarchy_service_for_write(
    principal: Annotated[Principal, Depends(get_principal)],
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> HierarchyService:
    """HierarchyService for saves and deletes; entity and edge share one transaction."""
    return build_hierarchy_service(db, principal)


def get_page_link(
    page_size: Annotated[int | None, Query(ge=1, description="Omit for an unpaged list")] = None,
    page: Annotated[int, Query(ge=0)] = 0,
    text_search: Annotated[str | None, Query(max_length=255)] = None,
    sort_property: Annotated[str | None, Query(description="name, type or created_at")] = None,
    sort_order: SortOrder = SortOrder.ASC,
) -> PageLink | None:
    """Return a PageLink when any paging parameter is given, otherwise None (unpaged listing).

    page, text_search or sort_property without page_size use DEFAULT_PAGE_SIZE.
    """
    settings = get_settings()
    if page_size is None:
        if not (page or text_search or sort_property):
            return None
        page_size = settings.default_page_size
    max_page_size = settings.max_page_size
    if page_size > max_page_size:
        raise ValidationException(
            f"page_size must not exceed {max_page_size}", field="page_size"
        )
    return PageLink(
        page_size=page_size,
        page=page,
        text_search=text_search,
        sort_property=sort_property,
        sort_order=sort_order,
    )
