"""Presentation-layer dependency injection (composition root).

Routes depend only on these dependencies, never on infrastructure directly.
"""

from topology.api.v1.dependencies.principal import get_principal, get_tenant_id
from topology.api.v1.dependencies.topology import (
    build_hierarchy_service,
    get_hierarchy_service,
    get_hierarchy_service_for_write,
    get_page_link,
)

__all__ = [
    "build_hierarchy_service",
    "get_hierarchy_service",
    "get_hierarchy_service_for_write",
    "get_page_link",
    "get_principal",
    "get_tenant_id",
]
