"""API request/response schemas (pydantic)."""

from topology.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)
from topology.schemas.topology import (
    DeviceSaveRequest,
    LevelResponse,
    LevelSaveRequest,
    PageResponse,
)

__all__ = [
    "DeviceSaveRequest",
    "HealthResponse",
    "LevelResponse",
    "LevelSaveRequest",
    "PageResponse",
    "ReadinessErrorResponse",
    "ReadinessResponse",
]
