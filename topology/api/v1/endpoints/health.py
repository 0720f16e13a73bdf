"""Health check endpoints for liveness and readiness probes."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from topology.domain.exceptions import SqlNotConfiguredException, StoreUnavailableException
from topology.infrastructure.persistence.database import check_connection
from topology.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Database not reachable", "model": ReadinessErrorResponse}},
)
async def readiness_check() -> ReadinessResponse | JSONResponse:
    """Return 200 when the database answers, 503 otherwise."""
    try:
        await check_connection()
    except (SqlNotConfiguredException, StoreUnavailableException) as e:
        return JSONResponse(
            status_code=503,
            content=ReadinessErrorResponse(message=e.message).model_dump(),
        )
    return ReadinessResponse()
