"""API v1 router aggregation."""

from fastapi import APIRouter

from topology.api.v1.endpoints import health, topology

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(topology.router, prefix="/topology", tags=["topology"])
