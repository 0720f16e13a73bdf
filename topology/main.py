"""FastAPI application entry point.

Wiring only: logging, lifespan, exception handlers, middleware, routers.
Settings are loaded inside create_app() so tests can set env (and clear
the get_settings cache) before building an app.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from topology.api.v1 import api_router
from topology.core.config import get_settings
from topology.core.exception_handlers import register_exception_handlers
from topology.core.lifespan import create_lifespan
from topology.middleware import RequestIDMiddleware
from topology.shared.telemetry.logging import setup_logging


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    settings = get_settings()
    setup_logging()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    register_exception_handlers(app)

    # First added = innermost.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)

    app.include_router(api_router, prefix="/api/v1")
    return app


app = create_app()
