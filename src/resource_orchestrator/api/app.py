"""
resource_orchestrator.api.app

FastAPI app factory for the Resource Orchestrator service.

Responsibilities:
- Build the FastAPI application and register routers/middleware/error handlers.
- Initialize and dispose shared infrastructure (DB engine, cluster gateway, templates).
- Provide a single composition root where collaborators can be swapped (tests, other backends).
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from resource_orchestrator import __version__
from resource_orchestrator.api.errors import register_error_handlers
from resource_orchestrator.api.routers.dev_auth import router as dev_auth_router
from resource_orchestrator.api.routers.health import router as health_router
from resource_orchestrator.api.routers.resources import router as resources_router
from resource_orchestrator.api.routers.teams import router as teams_router
from resource_orchestrator.cluster.kubernetes import build_gateway
from resource_orchestrator.db.init_db import init_db
from resource_orchestrator.db.session import create_engine, create_sessionmaker
from resource_orchestrator.observability.logging import configure_logging, get_logger
from resource_orchestrator.observability.middleware import RequestContextMiddleware
from resource_orchestrator.resources.contracts import (
    ClusterGateway,
    TemplateRenderer,
    TemplateSource,
)
from resource_orchestrator.settings import Settings, get_settings
from resource_orchestrator.templates.filesystem import FileSystemTemplateSource
from resource_orchestrator.templates.jinja import JinjaTemplateRenderer

log = get_logger(__name__)


def create_app(
    *,
    settings: Settings,
    cluster: ClusterGateway | None = None,
    templates: TemplateSource | None = None,
    renderer: TemplateRenderer | None = None,
) -> FastAPI:
    configure_logging(
        service_name=settings.service_name,
        level=settings.log_level,
        json_logs=settings.log_format == "json",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        engine = create_engine(settings)
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)
        try:
            if settings.env in ("dev", "test"):
                # Dev/test convenience: create tables automatically. Prod should use Alembic migrations.
                await init_db(engine)

            app.state.templates = templates or FileSystemTemplateSource.from_settings(settings)
            app.state.renderer = renderer or JinjaTemplateRenderer()
            # Kube config is only loaded when no gateway is injected (tests pass fakes).
            app.state.cluster = cluster or build_gateway(settings)
            yield
        finally:
            await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="Resource Lifecycle Orchestrator",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    # Every `Depends(get_settings)` resolves to the settings this app was built with.
    app.dependency_overrides[get_settings] = lambda: settings

    app.add_middleware(RequestContextMiddleware)
    register_error_handlers(app)
    app.include_router(health_router, tags=["health"])
    app.include_router(dev_auth_router)
    app.include_router(teams_router)
    app.include_router(resources_router)

    return app


# --- Module Notes -----------------------------------------------------------
# This file is intentionally small: app composition stays here; lifecycle logic stays in
# `services.resource_operations`.
