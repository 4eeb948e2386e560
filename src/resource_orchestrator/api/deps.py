"""
resource_orchestrator.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide request-scoped DB sessions.
- Assemble `ResourceOperations` from the collaborators stored on app.state.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from resource_orchestrator.auth.gate import TeamAuthorizationGate
from resource_orchestrator.services.resource_operations import ResourceOperations
from resource_orchestrator.settings import Settings, get_settings


def sessionmaker_from_app(request: Request) -> async_sessionmaker[AsyncSession]:
    # The sessionmaker is created on app startup in `resource_orchestrator.api.app.create_app`.
    return request.app.state.sessionmaker  # type: ignore[attr-defined]


async def db_session(
    session_factory: async_sessionmaker[AsyncSession] = Depends(sessionmaker_from_app),
) -> AsyncIterator[AsyncSession]:
    # Request-scoped DB session. Commit/rollback is managed explicitly by the routers.
    async with session_factory() as session:
        yield session


def resource_operations(
    request: Request,
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(get_settings),
) -> ResourceOperations:
    state = request.app.state
    return ResourceOperations(
        templates=state.templates,
        renderer=state.renderer,
        cluster=state.cluster,
        gate=TeamAuthorizationGate(session=session, owners=state.cluster),
        timeout=settings.operation_timeout_seconds,
        rollback_on_failure=settings.rollback_on_failure,
    )


# --- Module Notes -----------------------------------------------------------
# Only the gate is per-request (it reads the team registry through the request session);
# the other collaborators are process-wide and shared.
