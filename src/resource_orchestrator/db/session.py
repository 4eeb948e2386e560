"""
resource_orchestrator.db.session

Engine and session factory for the team registry.

Responsibilities:
- Build the async engine the API uses for membership lookups and team management.
- Build the per-request sessionmaker.
- Derive the sync URL Alembic migrates with.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from resource_orchestrator.settings import Settings

ASYNC_DRIVER_SUFFIX = "+aiosqlite"


def create_engine(settings: Settings) -> AsyncEngine:
    # Membership is checked on every create/delete; drop dead connections before use.
    return create_async_engine(
        settings.database_url,
        pool_pre_ping=True,
    )


def create_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # Team rows are returned from handlers after commit.
    return async_sessionmaker(
        bind=engine,
        expire_on_commit=False,
        autoflush=False,
    )


def sync_database_url(url: str) -> str:
    """
    `sqlite+aiosqlite:///./resources.db` -> `sqlite:///./resources.db`.

    Only the aiosqlite driver is shipped; other URLs are returned unchanged.
    """

    return url.replace(ASYNC_DRIVER_SUFFIX, "", 1)


# --- Module Notes -----------------------------------------------------------
# Handlers get one session per request from `api.deps.db_session`; the authorization gate
# shares it, so a denied create never opens a second connection.
