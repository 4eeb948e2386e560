"""
resource_orchestrator.db.init_db

DB initialization helpers (dev/test convenience).

Responsibilities:
- Create registry tables for local development and tests.
- Keep production migration workflow separate (Alembic).
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine

from resource_orchestrator.db import models  # noqa: F401  # register tables on Base.metadata
from resource_orchestrator.db.base import Base


async def init_db(engine: AsyncEngine) -> None:
    """
    Dev/test bootstrap: create tables if they don't exist.
    """

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# --- Module Notes -----------------------------------------------------------
# Not used for prod; deployments run `alembic upgrade head` instead.
