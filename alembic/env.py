"""
alembic.env

Alembic migration environment for the team registry.

Notes:
- This module is executed by Alembic, not imported by the FastAPI runtime.
- The runtime uses the aiosqlite driver; migrations run on the stdlib sqlite driver, see
  `resource_orchestrator.db.session.sync_database_url`.
"""

from __future__ import annotations

import os
from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

from resource_orchestrator.db import models  # noqa: F401  # ensure models are registered on Base.metadata
from resource_orchestrator.db.base import Base
from resource_orchestrator.db.session import sync_database_url
from resource_orchestrator.settings import Settings

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _get_database_url() -> str:
    url = os.environ.get("RESOURCE_ORCHESTRATOR_DATABASE_URL") or Settings().database_url
    return sync_database_url(url)


def run_migrations_offline() -> None:
    context.configure(
        url=_get_database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    configuration = config.get_section(config.config_ini_section) or {}
    configuration["sqlalchemy.url"] = _get_database_url()
    connectable = engine_from_config(configuration, prefix="sqlalchemy.", poolclass=pool.NullPool)

    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
