"""Alembic environment for the accounts schema.

Accepts the sync URLs used by tests and tooling (``sqlite+pysqlite``) as well
as the async runtime URLs (``sqlite+aiosqlite``, ``postgresql+asyncpg``).
"""

from __future__ import annotations

import asyncio
import os
from logging.config import fileConfig
from pathlib import Path

from dotenv import load_dotenv
from sqlalchemy import create_engine, pool
from sqlalchemy.engine import Connection, make_url
from sqlalchemy.ext.asyncio import create_async_engine

from alembic import context
from credential_service.infrastructure.db.metadata import metadata

config = context.config

_DEFAULT_ALEMBIC_URL = "sqlite:///./users.db"

# An explicit URL set by the caller wins over DATABASE_URL/DATABASE_DSN from .env.
load_dotenv(Path(__file__).resolve().parents[1] / ".env")
if config.get_main_option("sqlalchemy.url") == _DEFAULT_ALEMBIC_URL:
    env_url = os.getenv("DATABASE_URL") or os.getenv("DATABASE_DSN")
    if env_url:
        config.set_main_option("sqlalchemy.url", env_url)

if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)


def _migrate(connection: Connection) -> None:
    context.configure(connection=connection, target_metadata=metadata)
    with context.begin_transaction():
        context.run_migrations()


async def _migrate_async(url: str) -> None:
    engine = create_async_engine(url, poolclass=pool.NullPool)
    async with engine.connect() as connection:
        await connection.run_sync(_migrate)
    await engine.dispose()


def run_migrations() -> None:
    """Run migrations, offline as SQL or online through a sync or async driver."""

    url = config.get_main_option("sqlalchemy.url") or _DEFAULT_ALEMBIC_URL
    if context.is_offline_mode():
        context.configure(url=url, target_metadata=metadata, literal_binds=True)
        with context.begin_transaction():
            context.run_migrations()
        return

    if make_url(url).get_dialect().is_async:
        asyncio.run(_migrate_async(url))
        return

    engine = create_engine(url, poolclass=pool.NullPool)
    with engine.connect() as connection:
        _migrate(connection)


run_migrations()
