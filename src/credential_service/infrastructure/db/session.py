"""Async SQLAlchemy engine, session factory and schema helpers."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from credential_service.infrastructure.db.metadata import metadata


def create_engine(database_url: str) -> AsyncEngine:
    """Create the async engine for the provided database URL."""

    return create_async_engine(database_url)


def create_session_factory(
    database_url: str | None = None,
    *,
    engine: AsyncEngine | None = None,
) -> async_sessionmaker[AsyncSession]:
    """Create a reusable async session factory for a URL or an existing engine."""

    if engine is None:
        if database_url is None:
            raise ValueError("database_url or engine is required")
        engine = create_engine(database_url)
    return async_sessionmaker(engine, expire_on_commit=False)


async def create_schema(engine: AsyncEngine) -> None:
    """Create missing tables; existing tables are left untouched."""

    async with engine.begin() as connection:
        await connection.run_sync(metadata.create_all)
