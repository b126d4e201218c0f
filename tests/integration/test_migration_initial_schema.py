from __future__ import annotations

from pathlib import Path

import pytest
import sqlalchemy as sa
from alembic.config import Config

from alembic import command
from credential_service.infrastructure.db.session import create_engine, create_schema


def _alembic_config(sync_url: str) -> Config:
    alembic_config = Config("alembic.ini")
    alembic_config.set_main_option("sqlalchemy.url", sync_url)
    return alembic_config


def test_upgrade_creates_accounts_table_with_unique_email(tmp_path: Path) -> None:
    sync_url = f"sqlite+pysqlite:///{tmp_path / 'migration.db'}"

    command.upgrade(_alembic_config(sync_url), "head")

    inspector = sa.inspect(sa.create_engine(sync_url))
    assert "accounts" in inspector.get_table_names()
    columns = {column["name"] for column in inspector.get_columns("accounts")}
    assert columns == {"id", "name", "email", "password_hash", "created_at"}
    unique_constraints = inspector.get_unique_constraints("accounts")
    assert any(constraint["column_names"] == ["email"] for constraint in unique_constraints)


def test_downgrade_drops_accounts_table(tmp_path: Path) -> None:
    sync_url = f"sqlite+pysqlite:///{tmp_path / 'migration_down.db'}"
    alembic_config = _alembic_config(sync_url)

    command.upgrade(alembic_config, "head")
    command.downgrade(alembic_config, "base")

    inspector = sa.inspect(sa.create_engine(sync_url))
    assert "accounts" not in inspector.get_table_names()


@pytest.mark.asyncio
async def test_startup_schema_creation_is_idempotent(tmp_path: Path) -> None:
    db_path = tmp_path / "auto_create.db"
    engine = create_engine(f"sqlite+aiosqlite:///{db_path}")

    await create_schema(engine)
    await create_schema(engine)
    await engine.dispose()

    inspector = sa.inspect(sa.create_engine(f"sqlite+pysqlite:///{db_path}"))
    assert "accounts" in inspector.get_table_names()
