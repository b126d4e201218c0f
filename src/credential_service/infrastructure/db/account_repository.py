"""SQLAlchemy adapter for account persistence."""

from __future__ import annotations

from datetime import datetime
from typing import cast
from uuid import UUID

import sqlalchemy as sa
from sqlalchemy.engine import RowMapping
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from credential_service.application.ports.account_repository_port import (
    AccountCreateInput,
    AccountNotFoundError,
    AccountRecord,
    AccountRepositoryPort,
    AccountStorageError,
    DuplicateAccountEmailError,
)
from credential_service.infrastructure.db.metadata import accounts


_DUPLICATE_EMAIL_MARKERS = ("uq_accounts_email", "accounts.email")


def _is_duplicate_email_error(error: IntegrityError) -> bool:
    message = str(error.orig).lower()
    return any(marker in message for marker in _DUPLICATE_EMAIL_MARKERS)


def _to_account_record(row: RowMapping) -> AccountRecord:
    raw_account_id = row["id"]
    account_id = (
        raw_account_id if isinstance(raw_account_id, UUID) else UUID(str(raw_account_id))
    )
    return AccountRecord(
        account_id=account_id,
        name=cast(str, row["name"]),
        email=cast(str, row["email"]),
        password_hash=cast(str, row["password_hash"]),
        created_at=cast(datetime, row["created_at"]),
    )


class SqlAlchemyAccountRepository(AccountRepositoryPort):
    """Account repository backed by SQLAlchemy async sessions."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def create_account(self, payload: AccountCreateInput) -> AccountRecord:
        """Insert a new account row and return the persisted record."""

        statement = (
            sa.insert(accounts)
            .values(
                id=payload.account_id,
                name=payload.name,
                email=payload.email,
                password_hash=payload.password_hash,
            )
            .returning(
                accounts.c.id,
                accounts.c.name,
                accounts.c.email,
                accounts.c.password_hash,
                accounts.c.created_at,
            )
        )

        async with self._session_factory() as session:
            try:
                result = await session.execute(statement)
                row = result.mappings().one()
                await session.commit()
            except IntegrityError as error:
                await session.rollback()
                if _is_duplicate_email_error(error):
                    raise DuplicateAccountEmailError("Duplicate account email") from error
                raise AccountStorageError("account insert violated a constraint") from error
            except SQLAlchemyError as error:
                await session.rollback()
                raise AccountStorageError("account insert failed") from error

        return _to_account_record(row)

    async def get_by_email(self, *, email: str) -> AccountRecord:
        """Return account by exact email or raise AccountNotFoundError."""

        statement = sa.select(
            accounts.c.id,
            accounts.c.name,
            accounts.c.email,
            accounts.c.password_hash,
            accounts.c.created_at,
        ).where(accounts.c.email == email).limit(1)

        try:
            async with self._session_factory() as session:
                result = await session.execute(statement)
                row = result.mappings().first()
        except SQLAlchemyError as error:
            raise AccountStorageError("account lookup failed") from error

        if row is None:
            raise AccountNotFoundError(email=email)
        return _to_account_record(row)
