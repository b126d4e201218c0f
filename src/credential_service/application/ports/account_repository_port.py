"""Port for account persistence used by the credential service."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import UUID


class DuplicateAccountEmailError(ValueError):
    """Raised when an account with the same email already exists."""


class AccountNotFoundError(LookupError):
    """Raised when no account matches the requested email."""

    def __init__(self, *, email: str) -> None:
        super().__init__("account not found")
        self.email = email


class AccountStorageError(RuntimeError):
    """Raised for lower-level persistence failures."""


@dataclass(frozen=True)
class AccountCreateInput:
    """Insert payload for one account row."""

    account_id: UUID
    name: str
    email: str
    password_hash: str


@dataclass(frozen=True)
class AccountRecord:
    """Account persistence model."""

    account_id: UUID
    name: str
    email: str
    password_hash: str
    created_at: datetime


class AccountRepositoryPort(Protocol):
    """Account repository contract."""

    async def create_account(self, payload: AccountCreateInput) -> AccountRecord:
        """Create an account row or raise DuplicateAccountEmailError."""

    async def get_by_email(self, *, email: str) -> AccountRecord:
        """Return account by exact email or raise AccountNotFoundError."""
