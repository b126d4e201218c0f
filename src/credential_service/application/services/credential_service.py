"""Application service for account registration and login verification."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import StrEnum
from uuid import uuid4

from credential_service.application.ports.account_repository_port import (
    AccountCreateInput,
    AccountNotFoundError,
    AccountRepositoryPort,
    AccountStorageError,
    DuplicateAccountEmailError,
)
from credential_service.application.ports.password_hasher_port import (
    PasswordHasherPort,
    PasswordHashingError,
)
from credential_service.domain.auth.credentials import any_missing

logger = logging.getLogger(__name__)

REGISTER_SUCCESS_MESSAGE = "User registered successfully"
LOGIN_SUCCESS_MESSAGE = "Login successful"
REGISTER_MISSING_FIELDS_MESSAGE = "Name, email, and password are required"
LOGIN_MISSING_FIELDS_MESSAGE = "Email and password are required"
DUPLICATE_EMAIL_MESSAGE = "Email is already registered"
HASH_FAILED_MESSAGE = "Failed to hash password"
SAVE_FAILED_MESSAGE = "Failed to save user to database"
INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"
VERIFY_FAILED_MESSAGE = "Failed to verify credentials"

# Hashed once per service so unknown-email logins still pay for one bcrypt check.
_DECOY_PASSWORD = "decoy-password-for-unknown-accounts"


class CredentialOutcome(StrEnum):
    """Supported registration and login outcomes."""

    SUCCESS = "success"
    VALIDATION_ERROR = "validation_error"
    CONFLICT = "conflict"
    UNAUTHORIZED = "unauthorized"
    INTERNAL_ERROR = "internal_error"


@dataclass(frozen=True)
class CredentialResult:
    """Outcome plus caller-safe message for one credential operation."""

    outcome: CredentialOutcome
    message: str

    @property
    def ok(self) -> bool:
        return self.outcome is CredentialOutcome.SUCCESS


class CredentialService:
    """Register accounts with hashed passwords and verify login attempts."""

    def __init__(
        self,
        *,
        accounts: AccountRepositoryPort,
        password_hasher: PasswordHasherPort,
    ) -> None:
        self._accounts = accounts
        self._password_hasher = password_hasher
        self._decoy_password_hash = password_hasher.hash_password(_DECOY_PASSWORD)

    async def register(
        self,
        *,
        name: str | None,
        email: str | None,
        password: str | None,
    ) -> CredentialResult:
        """Validate input, hash the password and persist one new account."""

        if any_missing(name, email, password):
            return CredentialResult(
                outcome=CredentialOutcome.VALIDATION_ERROR,
                message=REGISTER_MISSING_FIELDS_MESSAGE,
            )
        assert name is not None and email is not None and password is not None

        try:
            password_hash = await asyncio.to_thread(self._password_hasher.hash_password, password)
        except PasswordHashingError:
            logger.exception("account_register_hash_failed email=%s", email)
            return CredentialResult(
                outcome=CredentialOutcome.INTERNAL_ERROR,
                message=HASH_FAILED_MESSAGE,
            )
        del password

        try:
            account = await self._accounts.create_account(
                AccountCreateInput(
                    account_id=uuid4(),
                    name=name,
                    email=email,
                    password_hash=password_hash,
                )
            )
        except DuplicateAccountEmailError:
            logger.info("account_register_duplicate email=%s", email)
            return CredentialResult(
                outcome=CredentialOutcome.CONFLICT,
                message=DUPLICATE_EMAIL_MESSAGE,
            )
        except AccountStorageError:
            logger.exception("account_register_storage_failed email=%s", email)
            return CredentialResult(
                outcome=CredentialOutcome.INTERNAL_ERROR,
                message=SAVE_FAILED_MESSAGE,
            )

        logger.info("account_registered account_id=%s", account.account_id)
        return CredentialResult(
            outcome=CredentialOutcome.SUCCESS,
            message=REGISTER_SUCCESS_MESSAGE,
        )

    async def login(self, *, email: str | None, password: str | None) -> CredentialResult:
        """Verify a login attempt without revealing whether the email is registered."""

        if any_missing(email, password):
            return CredentialResult(
                outcome=CredentialOutcome.VALIDATION_ERROR,
                message=LOGIN_MISSING_FIELDS_MESSAGE,
            )
        assert email is not None and password is not None

        try:
            account = await self._accounts.get_by_email(email=email)
        except AccountNotFoundError:
            await self._verify_against_decoy(password=password)
            logger.info("account_login_failed reason=unknown_email")
            return _invalid_credentials()
        except AccountStorageError:
            logger.exception("account_login_storage_failed")
            return CredentialResult(
                outcome=CredentialOutcome.INTERNAL_ERROR,
                message=VERIFY_FAILED_MESSAGE,
            )

        try:
            is_valid = await asyncio.to_thread(
                self._password_hasher.verify_password,
                password=password,
                password_hash=account.password_hash,
            )
        except PasswordHashingError:
            logger.exception("account_login_verify_failed account_id=%s", account.account_id)
            return CredentialResult(
                outcome=CredentialOutcome.INTERNAL_ERROR,
                message=VERIFY_FAILED_MESSAGE,
            )

        if not is_valid:
            logger.info(
                "account_login_failed reason=password_mismatch account_id=%s",
                account.account_id,
            )
            return _invalid_credentials()

        logger.info("account_login_succeeded account_id=%s", account.account_id)
        return CredentialResult(
            outcome=CredentialOutcome.SUCCESS,
            message=LOGIN_SUCCESS_MESSAGE,
        )

    async def _verify_against_decoy(self, *, password: str) -> None:
        """Spend one verification so unknown emails take as long as known ones."""

        try:
            await asyncio.to_thread(
                self._password_hasher.verify_password,
                password=password,
                password_hash=self._decoy_password_hash,
            )
        except PasswordHashingError:
            logger.warning("account_login_decoy_verify_failed")


def _invalid_credentials() -> CredentialResult:
    return CredentialResult(
        outcome=CredentialOutcome.UNAUTHORIZED,
        message=INVALID_CREDENTIALS_MESSAGE,
    )
