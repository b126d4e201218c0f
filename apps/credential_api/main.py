"""credential-api entrypoint and HTTP route wiring."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from credential_service.application.services.credential_service import CredentialService
from credential_service.config.settings import Settings, load_settings
from credential_service.infrastructure.db.account_repository import SqlAlchemyAccountRepository
from credential_service.infrastructure.db.session import (
    create_engine,
    create_schema,
    create_session_factory,
)
from credential_service.infrastructure.http.credential_router import build_credential_router
from credential_service.infrastructure.logging import configure_logging
from credential_service.infrastructure.security.password_hasher import BcryptPasswordHasher

logger = logging.getLogger(__name__)


def build_credential_service(*, engine: AsyncEngine, bcrypt_rounds: int) -> CredentialService:
    """Build credential service with SQLAlchemy-backed account storage."""

    session_factory = create_session_factory(engine=engine)
    return CredentialService(
        accounts=SqlAlchemyAccountRepository(session_factory),
        password_hasher=BcryptPasswordHasher(rounds=bcrypt_rounds),
    )


def create_app(
    *,
    settings: Settings | None = None,
    credential_service: CredentialService | None = None,
) -> FastAPI:
    """Create FastAPI app exposing registration and login routes."""

    if settings is None:
        settings = load_settings()
        configure_logging(level=settings.log_level)

    engine = create_engine(settings.database_url)
    if credential_service is None:
        credential_service = build_credential_service(
            engine=engine,
            bcrypt_rounds=settings.bcrypt_rounds,
        )

    auto_create_schema = settings.database_auto_create

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        if auto_create_schema:
            await create_schema(engine)
            logger.info("database_schema_ready")
        try:
            yield
        finally:
            await engine.dispose()

    app = FastAPI(lifespan=lifespan)
    app.include_router(build_credential_router(credential_service=credential_service))
    return app


def run_asgi_server(*, host: str, port: int) -> None:
    """Run credential-api as a long-lived ASGI process using application factory mode."""

    uvicorn.run(
        "apps.credential_api.main:create_app",
        host=host,
        port=port,
        factory=True,
    )


def main() -> None:
    """Run credential-api runtime process."""

    settings = load_settings()
    configure_logging(level=settings.log_level)
    logger.info("credential_api_starting host=%s port=%s", settings.api_host, settings.port)
    run_asgi_server(host=settings.api_host, port=settings.port)


if __name__ == "__main__":
    main()
