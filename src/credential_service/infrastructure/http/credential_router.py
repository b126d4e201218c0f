"""FastAPI router exposing account registration and login endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from credential_service.application.dto.credential_models import (
    ErrorResponse,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
)
from credential_service.application.services.credential_service import (
    CredentialOutcome,
    CredentialResult,
    CredentialService,
)

PARSE_FAILED_MESSAGE = "Failed to parse request body"

_STATUS_BY_OUTCOME: dict[CredentialOutcome, int] = {
    CredentialOutcome.SUCCESS: 200,
    CredentialOutcome.VALIDATION_ERROR: 400,
    CredentialOutcome.UNAUTHORIZED: 401,
    CredentialOutcome.CONFLICT: 409,
    CredentialOutcome.INTERNAL_ERROR: 500,
}

logger = logging.getLogger(__name__)


def build_credential_router(*, credential_service: CredentialService) -> APIRouter:
    """Build router exposing `/register` and `/login` endpoints."""

    router = APIRouter(tags=["credentials"])

    @router.post(
        "/register",
        response_model=MessageResponse,
        responses={
            400: {"model": ErrorResponse},
            409: {"model": ErrorResponse},
            500: {"model": ErrorResponse},
        },
    )
    async def register(request: Request) -> JSONResponse:
        raw_body = await request.body()
        try:
            payload = RegisterRequest.model_validate_json(raw_body)
        except ValidationError:
            logger.info("register_request_unparseable")
            return _parse_failed_response()

        result = await credential_service.register(
            name=payload.name,
            email=payload.email,
            password=payload.password,
        )
        return to_json_response(result)

    @router.post(
        "/login",
        response_model=MessageResponse,
        responses={
            400: {"model": ErrorResponse},
            401: {"model": ErrorResponse},
            500: {"model": ErrorResponse},
        },
    )
    async def login(request: Request) -> JSONResponse:
        raw_body = await request.body()
        try:
            payload = LoginRequest.model_validate_json(raw_body)
        except ValidationError:
            logger.info("login_request_unparseable")
            return _parse_failed_response()

        result = await credential_service.login(email=payload.email, password=payload.password)
        return to_json_response(result)

    return router


def to_json_response(result: CredentialResult) -> JSONResponse:
    """Map one service result into status code and `{message}`/`{error}` body."""

    status_code = _STATUS_BY_OUTCOME[result.outcome]
    if result.ok:
        body = MessageResponse(message=result.message).model_dump()
    else:
        body = ErrorResponse(error=result.message).model_dump()
    return JSONResponse(status_code=status_code, content=body)


def _parse_failed_response() -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(error=PARSE_FAILED_MESSAGE).model_dump(),
    )
