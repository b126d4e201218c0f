"""Pydantic models for registration and login HTTP payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, StrictStr


class LenientModel(BaseModel):
    """Base model that ignores unknown fields and requires real strings."""

    model_config = ConfigDict(extra="ignore")


class RegisterRequest(LenientModel):
    """Registration payload contract; absent fields arrive as None."""

    name: StrictStr | None = None
    email: StrictStr | None = None
    password: StrictStr | None = None


class LoginRequest(LenientModel):
    """Login payload contract; absent fields arrive as None."""

    email: StrictStr | None = None
    password: StrictStr | None = None


class MessageResponse(BaseModel):
    """Success response body."""

    message: str


class ErrorResponse(BaseModel):
    """Failure response body."""

    error: str
