"""Pydantic schemas for registration and login."""
from uuid import UUID

from pydantic import Field

from app.schemas.base_schema import CamelModel

_EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class RegisterRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., pattern=_EMAIL_PATTERN, max_length=255)
    # bcrypt só considera os primeiros 72 bytes
    password: str = Field(..., min_length=8, max_length=72)


class RegisterResponse(CamelModel):
    id: UUID
    name: str
    email: str


class LoginRequest(CamelModel):
    email: str = Field(..., pattern=_EMAIL_PATTERN)
    password: str = Field(..., min_length=1, max_length=72)


class TokenResponse(CamelModel):
    access_token: str
    token_type: str = "Bearer"
    expires_in: int = Field(..., description="Token lifetime in seconds")
