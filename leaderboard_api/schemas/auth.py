"""Request/response schemas for auth endpoints (camelCase on the wire)."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

USERNAME_MAX_LEN = 255
PASSWORD_MAX_LEN = 128


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase JSON keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RegisterRequest(CamelModel):
    """Body for POST /api/auth/register."""

    kick_username: str = Field(..., min_length=1, max_length=USERNAME_MAX_LEN)
    rainbet_username: str = Field(..., min_length=1, max_length=USERNAME_MAX_LEN)
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN)
    confirm_password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN)


class LoginRequest(CamelModel):
    """Credentials for login."""

    kick_username: str = Field(..., min_length=1, max_length=USERNAME_MAX_LEN)
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN)


class MessageResponse(BaseModel):
    """Plain acknowledgement or error message."""

    message: str


class ErrorResponse(MessageResponse):
    """Structured error body returned for auth failures."""

    code: str = Field(..., description="Machine-readable error code")


class PublicUser(CamelModel):
    """User fields safe to return to clients (no password hash, no rainbet username)."""

    id: str
    kick_username: str
    role: str


class LoginResponse(BaseModel):
    """JWT access token and public profile returned after successful login."""

    token: str = Field(..., description="JWT access token")
    user: PublicUser


class CurrentUser(CamelModel):
    """Authenticated identity taken from validated token claims."""

    id: str
    kick_username: str
    role: str
    issued_at: datetime
    expires_at: datetime
