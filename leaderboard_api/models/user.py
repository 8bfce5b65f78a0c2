"""In-memory user record for registration, login and role checks."""

import enum
import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime


class Role(str, enum.Enum):
    """Account role carried in access tokens."""

    USER = "user"
    ADMIN = "admin"


def new_user_id() -> str:
    """Return a fresh opaque user id."""
    return uuid.uuid4().hex


@dataclass(frozen=True)
class UserRecord:
    """
    User account for JWT authentication and role-based access control.

    Records are immutable once stored. kick_username and rainbet_username are
    each unique across the credential store (case-sensitive).
    """

    kick_username: str
    rainbet_username: str
    password_hash: str = field(repr=False)
    role: Role = Role.USER
    id: str = field(default_factory=new_user_id)
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
