"""Password hashing and JWT issuance/validation for authentication."""

import base64
import binascii
import json
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

import bcrypt
import jwt

from leaderboard_api.core.config import get_settings

if TYPE_CHECKING:
    from leaderboard_api.models.user import UserRecord

# bcrypt only consumes the first 72 bytes; longer passwords are rejected, never truncated.
BCRYPT_MAX_PASSWORD_BYTES = 72

# Claims every access token must carry.
REQUIRED_CLAIMS = ("id", "role", "kickUsername", "iat", "exp")


class HashingError(Exception):
    """Raised when hashing fails internally or a stored hash is malformed."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.message = message
        self.cause = cause
        super().__init__(message)


class TokenError(Exception):
    """Base class for token validation failures."""

    code = "invalid_token"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class MalformedTokenError(TokenError):
    """Token cannot be parsed or lacks required claims."""


class InvalidSignatureError(TokenError):
    """Token was tampered with or signed with another secret."""


class TokenExpiredError(TokenError):
    """Token is past its expiry time."""

    code = "token_expired"


@dataclass(frozen=True)
class TokenClaims:
    """Identity claims carried by a validated access token."""

    subject_id: str
    role: str
    kick_username: str
    issued_at: datetime
    expires_at: datetime


def hash_password(plain_password: str, rounds: int | None = None) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    if rounds is None:
        rounds = get_settings().BCRYPT_ROUNDS
    pw_bytes = plain_password.encode("utf-8")
    if len(pw_bytes) > BCRYPT_MAX_PASSWORD_BYTES:
        raise HashingError(f"Password exceeds {BCRYPT_MAX_PASSWORD_BYTES} bytes.")
    try:
        return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")
    except (ValueError, OSError) as e:
        raise HashingError("Password hashing failed.", cause=e) from e


def verify_password(plain_password: str, hashed: str) -> bool:
    """
    Verify a plain password against a stored hash.
    Returns False on mismatch; raises HashingError if the hash is malformed.
    """
    pw_bytes = plain_password.encode("utf-8")
    if len(pw_bytes) > BCRYPT_MAX_PASSWORD_BYTES:
        # No stored hash can come from a password this long.
        return False
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError) as e:
        raise HashingError("Stored password hash is malformed.", cause=e) from e


def issue_token(
    claims: dict[str, Any],
    secret: str,
    ttl: timedelta,
    *,
    algorithm: str = "HS256",
    now: datetime | None = None,
) -> str:
    """Sign claims plus iat/exp into a JWT. Claims are readable by anyone holding the token."""
    issued_at = now or datetime.now(UTC)
    payload: dict[str, Any] = {
        **claims,
        "iat": issued_at,
        "exp": issued_at + ttl,
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


def _signed_part_parses(token: str) -> bool:
    """True if header and payload decode as JSON objects, so only the signature segment is bad."""
    parts = token.split(".")
    if len(parts) != 3:
        return False
    try:
        for segment in parts[:2]:
            padded = segment + "=" * (-len(segment) % 4)
            if not isinstance(json.loads(base64.urlsafe_b64decode(padded)), dict):
                return False
    except (binascii.Error, ValueError):
        return False
    return True


def validate_token(token: str, secret: str, *, algorithm: str = "HS256") -> TokenClaims:
    """
    Verify signature and expiry; return the token's claims.
    Raises InvalidSignatureError, TokenExpiredError or MalformedTokenError.
    """
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[algorithm],
            options={"require": list(REQUIRED_CLAIMS)},
        )
    except jwt.ExpiredSignatureError as e:
        raise TokenExpiredError("Token has expired.") from e
    except jwt.InvalidSignatureError as e:
        raise InvalidSignatureError("Token signature is invalid.") from e
    except jwt.DecodeError as e:
        if _signed_part_parses(token):
            raise InvalidSignatureError("Token signature is invalid.") from e
        raise MalformedTokenError("Token is malformed.") from e
    except jwt.PyJWTError as e:
        raise MalformedTokenError("Token is malformed.") from e

    try:
        return TokenClaims(
            subject_id=str(payload["id"]),
            role=str(payload["role"]),
            kick_username=str(payload["kickUsername"]),
            issued_at=datetime.fromtimestamp(int(payload["iat"]), UTC),
            expires_at=datetime.fromtimestamp(int(payload["exp"]), UTC),
        )
    except (TypeError, ValueError) as e:
        raise MalformedTokenError("Token is malformed.") from e


def create_access_token(user: "UserRecord", now: datetime | None = None) -> str:
    """Create an access token for a user with id, role, kickUsername, iat and exp."""
    settings = get_settings()
    return issue_token(
        {
            "id": user.id,
            "role": user.role.value,
            "kickUsername": user.kick_username,
        },
        settings.JWT_SECRET.get_secret_value(),
        timedelta(days=settings.JWT_EXPIRE_DAYS),
        algorithm=settings.JWT_ALGORITHM,
        now=now,
    )


def decode_access_token(token: str) -> TokenClaims:
    """
    Validate an access token against the configured secret.
    Raises TokenError on invalid, expired or malformed tokens.
    """
    settings = get_settings()
    return validate_token(
        token,
        settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
    )
