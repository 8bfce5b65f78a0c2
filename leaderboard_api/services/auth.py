"""Registration and login: validate input, check uniqueness, hash, verify, issue tokens."""

import logging
from dataclasses import dataclass

from leaderboard_api.core.security import (
    BCRYPT_MAX_PASSWORD_BYTES,
    create_access_token,
    hash_password,
    verify_password,
)
from leaderboard_api.models.user import Role, UserRecord
from leaderboard_api.services.credential_store import (
    InMemoryCredentialStore,
    UniquenessError,
)

logger = logging.getLogger(__name__)


class AuthServiceError(Exception):
    """Base class for client-attributable registration and login failures."""

    status_code = 400
    code = "auth_error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(AuthServiceError):
    """Mismatched or unacceptable input."""

    status_code = 400
    code = "validation_error"


class ConflictError(AuthServiceError):
    """Kick or rainbet username is already registered."""

    status_code = 400
    code = "conflict"


class NotFoundError(AuthServiceError):
    """No user with the given kick username."""

    status_code = 404
    code = "not_found"


class InvalidCredentialsError(AuthServiceError):
    """Password does not match the stored hash."""

    status_code = 401
    code = "invalid_credentials"


@dataclass(frozen=True)
class LoginResult:
    """Signed token plus the user it was issued for."""

    token: str
    user: UserRecord


class AuthService:
    """
    Business logic for registration and login.

    Responsibilities:
      - enforce password confirmation and handle uniqueness
      - orchestrate store, hasher and token issuer
      - raise AuthServiceError subclasses for the HTTP layer to map
    """

    def __init__(self, store: InMemoryCredentialStore) -> None:
        self.store = store

    def register(
        self,
        kick_username: str,
        rainbet_username: str,
        password: str,
        confirm_password: str,
    ) -> UserRecord:
        """
        Create a user with role 'user'. No token is issued here.

        Raises:
            ValidationError: passwords differ or password exceeds bcrypt's limit.
            ConflictError: either handle is already registered.
        """
        if password != confirm_password:
            raise ValidationError("Passwords do not match.")
        if len(password.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
            raise ValidationError(
                f"Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes."
            )

        if (
            self.store.find_by_primary(kick_username) is not None
            or self.store.find_by_secondary(rainbet_username) is not None
        ):
            logger.info("Registration rejected: username already exists")
            raise ConflictError("Username already exists.")

        record = UserRecord(
            kick_username=kick_username,
            rainbet_username=rainbet_username,
            password_hash=hash_password(password),
            role=Role.USER,
        )
        try:
            self.store.insert(record)
        except UniquenessError as e:
            logger.info(
                "Registration lost insert race",
                extra={"conflict_field": e.field},
            )
            raise ConflictError("Username already exists.") from e

        logger.info("User registered", extra={"user_id": record.id})
        return record

    def login(self, kick_username: str, password: str) -> LoginResult:
        """
        Verify credentials and issue an access token.

        Raises:
            NotFoundError: unknown kick username.
            InvalidCredentialsError: wrong password.
        """
        user = self.store.find_by_primary(kick_username)
        if user is None:
            logger.info("Login rejected: unknown user")
            raise NotFoundError("User not found.")
        if not verify_password(password, user.password_hash):
            logger.info("Login rejected: invalid password", extra={"user_id": user.id})
            raise InvalidCredentialsError("Invalid credentials.")

        token = create_access_token(user)
        logger.info("Login succeeded", extra={"user_id": user.id})
        return LoginResult(token=token, user=user)
