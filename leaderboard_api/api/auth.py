"""Register/login routes and auth dependencies (get_current_user, require_role)."""

from collections.abc import Callable
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from leaderboard_api.core.security import TokenError, decode_access_token
from leaderboard_api.schemas.auth import (
    CurrentUser,
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    PublicUser,
    RegisterRequest,
)
from leaderboard_api.services.auth import AuthService
from leaderboard_api.services.credential_store import (
    InMemoryCredentialStore,
    get_credential_store,
)

router = APIRouter()
security = HTTPBearer(auto_error=False)


def get_auth_service(
    store: Annotated[InMemoryCredentialStore, Depends(get_credential_store)],
) -> AuthService:
    """Dependency: AuthService bound to the process-wide credential store."""
    return AuthService(store)


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=MessageResponse,
    responses={400: {"model": ErrorResponse}},
)
def register(
    body: RegisterRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> MessageResponse:
    """
    Register a user with a unique Kick and Rainbet username.
    No token is issued; call /login afterwards.
    """
    service.register(
        kick_username=body.kick_username,
        rainbet_username=body.rainbet_username,
        password=body.password,
        confirm_password=body.confirm_password,
    )
    return MessageResponse(message="User registered.")


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def login(
    body: LoginRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> LoginResponse:
    """
    Authenticate with Kick username and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <token>
    """
    result = service.login(body.kick_username, body.password)
    return LoginResponse(
        token=result.token,
        user=PublicUser(
            id=result.user.id,
            kick_username=result.user.kick_username,
            role=result.user.role.value,
        ),
    )


def _unauthorized(message: str, code: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={"message": message, "code": code},
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> CurrentUser:
    """Dependency: require valid Bearer JWT and return its claims. Raises 401 if missing or invalid."""
    if credentials is None:
        raise _unauthorized("Not authenticated", "not_authenticated")
    try:
        claims = decode_access_token(credentials.credentials)
    except TokenError as e:
        raise _unauthorized(e.message, e.code) from e
    return CurrentUser(
        id=claims.subject_id,
        kick_username=claims.kick_username,
        role=claims.role,
        issued_at=claims.issued_at,
        expires_at=claims.expires_at,
    )


def require_role(*roles: str) -> Callable[[CurrentUser], CurrentUser]:
    """Build a dependency that admits only tokens whose role is in roles. Raises 403 otherwise."""

    def dependency(
        current_user: Annotated[CurrentUser, Depends(get_current_user)],
    ) -> CurrentUser:
        if current_user.role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail={"message": "Insufficient role", "code": "forbidden"},
            )
        return current_user

    return dependency


@router.get(
    "/me",
    response_model=CurrentUser,
    responses={401: {"model": ErrorResponse}},
)
def read_me(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    """Return the identity carried by the caller's token (claims as of issuance)."""
    return current_user
