"""
Seed a user (e.g. the first admin) into the in-memory store and optionally serve.
The store is volatile, so seeding is only useful together with --serve:
  python -m leaderboard_api.scripts.create_user KICK RAINBET PASSWORD [role] --serve
Example:
  python -m leaderboard_api.scripts.create_user admin admin_rb your-secure-password admin --serve
"""
import argparse
import sys

from leaderboard_api.core.security import BCRYPT_MAX_PASSWORD_BYTES, hash_password
from leaderboard_api.models.user import Role, UserRecord
from leaderboard_api.services.credential_store import (
    InMemoryCredentialStore,
    UniquenessError,
    get_credential_store,
)


def seed_user(
    store: InMemoryCredentialStore,
    kick_username: str,
    rainbet_username: str,
    password: str,
    role: Role,
) -> UserRecord:
    """Insert a user with any role. Raises ValueError or UniquenessError."""
    kick_username = kick_username.strip()
    rainbet_username = rainbet_username.strip()
    if not kick_username or len(kick_username) > 255:
        raise ValueError("Invalid kick username length.")
    if not rainbet_username or len(rainbet_username) > 255:
        raise ValueError("Invalid rainbet username length.")
    if not password or len(password.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must be 1-{BCRYPT_MAX_PASSWORD_BYTES} bytes.")
    return store.insert(
        UserRecord(
            kick_username=kick_username,
            rainbet_username=rainbet_username,
            password_hash=hash_password(password),
            role=role,
        )
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Seed a Leaderboard API user.")
    parser.add_argument("kick_username", help="Kick username (1-255 chars)")
    parser.add_argument("rainbet_username", help="Rainbet username (1-255 chars)")
    parser.add_argument("password", help="Password (1-72 bytes)")
    parser.add_argument(
        "role", nargs="?", default=Role.USER.value, choices=[r.value for r in Role]
    )
    parser.add_argument("--serve", action="store_true", help="Start the API after seeding")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=3000)
    args = parser.parse_args(argv)

    try:
        user = seed_user(
            get_credential_store(),
            args.kick_username,
            args.rainbet_username,
            args.password,
            Role(args.role),
        )
    except (ValueError, UniquenessError) as e:
        print(str(e), file=sys.stderr)
        return 1
    print(f"Created user '{user.kick_username}' with role '{user.role.value}'.")

    if args.serve:
        import uvicorn

        from leaderboard_api.main import app

        uvicorn.run(app, host=args.host, port=args.port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
