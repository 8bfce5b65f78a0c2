"""Domain models."""

from leaderboard_api.models.user import Role, UserRecord

__all__ = ["Role", "UserRecord"]
