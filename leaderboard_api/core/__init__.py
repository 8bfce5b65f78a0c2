"""Core app configuration and security primitives."""

from leaderboard_api.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
