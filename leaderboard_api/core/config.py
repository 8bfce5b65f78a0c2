"""Application configuration loaded from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Placeholder secrets that must never be used to sign tokens.
WEAK_JWT_SECRETS = frozenset({"change-me-in-production", "secret", "changeme"})

# HMAC algorithms only; the signing secret is a shared key.
ALLOWED_JWT_ALGORITHMS = ("HS256", "HS384", "HS512")

DEFAULT_CORS_ORIGINS = [
    "http://localhost:5173",
    "https://king-eta-cyan.vercel.app",
    "https://kingrewardsroobet.vercel.app",
    "https://mister-tee.vercel.app",
    "https://louiskhz.vercel.app",
    "https://tacopoju-dun.vercel.app",
    "https://luckyw.vercel.app",
    "https://www.luckywrewards.com",
]


class Settings(BaseSettings):
    """Validated application settings from env and optional .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    APP_ENV: Literal["dev", "prod"] = "dev"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # JWT authentication. No default secret: startup fails if it is missing.
    JWT_SECRET: SecretStr
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_DAYS: int = 7

    # Bcrypt cost (rounds).
    BCRYPT_ROUNDS: int = 10

    CORS_ALLOWED_ORIGINS: list[str] = DEFAULT_CORS_ORIGINS

    # Rainbet affiliates API (optional; required only for GET /api/affiliates)
    RAINBET_API_BASE_URL: str = "https://services.rainbet.com"
    RAINBET_API_KEY: SecretStr | None = None
    AFFILIATES_REQUEST_TIMEOUT_SEC: float = 10.0

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = (v or "").strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(
                "LOG_LEVEL must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL"
            )
        return level

    @field_validator("JWT_SECRET")
    @classmethod
    def validate_jwt_secret(cls, v: SecretStr) -> SecretStr:
        value = v.get_secret_value()
        if not value or not value.strip():
            raise ValueError("JWT_SECRET must be set and non-empty")
        if value.strip().lower() in WEAK_JWT_SECRETS:
            raise ValueError("JWT_SECRET must not be a placeholder value")
        return v

    @field_validator("JWT_ALGORITHM")
    @classmethod
    def validate_jwt_algorithm(cls, v: str) -> str:
        alg = (v or "").strip().upper()
        if alg not in ALLOWED_JWT_ALGORITHMS:
            raise ValueError(
                f"JWT_ALGORITHM must be one of {', '.join(ALLOWED_JWT_ALGORITHMS)}"
            )
        return alg

    @field_validator("JWT_EXPIRE_DAYS")
    @classmethod
    def validate_jwt_expire_days(cls, v: int) -> int:
        if v < 1 or v > 365:
            raise ValueError("JWT_EXPIRE_DAYS must be between 1 and 365")
        return v

    @field_validator("BCRYPT_ROUNDS")
    @classmethod
    def validate_bcrypt_rounds(cls, v: int) -> int:
        if v < 4 or v > 16:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 16")
        return v

    @field_validator("RAINBET_API_BASE_URL")
    @classmethod
    def validate_rainbet_api_base_url(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("RAINBET_API_BASE_URL must be set and non-empty")
        s = v.strip().lower()
        if not (s.startswith("http://") or s.startswith("https://")):
            raise ValueError(
                "RAINBET_API_BASE_URL must use http or https (e.g. https://services.rainbet.com)"
            )
        return v.strip().rstrip("/")

    @field_validator("AFFILIATES_REQUEST_TIMEOUT_SEC")
    @classmethod
    def validate_affiliates_timeout(cls, v: float) -> float:
        if v <= 0 or v > 120:
            raise ValueError(
                "AFFILIATES_REQUEST_TIMEOUT_SEC must be greater than 0 and at most 120"
            )
        return v


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance (safe to call from dependencies)."""
    return Settings()
