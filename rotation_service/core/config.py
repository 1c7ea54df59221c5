# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Core configuration — all env-driven, zero hardcode.
Single source of truth for every tunable parameter.
"""

import os


class Settings:
    """Application settings loaded from environment variables."""

    SERVICE_NAME: str = os.getenv("SERVICE_NAME", "rotation-service")
    SERVICE_VERSION: str = os.getenv("SERVICE_VERSION", "1.0.0")
    SERVICE_PORT: int = int(os.getenv("SERVICE_PORT", "8005"))

    ROSTER_SERVICE_URL: str = os.getenv("ROSTER_SERVICE_URL", "")
    ROSTER_TIMEOUT: float = float(os.getenv("ROSTER_TIMEOUT", "5.0"))

    DATABASE_URL: str = os.getenv("DATABASE_URL", "")
    POOL_SIZE: int = int(os.getenv("DB_POOL_SIZE", "10"))
    MAX_OVERFLOW: int = int(os.getenv("DB_MAX_OVERFLOW", "5"))
    POOL_RECYCLE: int = int(os.getenv("DB_POOL_RECYCLE", "300"))

    ROTATION_TIMEZONE: str = os.getenv("ROTATION_TIMEZONE", "UTC")
    EXCLUDED_EMAIL_DOMAIN: str = os.getenv("EXCLUDED_EMAIL_DOMAIN", "@example.com")

    DEFAULT_HISTORY_LIMIT: int = int(os.getenv("DEFAULT_HISTORY_LIMIT", "100"))
    MAX_HISTORY_SIZE: int = int(os.getenv("MAX_HISTORY_SIZE", "10000"))

    CORS_ORIGINS: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    SEED_DEFAULT_ROSTER: bool = (
        os.getenv("SEED_DEFAULT_ROSTER", "true").lower() == "true"
    )


settings = Settings()
