# aacshare/app/core/config.py
"""
Application configuration using pydantic-settings.

Security considerations:
- SECRET_KEY has no default and must be at least 32 bytes; the process
  refuses to start otherwise
- CORS_ORIGINS parsed from comma-separated env var, never defaults to "*"
- Database URLs normalized for async drivers automatically
"""
from functools import lru_cache
from typing import List, Optional
from urllib.parse import quote_plus

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

MIN_SECRET_KEY_SIZE = 32


class Settings(BaseSettings):
    """
    Strictly typed application settings.

    Priority for loading:
    1. Environment variables (highest priority)
    2. .env file (via pydantic-settings)
    3. Default values (lowest priority)
    """

    # ─────────────────────────────────────────────────────────────
    # Application metadata
    # ─────────────────────────────────────────────────────────────
    PROJECT_NAME: str = "AAC Share API"
    PROJECT_VERSION: str = "1.0.0"

    LOG_LEVEL: str = "INFO"
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # ─────────────────────────────────────────────────────────────
    # Security: JWT Configuration
    # ─────────────────────────────────────────────────────────────
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 15
    REFRESH_TOKEN_EXPIRE_DAYS: int = 30

    @field_validator("SECRET_KEY")
    @classmethod
    def check_secret_key_size(cls, v: str) -> str:
        if len(v.encode("utf-8")) < MIN_SECRET_KEY_SIZE:
            raise ValueError(
                f"SECRET_KEY must be {MIN_SECRET_KEY_SIZE} bytes or more"
            )
        return v

    # ─────────────────────────────────────────────────────────────
    # Database Configuration
    # Either a full DATABASE_URL, or PostgreSQL connection parts
    # (DB_HOST, DB_PORT, DB_USERNAME, DB_PASSWORD, DB_NAME, DB_SSLMODE).
    # ─────────────────────────────────────────────────────────────
    DATABASE_URL: Optional[str] = None

    DB_HOST: Optional[str] = None
    DB_PORT: int = 5432
    DB_USERNAME: str = "postgres"
    DB_PASSWORD: str = ""
    DB_NAME: str = "postgres"
    DB_SSLMODE: str = "disable"

    @field_validator("DATABASE_URL", mode="before")
    @classmethod
    def normalize_database_url(cls, v: Optional[str]) -> Optional[str]:
        """
        Normalize database URLs for async SQLAlchemy compatibility.

        Conversions:
        - postgres://     → postgresql+asyncpg://
        - postgresql://   → postgresql+asyncpg://
        - sqlite:///      → sqlite+aiosqlite:///
        """
        if v is None or not v.strip():
            return None

        url = v.strip()

        if url.startswith("postgres://"):
            return url.replace("postgres://", "postgresql+asyncpg://", 1)

        if url.startswith("postgresql://") and "+asyncpg" not in url:
            return url.replace("postgresql://", "postgresql+asyncpg://", 1)

        if url.startswith("sqlite:///") and "+aiosqlite" not in url:
            return url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)

        return url

    @model_validator(mode="after")
    def assemble_database_url(self) -> "Settings":
        if self.DATABASE_URL:
            return self
        if not self.DB_HOST:
            raise ValueError(
                "Database connection is not configured: set DATABASE_URL or DB_HOST"
            )
        self.DATABASE_URL = (
            f"postgresql+asyncpg://{quote_plus(self.DB_USERNAME)}:{quote_plus(self.DB_PASSWORD)}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}?ssl={self.DB_SSLMODE}"
        )
        return self

    # MUST be False in production to prevent SQL query exposure
    DATABASE_ECHO: bool = False

    # ─────────────────────────────────────────────────────────────
    # Blob storage
    # ─────────────────────────────────────────────────────────────
    STORAGE_DIR: str = "saved"
    MAX_UPLOAD_SIZE: int = 10 << 20

    # ─────────────────────────────────────────────────────────────
    # CORS Configuration
    # Empty string → empty list (NOT "*")
    # ─────────────────────────────────────────────────────────────
    CORS_ORIGINS: str = ""

    @property
    def BACKEND_CORS_ORIGINS(self) -> List[str]:
        if not self.CORS_ORIGINS or not self.CORS_ORIGINS.strip():
            return []

        return [
            origin.strip()
            for origin in self.CORS_ORIGINS.split(",")
            if origin.strip()
        ]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def is_sqlite(self) -> bool:
        """Check if using SQLite database (local development and tests)."""
        return "sqlite" in self.DATABASE_URL.lower()


@lru_cache()
def get_settings() -> Settings:
    """
    Cached settings instance.

    Loaded once per process; a missing or short SECRET_KEY raises here,
    which stops the application at import time.
    """
    return Settings()


settings = get_settings()
