"""
Application configuration module.

Loads settings from environment variables (or .env file) using pydantic-settings.
All sensitive values (DB credentials) come from the environment, never from code.
"""

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Central configuration for the FII details store.

    Environment variables are loaded automatically from .env if present.
    """

    PROJECT_NAME: str = "FII Details Store"

    # ── SQLite mode (no external DB required) ──
    # An empty SQLITE_PATH means a shared in-memory database.
    USE_SQLITE: bool = True
    SQLITE_PATH: str = ""

    # ── PostgreSQL connection parameters ──
    # Only required when USE_SQLITE is False; the validator below enforces it.
    POSTGRES_USER: str = ""
    POSTGRES_PASSWORD: str = ""
    POSTGRES_SERVER: str = ""
    POSTGRES_DB: str = ""
    POSTGRES_PORT: int = 5432

    @model_validator(mode="after")
    def _require_pg_credentials_unless_sqlite(self) -> "Settings":
        """Fail fast if PostgreSQL credentials are missing in PostgreSQL mode."""
        if not self.USE_SQLITE:
            missing = [
                name
                for name in (
                    "POSTGRES_USER",
                    "POSTGRES_PASSWORD",
                    "POSTGRES_SERVER",
                    "POSTGRES_DB",
                )
                if not getattr(self, name)
            ]
            if missing:
                vars_list = ", ".join(missing)
                raise ValueError(
                    f"PostgreSQL mode requires these environment variables: "
                    f"{vars_list}.\n\n"
                    f"Either export them (or put them in a .env file), or "
                    f"set USE_SQLITE=true to use SQLite instead."
                )
        return self

    # ── Connection pool tuning (PostgreSQL only) ──
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_TIMEOUT: int = 30  # seconds to wait for a connection from the pool
    DB_POOL_RECYCLE: int = 1800  # seconds before a connection is recycled

    # ── Logging ──
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    LOG_FILE_MAX_BYTES: int = 10 * 1024 * 1024
    LOG_FILE_BACKUP_COUNT: int = 5

    @property
    def DATABASE_URL(self) -> str:
        """Construct the async database DSN.

        Returns a SQLite URL (file-backed when ``SQLITE_PATH`` is set,
        in-memory otherwise) when ``USE_SQLITE`` is enabled, else a
        PostgreSQL DSN for asyncpg.
        """
        if self.USE_SQLITE:
            if self.SQLITE_PATH:
                return f"sqlite+aiosqlite:///{self.SQLITE_PATH}"
            return "sqlite+aiosqlite://"
        return (
            f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
