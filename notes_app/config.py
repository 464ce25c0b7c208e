"""
Simple Notes — Application Configuration
=========================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or a .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by the app factory, the persistence gateway and the templates.
When:  Loaded once at module import time; `create_app()` also accepts an
       explicit Settings instance (used by the test suite).
"""

from pydantic_settings import BaseSettings
from pydantic import Field, field_validator


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have working defaults for local development; the only value
    a deployment normally overrides is DATABASE_URL.
    """

    # ── Database ──────────────────────────────────────────────────────────
    # What: Async SQLite connection string using the aiosqlite driver
    # Format: sqlite+aiosqlite:///relative/path.db  (four slashes for absolute)
    database_url: str = Field(
        default="sqlite+aiosqlite:///./notes.db",
        description="Async SQLite connection URL (single file-backed database)",
    )

    # ── Page ──────────────────────────────────────────────────────────────
    app_title: str = Field(default="Simple Notes")
    app_tagline: str = Field(default="A simple application to keep your notes.")

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=8000, ge=1024, le=65535)

    # What: Verbosity of application logging
    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL (DEBUG also echoes SQL)
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    @property
    def sql_echo(self) -> bool:
        """Echo SQL statements only when running at DEBUG level."""
        return self.log_level == "DEBUG"

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # DATABASE_URL and database_url both work
    }


# Singleton instance — imported throughout the application
settings = Settings()
