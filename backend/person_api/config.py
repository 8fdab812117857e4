"""
Person API: Application Configuration
========================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by the app factory, the store provider, and the middleware.
When:  Loaded once at module import time.

Environment variables (case-insensitive):
    CSV_FILE_PATH   Path to the persons CSV file (absolute or relative)
    CSV_BASE_DIR    Directory relative paths are resolved against
    CORS_ORIGINS    Comma-separated list of allowed origins
    BACKEND_HOST / BACKEND_PORT
    LOG_LEVEL       DEBUG, INFO, WARNING, ERROR, CRITICAL
"""

from pathlib import Path
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

# Project root: the directory holding `backend/` and `data/`
PROJECT_ROOT = Path(__file__).resolve().parents[2]


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults that work from a source checkout: the sample
    CSV under `data/` is served without any extra configuration.
    """

    # ── CSV Storage ───────────────────────────────────────────────────────
    # What: Location of the persons file. Must exist at startup.
    # Relative paths are joined onto csv_base_dir, absolute paths are used as-is.
    csv_file_path: str = Field(
        default="data/persons.csv",
        description="Path of the CSV file backing the person store",
    )
    csv_base_dir: str = Field(
        default=str(PROJECT_ROOT),
        description="Base directory for resolving a relative csv_file_path",
    )

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated URLs (split by cors_origins_list)
    cors_origins: str = Field(default="http://localhost:3000")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=8000, ge=1024, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
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

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


# Singleton instance, imported throughout the application
settings = Settings()
