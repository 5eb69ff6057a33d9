"""
NoteAPI Backend — Application Configuration
=============================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading with validation on startup.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by the app factory, the admin directory builder and tests.
When:  Loaded once at module import time; validated before app starts.

Admin allow-list sources:
    ADMIN_FILE set   → FileAdminDirectory (JSON array re-read on every lookup)
    otherwise        → StaticAdminDirectory built from ADMIN_TOKENS
"""

from pydantic_settings import BaseSettings
from pydantic import Field, field_validator
from typing import List


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults suitable for local development, except the
    admin allow-list: with neither ADMIN_TOKENS nor ADMIN_FILE configured,
    every /notes request is answered with 403.
    """

    # ── Admin Allow-List ──────────────────────────────────────────────────
    # Format: Comma-separated tokens (parsed by admin_tokens_list below)
    admin_tokens: str = Field(
        default="",
        description="Comma-separated tokens accepted by the AuthGate",
    )

    # What: Path to a JSON file holding an array of admin tokens
    # When set, it takes precedence over admin_tokens
    admin_file: str = Field(
        default="",
        description="Path to a JSON array of admin tokens (optional)",
    )

    @property
    def admin_tokens_list(self) -> List[str]:
        """Splits comma-separated admin tokens into a list, dropping blanks."""
        return [token.strip() for token in self.admin_tokens.split(",") if token.strip()]

    # ── CORS ──────────────────────────────────────────────────────────────
    cors_origins: str = Field(default="http://localhost:3000")

    @property
    def cors_origins_list(self) -> List[str]:
        """
        What: Splits comma-separated CORS origins into a list.
        Why property: CORS middleware expects a list, but env vars are strings.
        """
        return [origin.strip() for origin in self.cors_origins.split(",")]

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
        "case_sensitive": False,  # ADMIN_TOKENS and admin_tokens both work
    }

    def validate_required_for_production(self) -> None:
        """
        What:  Validates that an admin allow-list source is configured.
        When:  Called during app startup (lifespan).
        Why:   An empty allow-list silently forbids every request.
        """
        errors = []
        if not self.admin_file and not self.admin_tokens_list:
            errors.append(
                "Neither ADMIN_TOKENS nor ADMIN_FILE is set. "
                "Every /notes request will be rejected with 403."
            )
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


# Singleton instance — imported throughout the application
settings = Settings()
