"""
Blog API Backend - Application Configuration
=============================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by the app factory, the auth service and the entrypoint.
When:  Loaded once at module import time; validated before app starts.

Everything a request can influence is NOT here: the signing secret, token
lifetime, credential pair and seed list are process configuration only.
"""

from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

# Seed list shipped with the package, used when SEED_FILE is not set
DEFAULT_SEED_FILE = Path(__file__).resolve().parent / "data" / "seed_posts.json"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have development defaults. Production deployments MUST
    override JWT_SECRET and the AUTH_* credential pair.
    """

    # ── Token Signing ─────────────────────────────────────────────────────
    # What: Shared secret for HMAC-signed bearer tokens
    jwt_secret: str = Field(
        default="blog-CRUD-backend-api@1.0.0",
        description="Secret used to sign and verify bearer tokens",
    )
    jwt_algorithm: str = Field(default="HS256")

    # What: Token lifetime in seconds (default: one hour)
    jwt_expires_in: int = Field(default=3600, ge=1)

    # ── Login ─────────────────────────────────────────────────────────────
    # Single placeholder credential pair; there is no user store
    auth_username: str = Field(default="user")
    auth_password: str = Field(default="password")

    # ── Seed Data ─────────────────────────────────────────────────────────
    # What: JSON array of posts loaded into the in-memory store at startup
    seed_file: Optional[str] = Field(default=None)

    @property
    def seed_path(self) -> Path:
        return Path(self.seed_file) if self.seed_file else DEFAULT_SEED_FILE

    # ── CORS ──────────────────────────────────────────────────────────────
    cors_origins: str = Field(default="http://localhost:3000")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=3000, ge=1, le=65535)

    # What: Expose /docs, /redoc and /openapi.json
    # Off by default so the routing table holds only the API routes
    docs_enabled: bool = Field(default=False)

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
        "case_sensitive": False,  # JWT_SECRET and jwt_secret both work
        "extra": "ignore",
    }

    def validate_required_for_production(self) -> None:
        """
        What:  Flags settings still at their development defaults.
        When:  Called during app startup (lifespan).
        How:   Raises ValueError listing every offending setting.
        """
        errors = []
        if self.jwt_secret == "blog-CRUD-backend-api@1.0.0":
            errors.append("JWT_SECRET is using the development default.")
        if self.auth_password == "password":
            errors.append("AUTH_PASSWORD is using the development default.")
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


# Singleton instance, imported throughout the application
settings = Settings()
