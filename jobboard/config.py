"""
Job Board Client Configuration Module

Centralized configuration management with Pydantic validation.
All environment variables are validated at startup to catch misconfigurations early.
"""

import logging
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv
from flask import current_app, has_app_context
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Web client configuration with validation.

    All settings can be overridden via environment variables
    (API_URL, FLASK_SECRET_KEY, ENVIRONMENT, ...).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Remote API ===
    api_url: str = Field(
        default="http://127.0.0.1:8000",
        description="Base URL of the job board REST API"
    )
    request_timeout: Optional[float] = Field(
        default=None,
        gt=0,
        description="Per-request timeout in seconds (unset = transport default)"
    )

    # === Session ===
    flask_secret_key: Optional[str] = Field(
        default=None,
        description="Key used to sign the session cookie holding the tokens"
    )
    session_lifetime_days: int = Field(
        default=31,
        ge=1,
        le=365,
        description="Lifetime of the permanent session cookie"
    )
    environment: str = Field(
        default="development",
        description="Environment: development, staging, production"
    )

    # === Uploads ===
    max_resume_bytes: int = Field(
        default=10 * 1024 * 1024,
        ge=1,
        description="Largest resume upload accepted by the apply form"
    )

    # === Logging ===
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="simple")

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment is a known value."""
        allowed = {"development", "staging", "production"}
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(f"environment must be one of: {', '.join(sorted(allowed))}")
        return v_lower

    @field_validator("api_url")
    @classmethod
    def validate_url_format(cls, v: str) -> str:
        """Basic URL format validation; trailing slash is dropped."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Invalid URL format: {v}")
        return v.rstrip("/")

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        if v.lower() not in {"simple", "json"}:
            raise ValueError("log_format must be 'simple' or 'json'")
        return v.lower()

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "production"

    def validate_production_config(self) -> List[str]:
        """
        Validate configuration is suitable for production.

        Returns list of warning/error messages.
        """
        issues = []

        if self.is_production:
            if not self.flask_secret_key:
                issues.append("CRITICAL: FLASK_SECRET_KEY required in production")
            if "127.0.0.1" in self.api_url or "localhost" in self.api_url:
                issues.append("WARNING: Using a local API_URL in production")
            if not self.api_url.startswith("https://"):
                issues.append("WARNING: API_URL is not HTTPS; tokens travel in clear text")

        return issues


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Settings are loaded once and cached; call get_settings.cache_clear()
    after changing the environment (tests do this).
    """
    return Settings()


def validate_config_on_startup(settings: Settings) -> None:
    """
    Validate configuration at application startup.

    Raises ValueError for critical issues, logs warnings for the rest.
    """
    for issue in settings.validate_production_config():
        if issue.startswith("CRITICAL"):
            raise ValueError(issue)
        logger.warning(issue)

    logger.info(f"Configuration loaded: environment={settings.environment}")
    logger.info(f"  api_url={settings.api_url}")
    logger.info(f"  request_timeout={settings.request_timeout or 'transport default'}")


def current_settings() -> Settings:
    """Settings bound to the running Flask app, falling back to get_settings()."""
    if has_app_context():
        bound = current_app.config.get("JOBBOARD_SETTINGS")
        if bound is not None:
            return bound
    return get_settings()
