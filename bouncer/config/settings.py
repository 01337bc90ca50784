"""Bouncer configuration using Pydantic settings."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from bouncer.constants.status_codes import is_error_status


class Settings(BaseSettings):
    """Bouncer settings with environment variable support."""

    # Verdicts
    DEFAULT_DENY_MESSAGE: str = Field(
        default="E_AUTHORIZATION_FAILURE: Not authorized to perform this action",
        min_length=1,
        description="Message used when an action denies without a reason",
    )
    DEFAULT_DENY_STATUS: int = Field(
        default=403,
        description="Status code used when an action denies without one",
    )

    # Monitoring
    LOG_LEVEL: str = "INFO"
    LOG_DECISIONS: bool = False
    SLOW_SPAN_THRESHOLD: float = 0.5  # seconds

    @field_validator("DEFAULT_DENY_STATUS")
    @classmethod
    def validate_deny_status(cls, v):
        """Deny statuses must be client or server error codes."""
        if not is_error_status(v):
            raise ValueError(f"DEFAULT_DENY_STATUS must be a 4xx or 5xx code, got {v}")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level setting."""
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v = v.upper()
        if v not in allowed:
            raise ValueError(f"LOG_LEVEL must be one of: {allowed}")
        return v

    model_config = SettingsConfigDict(
        env_prefix="BOUNCER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


# Global settings instance
settings = Settings()
