"""Configuration loading for Understudy.

This module provides centralized configuration management:
- Load settings from UNDERSTUDY_* environment variables and .env files
- Validate configuration using pydantic
- Provide typed access to all settings
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Framework configuration loaded from environment.

    Uses pydantic-settings for environment variable handling with
    .env file support via python-dotenv.
    """

    model_config = SettingsConfigDict(
        env_prefix="UNDERSTUDY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Matching
    any_matches_none: bool = Field(
        default=False,
        description="Whether Arg.any(T) matchers without an explicit policy accept None",
    )

    # Verification
    max_reported_calls: int = Field(
        default=10,
        description="Received calls listed per failure in verification reports",
    )
    verify_on_teardown: bool = Field(
        default=True,
        description="Verify every mock tracked by the pytest fixture at teardown",
    )

    # Logging configuration
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Log level for the understudy logger",
    )
    log_format: Literal["json", "text"] = Field(
        default="text",
        description="Log format",
    )

    @field_validator("max_reported_calls")
    @classmethod
    def validate_max_reported_calls(cls, v: int) -> int:
        """Ensure at least one received call is reported."""
        if v <= 0:
            raise ValueError("max_reported_calls must be positive")
        return v


def load_settings(env_file: str | None = None) -> Settings:
    """Load framework settings from environment.

    Args:
        env_file: Optional path to .env file. If not provided,
                 uses the default .env in the current directory.

    Returns:
        Validated Settings instance.

    Raises:
        ValidationError: If settings validation fails.
    """
    if env_file:
        return Settings(_env_file=env_file)  # type: ignore[call-arg]
    return Settings()


__all__ = ["Settings", "load_settings"]
