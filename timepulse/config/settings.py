"""
Configuration management for TimePulse.
"""

from decimal import Decimal
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class TimePulseConfig(BaseSettings):
    """Configuration settings for TimePulse."""

    # Application Configuration
    environment: str = Field(default="development", alias="ENVIRONMENT")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # The user every call is made on behalf of (no authentication)
    default_user_id: int = Field(default=1, ge=1, alias="DEFAULT_USER_ID")
    seed_sample_data: bool = Field(default=True, alias="SEED_SAMPLE_DATA")

    # Smart suggestions
    suggestion_window_days: int = Field(
        default=30, ge=1, alias="SUGGESTION_WINDOW_DAYS"
    )
    suggestion_recent_days: int = Field(
        default=7, ge=1, alias="SUGGESTION_RECENT_DAYS"
    )
    suggestion_min_occurrences: int = Field(
        default=2, ge=1, alias="SUGGESTION_MIN_OCCURRENCES"
    )
    suggestion_strong_occurrences: int = Field(
        default=3, ge=1, alias="SUGGESTION_STRONG_OCCURRENCES"
    )
    max_suggestions: int = Field(default=5, ge=1, alias="MAX_SUGGESTIONS")

    # Break policy
    auto_break_threshold_hours: Decimal = Field(
        default=Decimal("4.5"), ge=0, alias="AUTO_BREAK_THRESHOLD_HOURS"
    )
    auto_break_hours: Decimal = Field(
        default=Decimal("0.5"), ge=0, alias="AUTO_BREAK_HOURS"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        populate_by_name=True,
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Ensure log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        """Ensure environment is valid."""
        valid_envs = ["development", "testing", "production"]
        if v.lower() not in valid_envs:
            raise ValueError(f"Environment must be one of: {valid_envs}")
        return v.lower()


def load_config(env_file: Optional[str] = None) -> TimePulseConfig:
    """Load configuration from environment variables and .env file."""
    if env_file:
        load_dotenv(env_file)
    else:
        load_dotenv()

    return TimePulseConfig()


# Global configuration instance
_config: Optional[TimePulseConfig] = None


def get_config() -> TimePulseConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config(env_file: Optional[str] = None) -> TimePulseConfig:
    """Reload configuration (useful for testing)."""
    global _config
    _config = load_config(env_file)
    return _config
