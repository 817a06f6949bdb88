"""Configuration management with Pydantic Settings."""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from safe_pattern.models import AnalyzerLimits


class AppConfig(BaseSettings):
    """Application configuration."""

    log_file: Optional[str] = Field(default=None, validation_alias="LOG_FILE")
    verbose: bool = Field(default=False, validation_alias="VERBOSE")
    max_pattern_length: int = Field(
        default=10_000, gt=0, validation_alias="SAFE_PATTERN_MAX_LENGTH"
    )
    repetition_limit: int = Field(
        default=25, ge=0, validation_alias="SAFE_PATTERN_REPETITION_LIMIT"
    )
    bounded_repeat_limit: int = Field(
        default=10, ge=0, validation_alias="SAFE_PATTERN_BOUNDED_REPEAT_LIMIT"
    )
    command_timeout: float = Field(
        default=5.0, gt=0, validation_alias="SAFE_PATTERN_COMMAND_TIMEOUT"
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    def analyzer_limits(self) -> AnalyzerLimits:
        """Build analyzer limits from the configured values."""
        return AnalyzerLimits(
            max_pattern_length=self.max_pattern_length,
            repetition_limit=self.repetition_limit,
            bounded_repeat_limit=self.bounded_repeat_limit,
        )


def load_app_config() -> AppConfig:
    """Load application configuration.

    Returns:
        Application configuration with defaults.

    Raises:
        ValidationError: If an environment value is invalid.
    """
    return AppConfig()
