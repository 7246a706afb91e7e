"""Application configuration."""

from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from timecutoff.models.enums import CutoffAction, TimeFormat
from timecutoff.schemas.filter_config import TimeCutoffConfig

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings are loaded in this priority order (highest to lowest):
    1. Environment variables (prefixed with TIME_CUTOFF_)
    2. .env file (for local development)
    3. Default values

    Filter options left unset here fall back to the defaults of
    TimeCutoffConfig. Cutoffs are kept as raw strings or numbers and parsed
    there, so "1h" and "3600" are both valid values for TIME_CUTOFF_OLD_CUTOFF.
    """

    model_config = SettingsConfigDict(
        env_prefix="TIME_CUTOFF_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # =========================================================================
    # Logging
    # =========================================================================
    log_level: LogLevel = Field(
        default="INFO",
        description="Level for the root logger",
    )

    # =========================================================================
    # Filter (None means "use the TimeCutoffConfig default")
    # =========================================================================
    old_cutoff: str | float | None = None
    old_action: CutoffAction | None = None
    old_log: bool | None = None
    new_cutoff: str | float | None = None
    new_action: CutoffAction | None = None
    new_log: bool | None = None
    source_time_key: str | None = None
    source_time_format: TimeFormat | None = None

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    def filter_config(self, **overrides: Any) -> TimeCutoffConfig:
        """Build a validated filter configuration.

        Args:
            **overrides: Values that take precedence over the settings,
                e.g. from command-line flags. None values are ignored.

        Raises:
            pydantic.ValidationError: If the resulting configuration is invalid.
        """
        values = {
            name: getattr(self, name) for name in TimeCutoffConfig.model_fields
        }
        values.update(overrides)
        return TimeCutoffConfig(**{k: v for k, v in values.items() if v is not None})


def get_settings() -> Settings:
    """Load settings from the current environment."""
    return Settings()
