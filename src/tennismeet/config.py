"""
Configuration management for TennisMeet.

Uses Pydantic Settings to load configuration from environment variables
with sensible defaults for development. Values can be set directly in the
environment or via a .env file in the project root.

Usage:
    from tennismeet.config import settings
    print(settings.default_elo)
"""

import logging
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Environment variables can be set directly or via a .env file
    in the project root directory.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # Database Configuration
    # ==========================================================================

    database_url: str = Field(
        default="sqlite:///tennismeet.db",
        description="SQLAlchemy URL for the persistent time-block store",
    )
    db_echo: bool = Field(
        default=False,
        description="Echo SQL statements (debugging only)",
    )

    # ==========================================================================
    # Rating Configuration
    # ==========================================================================

    default_elo: int = Field(
        default=1200,
        description="Rating assumed for players that have no stats yet",
    )
    elo_min: int = Field(
        default=100,
        description="Lowest rating validate_elo will return",
    )
    elo_max: int = Field(
        default=3000,
        description="Highest rating validate_elo will return",
    )

    # ==========================================================================
    # Scheduling Configuration
    # ==========================================================================

    common_availability_min_minutes: int = Field(
        default=60,
        description="Shortest shared slot reported by find_common_availability",
    )
    suggested_slot_limit: int = Field(
        default=5,
        description="How many suggested time slots to return",
    )

    # ==========================================================================
    # Search Configuration
    # ==========================================================================

    recommended_player_limit: int = Field(
        default=10,
        description="Number of players returned by get_recommended_players",
    )
    nearby_player_miles: float = Field(
        default=15.0,
        description="Default radius (miles) for get_nearby_players",
    )
    nearby_court_km: float = Field(
        default=10.0,
        description="Default radius (km) for get_courts_near_location",
    )

    # ==========================================================================
    # Logging Configuration
    # ==========================================================================

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Format string passed to logging.basicConfig",
    )

    # ==========================================================================
    # Validators
    # ==========================================================================

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_v = v.upper()
        if upper_v not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return upper_v

    @model_validator(mode="after")
    def validate_elo_bounds(self) -> "Settings":
        """Ensure the rating clamp range is not empty."""
        if self.elo_min >= self.elo_max:
            raise ValueError(
                f"elo_min ({self.elo_min}) must be lower than elo_max ({self.elo_max})"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache ensures we only load settings once,
    which is important because loading from .env can be slow.
    """
    return Settings()


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging for scripts and other entry points.

    Library modules only create loggers; they never call this themselves.

    Args:
        level: Optional override for settings.log_level
    """
    current = get_settings()
    logging.basicConfig(
        level=(level or current.log_level).upper(),
        format=current.log_format,
    )


# Convenience alias for importing
settings = get_settings()
