"""
Configuration for EcoChallenge.
"""

from functools import lru_cache
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


BURN_ADDRESS = "SP000000000000000000002Q6VF78"


class Settings(BaseSettings):
    """Process settings, overridable through ECOCHALLENGE_* environment variables."""

    model_config = SettingsConfigDict(env_prefix="ECOCHALLENGE_", env_file=".env", extra="ignore")

    # Logging
    log_level: str = Field(default="INFO", description="Root log level")
    log_to_file: bool = Field(default=False, description="Write JSON logs to log_dir")
    log_dir: str = Field(default="logs", description="Directory for log files")

    # Registry
    max_challenges: int = Field(default=1000, gt=0, description="Registry capacity")
    default_creation_fee: int = Field(default=1000, ge=0, description="Initial creation fee")
    burn_address: str = Field(default=BURN_ADDRESS, description="Principal rejected as authority contract")
    legacy_not_completed_error: bool = Field(
        default=False,
        description="Report an incomplete claim as NOT_JOINED instead of NOT_COMPLETED",
    )


class ChallengeLimits(BaseModel):
    """Field limits checked when a challenge is created or updated."""

    max_name_length: int = 100
    max_description_length: int = 500
    max_location_length: int = 100
    max_grace_period: int = 30
    min_difficulty: int = 1
    max_difficulty: int = 10


@lru_cache(maxsize=1)
def get_config() -> Settings:
    """Get the cached process settings."""
    return Settings()


@lru_cache(maxsize=1)
def get_limits_config() -> ChallengeLimits:
    """Get the challenge field limits."""
    return ChallengeLimits()
