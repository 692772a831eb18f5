"""Configuration management for Smart Settle."""

from decimal import Decimal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError
from .settlement import DUST_THRESHOLD_MINOR_UNITS, SETTLEMENT_TOLERANCE


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SMART_SETTLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Display currency for ledgers that don't name one
    currency: str = "INR"

    # Settlement policy
    dust_threshold_minor_units: int = Field(default=DUST_THRESHOLD_MINOR_UNITS, ge=1)
    settlement_tolerance: Decimal = Field(default=SETTLEMENT_TOLERANCE, gt=0)

    # Re-check every computed plan against its balances
    verify_plans: bool = False


def load_settings() -> Settings:
    """Load application settings from environment variables."""
    try:
        return Settings()
    except Exception as e:
        raise ConfigurationError(
            f"Failed to load settings. Check the SMART_SETTLE_* environment "
            f"variables and your .env file.\n"
            f"Error: {e}"
        ) from e
