"""
Configuration Management for Barber Empire

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The engine itself takes plain arguments; the service layer reads these
settings and passes the values in, so the computation stays pure.
"""

from datetime import datetime, tzinfo
from functools import lru_cache
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dateutil import tz as dateutil_tz
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineSettings(BaseSettings):
    """Fixed assumptions used by the goal projector and price simulator."""

    model_config = SettingsConfigDict(
        env_prefix="ENGINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    average_unit_price: float = Field(
        default=35.0,
        gt=0,
        description="Reference price of one service (one haircut)"
    )
    assumed_daily_volume: int = Field(
        default=5,
        ge=0,
        description="Services per day assumed by the price simulator"
    )
    working_days_per_year: int = Field(
        default=260,
        ge=0,
        le=366,
        description="Working days per year assumed by the price simulator"
    )
    simulator_max_increment: int = Field(
        default=20,
        ge=0,
        description="Upper bound of the price-raise slider"
    )


class StorageSettings(BaseSettings):
    """Local JSON storage configuration."""

    model_config = SettingsConfigDict(
        env_prefix="STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    data_path: str = Field(
        default="barber_empire_data.json",
        description="Path of the JSON file holding the ledger record"
    )
    record_key: str = Field(
        default="barber_empire_data",
        min_length=1,
        description="Name of the record inside the JSON file"
    )


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        description="Minimum level for local structured logs"
    )

    # Calendar
    timezone: Optional[str] = Field(
        default=None,
        description="IANA timezone for day/week/month boundaries (default: system local)"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalise and check the log level name."""
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator('timezone')
    @classmethod
    def validate_timezone(cls, v: Optional[str]) -> Optional[str]:
        """Reject timezone names the zoneinfo database does not know."""
        if v is None or not v.strip():
            return None
        try:
            ZoneInfo(v.strip())
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown timezone: {v}")
        return v.strip()

    @property
    def tz(self) -> tzinfo:
        """
        Configured timezone, or the system local zone.

        Both follow DST: the UTC offset is looked up per instant, so day and
        period boundaries stay on local midnight across a clock change.
        """
        if self.timezone:
            return ZoneInfo(self.timezone)
        return dateutil_tz.tzlocal()

    def local_now(self) -> datetime:
        """Current time as an aware datetime in the configured zone."""
        return datetime.now(self.tz)


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Sub-settings are loaded lazily to allow partial configuration

    @property
    def engine(self) -> EngineSettings:
        return EngineSettings()

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, with a
    `<name>_error` entry describing each failure.
    """
    results = {}

    settings = get_settings()

    for name in ("engine", "storage", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
