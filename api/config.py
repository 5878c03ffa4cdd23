"""
Configuration management for SAILCAST API.
Loads environment variables and provides typed configuration.
"""
from typing import Optional
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict

from sailcast.data.open_meteo import OPEN_METEO_FORECAST, OPEN_METEO_MARINE, UpstreamConfig
from sailcast.forecast.request import (
    DEFAULT_FORECAST_DAYS,
    DEFAULT_LATITUDE,
    DEFAULT_LONGITUDE,
    MAX_FORECAST_DAYS,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # ========================================================================
    # API Configuration
    # ========================================================================
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # ========================================================================
    # Response Headers
    # ========================================================================
    cors_allow_origin: str = "*"
    cors_methods: str = "GET, OPTIONS"
    # Shared caches keep a forecast for 2 hours, then serve stale for 1 more
    cache_control: str = "s-maxage=7200, stale-while-revalidate=3600"

    # ========================================================================
    # Application Configuration
    # ========================================================================
    environment: str = "development"
    log_level: str = "info"
    debug: bool = False

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment.lower() == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development."""
        return self.environment.lower() == "development"

    # ========================================================================
    # Forecast Defaults
    # ========================================================================
    default_latitude: float = DEFAULT_LATITUDE
    default_longitude: float = DEFAULT_LONGITUDE
    default_forecast_days: int = DEFAULT_FORECAST_DAYS
    max_forecast_days: int = MAX_FORECAST_DAYS

    # ========================================================================
    # Open-Meteo Upstreams
    # ========================================================================
    weather_api_url: str = OPEN_METEO_FORECAST
    marine_api_url: str = OPEN_METEO_MARINE
    weather_model: Optional[str] = "ecmwf_ifs025"
    timezone: str = "Australia/Melbourne"
    upstream_timeout: float = 8.0  # seconds, per upstream call
    user_agent: str = "sailcast/1.0"

    def upstream_config(self) -> UpstreamConfig:
        """Build the upstream client configuration from these settings."""
        return UpstreamConfig(
            forecast_url=self.weather_api_url,
            marine_url=self.marine_api_url,
            timezone=self.timezone,
            model=self.weather_model or None,
            timeout=self.upstream_timeout,
            user_agent=self.user_agent,
        )

    # ========================================================================
    # Pydantic Settings Configuration
    # ========================================================================
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings: Application settings
    """
    return Settings()


# Convenience exports
settings = get_settings()

# Validate critical settings in production
if settings.is_production and settings.debug:
    raise ValueError("DEBUG must be false in production!")

if settings.upstream_timeout <= 0:
    raise ValueError("UPSTREAM_TIMEOUT must be positive")
