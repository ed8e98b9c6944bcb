"""Configuration settings for the ride analytics engine."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


# __file__ = src/ride_analytics/config.py
# .parent.parent.parent = project root
PACKAGE_ROOT = Path(__file__).parent
PROJECT_ROOT = PACKAGE_ROOT.parent.parent


class Settings(BaseSettings):
    """Operating constants, overridable from the environment."""

    model_config = SettingsConfigDict(
        env_prefix="RIDE_ANALYTICS_",
        env_file=str(PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Fitness-Fatigue model time constants (days)
    ctl_time_constant: int = 42
    atl_time_constant: int = 7

    # Ramp rate
    ramp_window_days: int = 7

    # Decoupling
    decoupling_min_points: int = 20

    # Auto-session hysteresis (ticks at tick interval)
    auto_start_threshold: int = 5
    auto_stop_threshold: int = 3

    # Timer cadences (seconds)
    auto_session_tick_secs: float = 1.0
    zone_status_poll_secs: float = 1.0
    live_metrics_poll_secs: float = 0.25

    # Zone bound resolution
    top_power_zone_multiplier: float = 1.5
    default_max_hr: int = 220

    # Live sample history kept while a session is recording
    max_history: int = 600

    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
