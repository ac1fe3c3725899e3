"""Configuration management using Pydantic Settings"""

from decimal import Decimal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", env_prefix="SOLARFIN_", extra="ignore"
    )

    # Service
    service_name: str = "solarfin-projection"
    log_level: str = "INFO"

    # Projection engine
    occurrence_cap: int = 200  # Max occurrences emitted per transaction and window

    # Spending pace thresholds, relative to the same period last month
    pace_warning_ratio: Decimal = Decimal("1.3")
    pace_info_ratio: Decimal = Decimal("0.7")

    # Reminder window around today, in days
    reminder_days_before: int = 7
    reminder_days_after: int = 14


settings = Settings()
