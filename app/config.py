"""
Application configuration using Pydantic Settings.
"""

import os
from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings


def get_env_file() -> str:
    """Determine which env file to use based on environment."""
    env = os.getenv("APP_ENV", "development")
    if env == "production":
        return ".env.production"
    return ".env.development"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App settings
    app_name: str = "Cap Rate Calculator"
    version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"
    app_env: str = "development"

    # Default assumptions, as entered in the calculator form
    default_lease_commission: str = "3"
    default_lease_commission_years: str = "5"
    default_closing_costs: str = "5"
    default_loan_interest: str = "7.0"
    default_ltc: str = "30"
    default_capex: str = "150000"

    # Cap rate tables (percent)
    cap_rate_targets: List[float] = [9, 8, 7, 6]
    preset_cap_rates: List[float] = [6, 7, 8, 9, 10]

    class Config:
        env_file = get_env_file()
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
