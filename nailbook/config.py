# nailbook/config.py

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="NAILBOOK_", env_file=".env", extra="ignore")

    database_url: str = "sqlite:///./nailbook.db"
    secret_key: str = "change-me-later"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 30

    # how far ahead clients can pick a date, and how many dates to offer
    booking_horizon_days: int = 60
    booking_target_dates: int = 30

    # this email always registers as admin; otherwise the first user does
    admin_email: Optional[str] = None

    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()
