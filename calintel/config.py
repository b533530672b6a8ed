"""Application settings loaded from environment variables and ``.env``."""

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # App
    app_name: str = "calendar-intel"
    app_version: str = "1.0.0"
    app_description: str = (
        "Public holiday data for scheduling agents - holidays, business days, and calendar intelligence"
    )
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    # Upstream providers
    nager_base_url: str = "https://date.nager.at/api/v3"
    wikipedia_base_url: str = "https://en.wikipedia.org/api/rest_v1"
    http_timeout_seconds: float = 30.0
    user_agent: str = "calendar-intel/1.0.0"

    # Countries sampled by the free overview entrypoint
    major_countries: List[str] = ["US", "GB", "DE", "FR", "JP", "AU", "CA", "IN", "BR", "CN"]


settings = Settings()
