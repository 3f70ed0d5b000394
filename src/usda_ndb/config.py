"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from usda_ndb.adapters.ndb_client import ENTRY_POINT

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """NDB client settings loaded from environment variables."""

    ndb_api_key: str
    ndb_entry_point: str = ENTRY_POINT
    ndb_timeout_seconds: float = 15
    ndb_debug: bool = False
    list_max_results: int = 1500
    nutrients_report_max_results: int = 10
    food_nutrients_max_results: int = 100
    search_max_results: int = 100
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
