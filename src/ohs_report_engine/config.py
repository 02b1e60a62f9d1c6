"""Configuration management for the OHS inspection report engine.

Loads settings from environment variables and .env files using pydantic-settings.
Provides a cached singleton via get_config().
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ReportConfig(BaseSettings):
    """Application configuration sourced from environment variables."""

    inspection_api_url: str = Field(..., alias="INSPECTION_API_URL")
    inspection_api_token: str | None = Field(None, alias="INSPECTION_API_TOKEN")
    inspection_api_timeout: int = Field(30, alias="INSPECTION_API_TIMEOUT")
    inspection_api_max_retries: int = Field(3, alias="INSPECTION_API_MAX_RETRIES")
    report_storage_path: str = Field("reports/ohs-inspection", alias="REPORT_STORAGE_PATH")
    report_file_prefix: str = Field("OHS_Report", alias="REPORT_FILE_PREFIX")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_config() -> ReportConfig:
    """Return a cached singleton of ReportConfig."""
    return ReportConfig()
