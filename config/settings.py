from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Core
    ENVIRONMENT: str = Field(default="production")
    SERVICE_NAME: str = Field(default="compliance-api")
    LOG_LEVEL: str = Field(default="INFO")

    # Request caps (fail-closed). Scans and batches beyond these are rejected at the API edge.
    MAX_SCAN_LENGTH: int = Field(default=512)
    MAX_ITEMS_PER_BATCH: int = Field(default=500)

    # Export
    EXPORT_DATE_FORMAT: str = Field(default="%m/%d/%Y")


settings = Settings()
