from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "patient-api"
    app_env: str = Field(
        default="production",
        validation_alias=AliasChoices("APP_ENV", "app_env"),
        description="Runtime environment: development|production.",
    )

    # Prometheus exposition. Route labels are templates only (no patient ids).
    metrics_enabled: bool = Field(
        default=True,
        validation_alias=AliasChoices("METRICS_ENABLED", "metrics_enabled"),
        description="If true, collect HTTP metrics and serve them on /metrics.",
    )

    @property
    def is_development(self) -> bool:
        return str(self.app_env).strip().lower() == "development"


@lru_cache
def get_settings() -> Settings:
    return Settings()
