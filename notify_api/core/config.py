"""Application settings loaded from environment with validation."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """Notification API settings from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # Firebase Realtime Database
    rtdb_database_url: str = Field(
        default="",
        description="Explicit Realtime Database URL; wins over every derived source",
    )
    firebase_service_account_path: str = Field(
        default="firebase-service-account.json",
        min_length=1,
        description="Path to the Firebase service account JSON key",
    )
    firebase_region: str = Field(
        default="asia-southeast1",
        min_length=1,
        description="Realtime Database region used when deriving the URL from project_id",
    )
    use_in_memory_store: bool = Field(
        default=False,
        description="Keep notifications in process memory instead of Firebase (local dev)",
    )

    # GCP
    gcp_project_id: str = Field(
        default="",
        description="GCP project for Cloud Trace export (tracing disabled when empty)",
    )

    # Logging
    log_level: LogLevel = Field(default="INFO")

    # API
    cors_allow_origins: str = Field(
        default="*",
        description="Comma-separated CORS origins for browser clients",
    )
    api_version_label: str = Field(
        default="5.0 - Firebase Realtime Notification API",
        description="Version string reported by the test endpoint",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
        u = (v or "INFO").upper()
        if u not in allowed:
            raise ValueError(f"log_level must be one of {allowed}")
        return u

    def cors_origins(self) -> list[str]:
        """Return CORS origins as a list."""
        return [o.strip() for o in self.cors_allow_origins.split(",") if o.strip()] or ["*"]


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
