from __future__ import annotations

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = "health-endpoint"
    app_env: str = "development"
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    app_log_level: str = "INFO"

    # Health endpoint
    health_path: str = "/health"
    health_details_token: str = ""  # Empty disables the details check

    # Static service metadata for the health document
    service_version: str | None = None
    service_release_id: str | None = None
    service_id: str | None = None
    service_description: str | None = None
    service_notes: list[str] = []
    service_links: dict[str, str] = {}

    # Details providers
    uptime_details_enabled: bool = True
    redis_url: str = ""  # Empty disables the Redis provider
    redis_ping_timeout: float = 1.0

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @model_validator(mode="after")
    def validate_production_secrets(self) -> Settings:
        if self.is_production and not self.health_details_token:
            raise ValueError("health_details_token must be set in production")
        if not self.health_path.startswith("/"):
            raise ValueError("health_path must start with '/'")
        return self


settings = Settings()
