"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_password: str
    session_secret: str
    server_address: str
    api_key: str
    email_domain: str = "mobilevicon.polri.go.id"
    session_max_age_seconds: int = 24 * 60 * 60
    session_https_only: bool = False
    request_timeout_seconds: float = 15.0
    log_level: str = "INFO"
    page_size: int = 10
    typeahead_limit: int = 10
    port: int = 3000
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def users_api_url(self) -> str:
        """Base URL of the TrueConf users API."""
        return f"{self.server_address.rstrip('/')}/api/v3/users"
