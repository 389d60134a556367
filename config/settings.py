"""Application settings using Pydantic."""
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database
    database_url: str = Field(
        default="sqlite:///gigmatch.db",
        description="SQLAlchemy database URL",
    )

    # Notifications
    notification_webhook_url: Optional[str] = Field(
        default=None,
        description="Webhook that relays notifications to connected clients",
    )

    # Matching
    match_threshold: int = Field(
        default=50,
        ge=0,
        le=100,
        description="Default minimum score when browsing matched jobs",
    )
    notify_threshold: int = Field(
        default=50,
        ge=0,
        le=100,
        description="Minimum score for notifying freelancers about a new job",
    )
    page_size: int = Field(
        default=10,
        ge=1,
        description="Matched jobs per page",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Root log level",
    )
    log_file: Optional[str] = Field(
        default=None,
        description="Optional path for a rotating log file",
    )

    # Paths
    config_dir: Path = Field(
        default=Path(__file__).parent,
        description="Configuration directory",
    )

    @property
    def project_root(self) -> Path:
        """Project root directory."""
        return self.config_dir.parent


# Global settings instance
settings = Settings()
