"""MeetScribe configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    environment: str = "development"

    # OpenAI
    openai_api_key: str = ""
    summarization_model: str = "gpt-4o-mini"
    summarization_temperature: float = 0.3
    summarization_max_tokens: int = 2000

    # SMTP (SMTP_USER/SMTP_PASS take precedence over EMAIL_USER/EMAIL_PASS)
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587
    smtp_user: str = Field(
        default="", validation_alias=AliasChoices("smtp_user", "email_user")
    )
    smtp_pass: str = Field(
        default="", validation_alias=AliasChoices("smtp_pass", "email_pass")
    )
    smtp_use_tls: bool = True
    email_from_name: str = "AI Meeting Summarizer"

    # Uploads
    max_upload_bytes: int = 10 * 1024 * 1024

    # Storage
    store_backend: Literal["memory", "database"] = "memory"
    database_url: str = "sqlite+aiosqlite:///./meetscribe.db"

    # Client
    api_base_url: str = "http://localhost:8000/api"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def smtp_configured(self) -> bool:
        """Check if SMTP credentials are present."""
        return bool(self.smtp_user and self.smtp_pass)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
