"""Application settings."""

from __future__ import annotations

import json
from datetime import timedelta
from functools import cached_property
from pathlib import Path
from typing import Annotated, Literal

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration entrypoint for the FastAPI application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Environment
    environment: Literal["development", "staging", "production"] = "development"

    # Server
    allowed_origins: Annotated[list[str], NoDecode] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # Observability
    log_level: str = "INFO"
    metrics_username: str = "prometheus"
    metrics_password: str | None = None

    # Database
    database_url: str = Field(
        default="sqlite:///./data/landing.db",
        validation_alias=AliasChoices("DATABASE_URL"),
    )
    db_echo: bool = Field(
        default=False,
        validation_alias=AliasChoices("DB_ECHO", "SQL_ECHO"),
    )

    # Email
    email_enabled: bool = True
    email_smtp_host: str = "localhost"
    email_smtp_port: int = 587
    email_smtp_username: str | None = None
    email_smtp_password: str | None = None
    email_smtp_ssl: bool | None = None  # None: implicit TLS only on port 465
    email_smtp_starttls: bool = True
    email_from_name: str = "Website"
    email_from_addr: str = "no-reply@example.com"
    email_admin_addr: str = Field(
        default="admin@example.com",
        validation_alias=AliasChoices("EMAIL_ADMIN_ADDR", "ADMIN_EMAIL"),
    )
    site_name: str = "Your Company Name"

    # Contact form rate limiting
    contact_rate_limit_max_requests: int = Field(default=5, ge=1)
    contact_rate_limit_window_seconds: int = Field(default=3600, ge=1)

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def parse_allowed_origins(cls, value: str | list[str] | None) -> list[str]:
        """Normalize ALLOWED_ORIGINS env input into a list."""
        if isinstance(value, list):
            return value
        if isinstance(value, str):
            raw = value.strip()
            if not raw:
                return []
            if raw.startswith("["):
                try:
                    parsed = json.loads(raw)
                    if isinstance(parsed, list):
                        return parsed
                except json.JSONDecodeError:
                    pass
            return [item.strip() for item in raw.split(",") if item.strip()]
        return []

    @property
    def is_production(self) -> bool:
        """Return True when running in production."""
        return self.environment == "production"

    @property
    def smtp_implicit_tls(self) -> bool:
        """Whether to open the SMTP connection with implicit TLS."""
        if self.email_smtp_ssl is not None:
            return self.email_smtp_ssl
        return self.email_smtp_port == 465

    @property
    def contact_rate_limit_window(self) -> timedelta:
        return timedelta(seconds=self.contact_rate_limit_window_seconds)

    @cached_property
    def resolved_database_url(self) -> str:
        """Return the SQLAlchemy URL, creating the SQLite parent dir if needed."""
        url = self.database_url
        if url.startswith("sqlite:///") and not url.startswith("sqlite:///:memory:"):
            Path(url.removeprefix("sqlite:///")).parent.mkdir(
                parents=True, exist_ok=True
            )
        return url


settings = Settings()
