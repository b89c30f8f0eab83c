from __future__ import annotations

import warnings
from typing import Literal

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Core
    allowed_cors_origins: str = "*"

    # Storage
    storage_backend: Literal["memory", "sql"] = "memory"
    database_url: str = "sqlite+aiosqlite:///./prompthub.db"
    seed_on_startup: bool = True
    seed_fallback_on_storage_error: bool = False
    storage_retry_attempts: int = 3

    # Auth - dev default will warn if used
    jwt_secret: str = "dev-secret"
    jwt_audience: str | None = None

    @model_validator(mode="after")
    def _warn_insecure_defaults(self) -> "Settings":
        if self.jwt_secret == "dev-secret":
            warnings.warn(
                "JWT_SECRET is using insecure default 'dev-secret'. "
                "Set JWT_SECRET environment variable for production.",
                UserWarning,
                stacklevel=2,
            )
        return self

    # LLM
    openai_api_key: str | None = None
    openai_model: str = "gpt-4o-mini"
    openai_temperature: float | None = None

    # Rate limiting
    rate_limit_ai: str = "10/minute"  # AI generation endpoints


settings = Settings()
