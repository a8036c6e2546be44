from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Annotated, Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

# services/api/bestsellers/core/config.py -> BASE_DIR == services/api
BASE_DIR = Path(__file__).resolve().parents[2]

DEFAULT_NYT_BASE_URL = "https://api.nytimes.com/svc/books/v3"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(BASE_DIR / ".env"),
        extra="ignore",
        env_prefix="",
        case_sensitive=False,
        frozen=True,
    )

    # Environment
    env: str = Field(default="dev", validation_alias="ENV")

    # Application
    api_name: str = Field(default="bestsellers-api", validation_alias="API_NAME")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    user_agent: str = Field(default="BestSellers/0.1", validation_alias="USER_AGENT")

    # NYT Books API
    nyt_api_key: str | None = Field(default=None, validation_alias="NYT_API_KEY")
    nyt_base_url: str = Field(
        default=DEFAULT_NYT_BASE_URL, validation_alias="NYT_BASE_URL"
    )

    @field_validator("nyt_base_url", mode="before")
    @classmethod
    def strip_base_url(cls, v: Any) -> str:
        if v is None:
            return DEFAULT_NYT_BASE_URL
        if not isinstance(v, str):
            raise TypeError("NYT_BASE_URL must be a string")
        s = v.strip().rstrip("/")
        if not s:
            return DEFAULT_NYT_BASE_URL
        return s

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> str:
        if v is None:
            return "INFO"
        if not isinstance(v, str):
            raise TypeError("LOG_LEVEL must be a string")
        return v.strip().upper() or "INFO"

    # CORS
    cors_origins: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["http://localhost:3000"],
        validation_alias="CORS_ORIGINS",
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: Any) -> list[str]:
        """Accept a JSON array, a comma-separated string or ``*``."""
        if v is None:
            return []
        if isinstance(v, str):
            s = v.strip()
            if s.startswith("["):
                try:
                    v = json.loads(s)
                except json.JSONDecodeError as e:
                    raise ValueError(f"CORS_ORIGINS is not a valid JSON array: {e}")
            else:
                v = s.split(",")
        if not isinstance(v, list):
            raise TypeError("CORS_ORIGINS must be a JSON array or a comma-separated string")
        return [str(origin).strip() for origin in v if str(origin).strip()]

    # OpenTelemetry
    otel_enabled: bool = Field(default=False, validation_alias="OTEL_ENABLED")
    otel_otlp_endpoint: str = Field(
        default="http://localhost:4317",
        validation_alias="OTEL_OTLP_ENDPOINT",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
