"""Centralized configuration management for equipHelper."""
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import AnyHttpUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    model_config = SettingsConfigDict(
        env_file=Path(__file__).resolve().parent.parent / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field(default="equipHelper")
    environment: str = Field(default="development")
    version: str = Field(default="0.1.0")

    # Model + provider credentials
    openai_api_key: str = Field(default="", repr=False)
    gemini_api_key: str = Field(default="", repr=False)
    groq_api_key: str = Field(default="", repr=False)
    llm_model: str = Field(default="gpt-4o")
    gemini_model: str = Field(default="gemini-2.5-flash")
    groq_model: str = Field(default="llama-3.1-70b-versatile")
    llm_temperature: float = Field(default=0.1, ge=0.0, le=2.0)

    # Equipment reference data
    equipment_data_urls: List[str] = Field(
        default_factory=lambda: ["https://eca-2.vercel.app/docs/newdata.json"]
    )
    context_max_chars: int = Field(default=10000, gt=0)

    # Deadlines for external calls, in seconds
    fetch_timeout_seconds: float = Field(default=15.0, gt=0)
    llm_timeout_seconds: float = Field(default=60.0, gt=0)

    # Session transcripts never expire unless a TTL is set
    transcript_ttl_seconds: Optional[float] = Field(default=None, gt=0)

    # Monitoring
    langsmith_api_key: str = Field(default="", repr=False)
    langsmith_project: str = Field(default="equiphelper")
    sentry_dsn: str = Field(default="", repr=False)

    allowed_origins: List[AnyHttpUrl] = Field(default_factory=list)

    # Chat page
    answer_service_url: str = Field(default="http://localhost:8000")
    history_dir: Path = Field(default=Path.home() / ".equiphelper")
    export_filename: str = Field(default="equipHelper_Chat_History.pdf")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance to avoid reparsing the .env file."""
    return Settings()


settings = get_settings()
