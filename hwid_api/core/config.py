"""
Application configuration settings.

Central configuration module using Pydantic BaseSettings with environment variable support.
Loads from .env file and environment variables.
"""
import json
from functools import lru_cache
from pathlib import Path
from typing import List, Union

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file if it exists (python-dotenv)
env_path = Path(".env")
if env_path.exists():
    load_dotenv(dotenv_path=env_path)


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # App settings
    APP_NAME: str = "HWID API Service"
    APP_ENV: str = Field(default="local")
    DEBUG: bool = Field(default=False)

    # Server bind settings (used by `python -m hwid_api`)
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=3000, description="HTTP port to listen on")

    # CORS settings
    CORS_ORIGINS: Union[str, List[str]] = Field(default='["*"]')

    @field_validator("CORS_ORIGINS")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS_ORIGINS from string or list."""
        if isinstance(v, str):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                # If not JSON, treat as comma-separated
                return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    # Logging
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    LOG_DIR: str = Field(
        default="logs",
        description="Directory for the rotating log file. Empty string disables file logging.",
    )

    # Credential policy
    ALLOW_KEY_PATCH: bool = Field(
        default=False,
        description=(
            "Allow PATCH bodies to replace a credential's API key. "
            "Uniqueness is still enforced when enabled."
        ),
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
