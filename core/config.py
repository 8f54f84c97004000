"""
Application settings
Loaded from environment variables and an optional .env file
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MODEL = "gpt-4o-mini"


class AppConfig(BaseSettings):
    """Settings for the generation service and logging."""

    api_key: Optional[str] = Field(default=None, validation_alias="OPENAI_API_KEY")
    model: str = Field(default=DEFAULT_MODEL, validation_alias="INVESTSIM_MODEL")
    temperature: float = Field(default=0.2, ge=0.0, le=2.0, validation_alias="INVESTSIM_TEMPERATURE")
    max_workers: int = Field(default=1, ge=1, validation_alias="INVESTSIM_MAX_WORKERS")
    request_timeout: float = Field(default=120.0, gt=0, validation_alias="INVESTSIM_REQUEST_TIMEOUT")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    @classmethod
    def load(cls, env_file: Optional[str] = ".env") -> "AppConfig":
        return cls(_env_file=env_file)
