"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    log_level: str = "info"

    # Defaults for GenerationParams
    default_format: str = "a4"
    default_margin: float = 40.0

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "ARCHSKETCH_"}


settings = Settings()
