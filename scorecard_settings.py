"""Scorecard settings loaded from environment variables."""

from __future__ import annotations

from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Defaults for the scorecard form."""

    model_config = {"env_prefix": "SCORECARD_", "env_file": ".env", "env_file_encoding": "utf-8"}

    # Scoring configuration preselected in the form
    mode: Literal["sliding", "step"] = "sliding"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value):
        return value.strip().upper() if isinstance(value, str) else value


def get_settings() -> Settings:
    """Create and return a Settings instance."""
    return Settings()
