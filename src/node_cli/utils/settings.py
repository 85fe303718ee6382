"""
Environment-driven settings.

Priority hierarchy:
1. Environment variables (``NODE_CLI_*``)
2. .env file (local development)
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class NodeSettings(BaseSettings):
    """Pydantic-based settings read from the process environment."""

    model_config = SettingsConfigDict(
        env_prefix="NODE_CLI_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Path of the YAML defaults file
    config: Optional[str] = Field(default=None)

    # Log filter pattern, e.g. "info,sync=debug"
    log: Optional[str] = Field(default=None)

    base_path: Optional[Path] = Field(default=None)

    @field_validator("config", "log", "base_path", mode="before")
    @classmethod
    def empty_as_unset(cls, v):
        """Treat empty strings as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v
