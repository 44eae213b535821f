"""Central settings — environment variables and .env files."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tierlink.config.constants import (
    CONFIG_FILE,
    DEFAULT_TIERS_FILE,
    ENV_FILE,
    STATE_FILE,
)


class Settings(BaseSettings):
    """Where tierlink finds its document and override file.

    Priority (highest → lowest):
      1. Environment variables (TIERLINK_ prefix)
      2. .env file
      3. Defaults defined here
    """

    model_config = SettingsConfigDict(
        env_prefix="TIERLINK_",
        env_file=(".env", str(ENV_FILE)),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    config_file: str = ""  # empty = ~/.tierlink/tiers.json, else bundled default
    state_file: str = ""  # empty = ~/.tierlink/state.json
    log_level: str = "WARNING"

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, v: object) -> str:
        """Upper-case known level names; anything else falls back to WARNING."""
        name = str(v).strip().upper()
        return name if name in logging.getLevelNamesMapping() else "WARNING"

    @property
    def tiers_path(self) -> Path:
        """Resolved tier document path."""
        if self.config_file:
            return Path(self.config_file).expanduser()
        if CONFIG_FILE.exists():
            return CONFIG_FILE
        return DEFAULT_TIERS_FILE

    @property
    def state_path(self) -> Path:
        """Resolved override file path."""
        if self.state_file:
            return Path(self.state_file).expanduser()
        return STATE_FILE


@lru_cache
def get_settings() -> Settings:
    """Singleton settings instance."""
    return Settings()
