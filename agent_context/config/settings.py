from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="AGENT_CONTEXT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Environment
    env: str = "local"
    log_level: str = "INFO"

    # Trimming budget
    max_messages: int = Field(default=30, ge=1)
    min_turns_to_keep: int = Field(default=2, ge=0)
    keep_recent_tool_payloads: int = Field(default=2, ge=0)  # never redacted

    # Diagnostics
    token_encoding: str = "cl100k_base"


@lru_cache
def get_settings() -> Settings:
    return Settings()
