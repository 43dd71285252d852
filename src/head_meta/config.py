from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    scheme: str = Field(default="https", alias="HEAD_META_SCHEME")
    timeout_s: float = Field(default=10.0, gt=0, alias="HEAD_META_TIMEOUT_S")
    user_agent: str = Field(default="head-meta", alias="HEAD_META_USER_AGENT")
    # None lets the transport decide chunk boundaries.
    chunk_size: int | None = Field(default=None, gt=0, alias="HEAD_META_CHUNK_SIZE")


def load_settings() -> Settings:
    return Settings()
