from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    stack_depth: int = Field(default=32, ge=1, le=1024)
    json_indent: int | None = Field(default=None, ge=0)

    @field_validator("json_indent", mode="before")
    @classmethod
    def _parse_json_indent(cls, v: int | str | None) -> int | str | None:
        if v == "":
            return None
        return v

    model_config = SettingsConfigDict(
        env_prefix="ERRKIT_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return process-wide settings read from the environment."""

    return Settings()
