from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables or .env files."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="CHANGEFEED_",
        case_sensitive=False,
        extra="ignore",
    )

    debug: bool = False

    database_url: str = "sqlite+aiosqlite:///./changefeed.db"

    # Applied to newly registered containers that carry no retention of their own
    default_log_retention_minutes: int | None = None

    # Indentation used when rendering container documents; None means compact output
    json_indent: int | None = None

    @field_validator("default_log_retention_minutes", mode="before")
    @classmethod
    def _parse_default_retention(cls, value: int | str | None) -> int | None:
        if value in (None, ""):
            return None
        try:
            numeric = int(value)
        except (TypeError, ValueError):
            return None
        if numeric < 0:
            raise ValueError("default_log_retention_minutes must be zero or positive")
        return numeric

    @field_validator("json_indent", mode="before")
    @classmethod
    def _parse_indent(cls, value: int | str | None) -> int | None:
        if value in (None, ""):
            return None
        try:
            numeric = int(value)
        except (TypeError, ValueError):
            return None
        return max(0, numeric)


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""
    return Settings()


settings = get_settings()
