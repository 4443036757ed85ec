from __future__ import annotations

from functools import lru_cache
from typing import Optional, Tuple

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_GEMINI_API_URL = (
    "https://generativelanguage.googleapis.com/v1beta/models/"
    "gemini-2.5-flash-preview-09-2025:generateContent"
)


def _split_csv(value: str | None) -> Tuple[str, ...]:
    if not value:
        return tuple()
    return tuple(
        part.strip()
        for part in value.split(",")
        if part.strip()
    )


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables."""

    gemini_api_key: Optional[str] = Field(None, alias="GEMINI_API_KEY")
    gemini_api_url: str = Field(DEFAULT_GEMINI_API_URL, alias="GEMINI_API_URL")
    gemini_timeout: Optional[float] = Field(None, alias="GEMINI_TIMEOUT")

    frontend_origins_raw: Optional[str] = Field(None, alias="FRONTEND_ORIGINS")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    @property
    def has_api_key(self) -> bool:
        return bool(self.gemini_api_key)

    @property
    def frontend_origins(self) -> Tuple[str, ...]:
        origins = _split_csv(self.frontend_origins_raw)
        return origins if origins else ("*",)


@lru_cache
def get_settings() -> Settings:
    """Return shared Settings instance or raise a meaningful error."""

    try:
        settings = Settings()  # type: ignore[call-arg]
    except ValidationError as exc:
        errors = ", ".join(
            f"{'.'.join(str(x) for x in err.get('loc', ())) or '?'}: {err.get('msg', 'unknown')}"
            for err in exc.errors()
        )
        raise RuntimeError(f"Invalid application configuration: {errors}") from exc
    return settings
