"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from race_fuel.services.layout import LayoutConfig

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    environment: str = _ENVIRONMENT
    timeline_item_height_percent: float = 8.0
    timeline_item_width: float = 180.0
    timeline_padding_seconds: int = 0
    nutrient_cache_ttl_seconds: int = 3600
    cors_allowed_origins: str | None = None

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    def layout_config(self) -> LayoutConfig:
        """Timeline geometry derived from the settings."""
        return LayoutConfig(
            item_height_percent=self.timeline_item_height_percent,
            item_width=self.timeline_item_width,
            pre_start_seconds=self.timeline_padding_seconds,
            post_end_seconds=self.timeline_padding_seconds,
        )


def parse_allowed_origins(raw: str | None) -> list[str] | None:
    """Parse allowed CORS origins from env; "*" allows any origin."""
    if raw is None:
        return None
    cleaned = raw.strip()
    if not cleaned:
        return None
    if cleaned == "*":
        return ["*"]
    origins: list[str] = []
    for chunk in cleaned.split(","):
        value = chunk.strip().rstrip("/")
        if value and value not in origins:
            origins.append(value)
    return origins or None
