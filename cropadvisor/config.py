"""Application settings loaded from environment variables via pydantic-settings."""

from enum import StrEnum
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from cropadvisor.models.enums import CropTypeEnum


class LogFormat(StrEnum):
    json = "json"
    console = "console"


class Settings(BaseSettings):
    """Central configuration — all values sourced from env vars or .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # ── Redis ───────────────────────────────────────────────────────────────
    redis_url: str = "redis://localhost:6379/0"
    cache_enabled: bool = True

    # ── Weather & geocoding providers ───────────────────────────────────────
    openmeteo_forecast_url: str = "https://api.open-meteo.com/v1/forecast"
    openmeteo_geocoding_url: str = "https://geocoding-api.open-meteo.com/v1/search"
    nominatim_reverse_url: str = "https://nominatim.openstreetmap.org/reverse"
    http_timeout_seconds: float = 10.0
    http_user_agent: str = "CropAdvisor/0.1"
    forecast_days: int = 6

    # ── Caching & history ───────────────────────────────────────────────────
    weather_cache_ttl_seconds: int = 30 * 60
    weather_cache_version: str = "2.0"
    analytics_history_days: int = 30
    alert_dismissal_ttl_seconds: int = 60 * 60 * 24

    # ── Advisory defaults ───────────────────────────────────────────────────
    default_crop_type: CropTypeEnum = CropTypeEnum.wheat

    # ── LLM ─────────────────────────────────────────────────────────────────
    openai_api_key: str = ""
    openai_base_url: str = "https://api.openai.com/v1"
    openai_model: str = "gpt-4o-mini"
    openai_timeout_seconds: float = 20.0
    openai_max_tokens: int = 500

    # ── Observability ───────────────────────────────────────────────────────
    log_level: str = "info"
    log_format: LogFormat = LogFormat.json


@lru_cache
def get_settings() -> Settings:
    """Singleton settings instance (cached after first call)."""
    return Settings()
