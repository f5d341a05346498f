"""Application configuration helpers."""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.spoonacular.com/food/restaurants/search"
GEOLOCATION_PROVIDERS = {"ip", "fixed", "none"}


class ConfigError(RuntimeError):
    """Raised when an environment value cannot be parsed."""


@dataclass(frozen=True)
class Settings:
    spoonacular_api_key: str
    spoonacular_base_url: str = DEFAULT_BASE_URL
    geolocation_provider: str = "ip"
    default_latitude: Optional[float] = None
    default_longitude: Optional[float] = None
    fetch_timeout: Optional[float] = None
    port: int = 8080


def _get_float_env(name: str) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from exc


def _get_int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from exc


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from environment variables with sensible defaults."""
    load_dotenv()

    # VITE_APP_API_KEY is what the front-end .env files already carry.
    api_key = os.getenv("SPOONACULAR_API_KEY") or os.getenv("VITE_APP_API_KEY", "")
    base_url = os.getenv("SPOONACULAR_BASE_URL") or DEFAULT_BASE_URL
    provider = os.getenv("GEOLOCATION_PROVIDER", "ip").strip().lower()
    default_latitude = _get_float_env("DEFAULT_LATITUDE")
    default_longitude = _get_float_env("DEFAULT_LONGITUDE")
    fetch_timeout = _get_float_env("FETCH_TIMEOUT_SECONDS")
    port = _get_int_env("PORT", 8080)

    if fetch_timeout is not None and fetch_timeout <= 0:
        raise ConfigError(f"FETCH_TIMEOUT_SECONDS must be positive, got {fetch_timeout}")
    if provider not in GEOLOCATION_PROVIDERS:
        raise ConfigError(
            f"GEOLOCATION_PROVIDER must be one of {', '.join(sorted(GEOLOCATION_PROVIDERS))}, got {provider!r}"
        )
    if provider == "fixed" and (default_latitude is None or default_longitude is None):
        logger.warning("GEOLOCATION_PROVIDER=fixed needs DEFAULT_LATITUDE and DEFAULT_LONGITUDE; geolocation disabled.")
        provider = "none"
    if not api_key:
        logger.warning("SPOONACULAR_API_KEY is not configured; restaurant searches will fail.")

    return Settings(
        spoonacular_api_key=api_key,
        spoonacular_base_url=base_url,
        geolocation_provider=provider,
        default_latitude=default_latitude,
        default_longitude=default_longitude,
        fetch_timeout=fetch_timeout,
        port=port,
    )
