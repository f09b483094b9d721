"""
Settings and environment management for campaign metrics.

Values are read from environment variables prefixed with ``CAMPAIGN_METRICS_``
or from a local ``.env`` file.

Usage:
    from campaign_metrics.settings import get_settings

    settings = get_settings()
    ttl = settings.cache_ttl_seconds
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        schema_path: Override for the raw insight field registry (YAML).
        config_path: Override for the metrics thresholds config (YAML).
        cache_ttl_seconds: Expiry for cached campaign snapshots.
        cache_max_entries: Bound on the number of cached keys.
        cache_key: Fixed key under which campaign snapshots are cached.
        log_level: Log level passed to setup_logging().
    """

    model_config = SettingsConfigDict(
        env_prefix="CAMPAIGN_METRICS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    schema_path: Optional[Path] = None
    config_path: Optional[Path] = None

    # One hour, matching the dashboard's campaign cache
    cache_ttl_seconds: float = 3600.0
    cache_max_entries: int = 256
    cache_key: str = "meta_campaigns"

    log_level: str = "INFO"


@lru_cache()
def get_settings() -> Settings:
    """
    Get the application settings singleton.

    To refresh settings in tests, clear the cache:
        >>> get_settings.cache_clear()
    """
    return Settings()
