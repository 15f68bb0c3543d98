"""Configuration loading for cardform.

Configuration is loaded from TOML files with environment variable overrides.

Usage:
    from cardform.config import get_settings

    settings = get_settings()
    timeout = settings.payments.request_timeout_seconds
"""

from functools import lru_cache

from cardform.config.loader import load_config
from cardform.config.settings import Settings, set_toml_config


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the singleton settings instance.

    The result is cached for the lifetime of the process.
    Call `get_settings.cache_clear()` to reload configuration.
    """
    config_dict = load_config()
    set_toml_config(config_dict)

    # pydantic-settings gives CARDFORM_* env vars priority over TOML
    return Settings()


def reload_settings() -> Settings:
    """Clear the settings cache and reload configuration."""
    get_settings.cache_clear()
    return get_settings()


__all__ = ["get_settings", "reload_settings", "Settings"]
