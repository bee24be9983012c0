"""
Configuration module - Centralized settings management.

This module provides type-safe configuration management using Pydantic,
supporting environment variables, YAML files, and explicit overrides.

Usage:
    from robust_web.config import get_settings, load_config

    # Get global settings (loaded once)
    settings = get_settings()

    # Or load fresh settings with overrides
    settings = load_config(timeouts={"implied": 5})

Environment Variables:
    ROBUST_WEB__TIMEOUTS__IMPLIED=15
    ROBUST_WEB__TIMEOUTS__POLL_INTERVAL=0.25
    ROBUST_WEB__LOCATORS__INDEX_BY_XPATH=false
"""

from robust_web.config.settings import (
    Settings,
    TimeoutSettings,
    LocatorSettings,
    LoggingSettings,
)
from robust_web.config.loader import ConfigLoader, load_config

# Global settings singleton
_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Get the global settings instance (singleton).

    Settings are loaded once from environment variables and config files.
    Call reset_settings() to reload.

    Returns:
        Global Settings instance
    """
    global _settings
    if _settings is None:
        _settings = load_config()
    return _settings


def reset_settings() -> None:
    """Reset the global settings (forces reload on next get_settings())."""
    global _settings
    _settings = None


__all__ = [
    "Settings",
    "TimeoutSettings",
    "LocatorSettings",
    "LoggingSettings",
    "ConfigLoader",
    "load_config",
    "get_settings",
    "reset_settings",
]
