"""
Settings - Pydantic models for type-safe configuration.

This module defines all configuration settings as Pydantic models,
providing validation, type hints, and automatic environment variable loading.

Example:
    >>> from robust_web.config import Settings, load_config
    >>> settings = load_config()  # Loads from env, yaml, and defaults
    >>> print(settings.timeouts.implied)
    10.0
"""

from typing import Literal, Optional
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class TimeoutSettings(BaseModel):
    """
    Wait and timeout settings.

    Attributes:
        implied: Implied wait timeout in seconds. Bounds element re-resolution
            and is the value the session implicit wait is restored to.
        poll_interval: Delay between re-resolution attempts in seconds
    """
    implied: float = Field(default=10.0, ge=0, le=600)
    poll_interval: float = Field(default=0.5, gt=0, le=10)


class LocatorSettings(BaseModel):
    """
    Indexed-lookup settings.

    Attributes:
        index_by_xpath: Allow rewriting indexed locators into positional XPath
        index_by_css: Allow indexed lookup through the CSS locator script
    """
    index_by_xpath: bool = True
    index_by_css: bool = True


class LoggingSettings(BaseModel):
    """
    Logging configuration.

    Attributes:
        level: Log level
        format: Log format string
        file: Log file path (None for console only)
        json_format: Use JSON format for logs
    """
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file: Optional[str] = None
    json_format: bool = False


class Settings(BaseSettings):
    """
    Root settings container - single source of truth for all configuration.

    Settings are loaded in this priority order (highest to lowest):
    1. Explicit values passed to constructor
    2. Environment variables (prefixed with ROBUST_WEB__)
    3. Config file (YAML)
    4. Default values

    Example:
        >>> settings = Settings()  # Load from env vars
        >>> settings = Settings(timeouts=TimeoutSettings(implied=5))  # Override
    """

    model_config = SettingsConfigDict(
        env_prefix="ROBUST_WEB__",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    timeouts: TimeoutSettings = Field(default_factory=TimeoutSettings)
    locators: LocatorSettings = Field(default_factory=LocatorSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    def merge_with(self, overrides: dict) -> "Settings":
        """
        Create a new Settings instance with overrides applied.

        Args:
            overrides: Dictionary of values to override

        Returns:
            New Settings instance with overrides applied
        """
        current = self.model_dump()

        def deep_merge(base: dict, updates: dict) -> dict:
            for key, value in updates.items():
                if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                    deep_merge(base[key], value)
                else:
                    base[key] = value
            return base

        merged = deep_merge(current, overrides)
        return Settings(**merged)
