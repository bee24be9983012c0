"""
Exceptions module - Custom exception hierarchy.

This module defines the exceptions raised by robust-web itself. Staleness
and timeouts are reported with Selenium's own exception types
(``StaleElementReferenceException``, ``TimeoutException``), which are
re-exported here for convenience.
"""

from selenium.common.exceptions import (
    StaleElementReferenceException,
    TimeoutException,
)

from robust_web.exceptions.base import (
    RobustWebError,
    ConfigurationError,
    InvalidArgumentError,
)
from robust_web.exceptions.element import ElementNotFoundError

__all__ = [
    # Base exceptions
    "RobustWebError",
    "ConfigurationError",
    "InvalidArgumentError",
    # Element exceptions
    "ElementNotFoundError",
    # Selenium exceptions surfaced by the core
    "StaleElementReferenceException",
    "TimeoutException",
]
