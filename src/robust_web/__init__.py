"""
robust-web - Self-healing Selenium element references.

This package wraps Selenium WebElement references in proxies that remember
how each element was found and transparently find it again when a page
re-render makes the original reference stale.

Example:
    >>> from robust_web import get_element, get_elements
    >>> rows = get_elements(driver, (By.CSS_SELECTOR, "table tr"))
    >>> rows[2].click()
"""

__version__ = "0.1.0"

# Public API exports
from robust_web.config.settings import Settings
from robust_web.core.driver_context import DriverContext
from robust_web.core.locators import Locator, Strategy
from robust_web.core.robust_element import RobustWebElement, get_element, get_elements
from robust_web.exceptions import ElementNotFoundError, InvalidArgumentError, RobustWebError

__all__ = [
    "RobustWebElement",
    "get_element",
    "get_elements",
    "DriverContext",
    "Locator",
    "Strategy",
    "Settings",
    "RobustWebError",
    "ElementNotFoundError",
    "InvalidArgumentError",
    "__version__",
]
