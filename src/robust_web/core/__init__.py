"""
Core module - Robust element references and the pieces they are built on.
"""

from robust_web.core.driver_context import DriverContext, as_search_context, get_driver
from robust_web.core.locators import (
    Locator,
    Resolution,
    SessionCapabilities,
    Strategy,
    classify,
    css_locator_for,
    xpath_locator_for,
)
from robust_web.core.robust_element import RobustWebElement, get_element, get_elements
from robust_web.core.scripts import (
    LOCATE_BY_CSS_JS,
    LOCATE_BY_XPATH_JS,
    locate_by_css,
    locate_by_xpath,
)
from robust_web.core.wait import SearchContextWait

__all__ = [
    # Robust elements
    "RobustWebElement",
    "get_element",
    "get_elements",
    # Search contexts
    "DriverContext",
    "as_search_context",
    "get_driver",
    "SearchContextWait",
    # Locators
    "Locator",
    "Resolution",
    "SessionCapabilities",
    "Strategy",
    "classify",
    "css_locator_for",
    "xpath_locator_for",
    # Locator scripts
    "LOCATE_BY_CSS_JS",
    "LOCATE_BY_XPATH_JS",
    "locate_by_css",
    "locate_by_xpath",
]
