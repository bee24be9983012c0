"""
Element-related exceptions.
"""

from typing import Any, Optional

from selenium.common.exceptions import NoSuchElementException

from robust_web.exceptions.base import RobustWebError


class ElementNotFoundError(RobustWebError, NoSuchElementException):
    """
    No element matches at the required locator/index.

    Also a Selenium ``NoSuchElementException``, so code (and waits) that
    handle the driver's own not-found condition handle this one too.

    Attributes:
        locator: The (by, value) locator that was searched
        index: The required match index, if any
    """

    def __init__(self, message: str, locator: Any = None, index: Optional[int] = None):
        super().__init__(message, {"locator": locator, "index": index})
        self.locator = locator
        self.index = index
