"""
Search Context Interface - Contract for objects that can be searched for elements.

A search context is anything element lookups can be scoped to: the session
root (a WebDriver) or an element acting as a sub-root. Besides exposing the
native object that runs find operations, a context can re-acquire itself
when the remote session reports it stale.

Example:
    >>> context = DriverContext(driver)
    >>> context.wrapped_context.find_elements(By.CSS_SELECTOR, ".item")
"""

from abc import ABC, abstractmethod
from typing import Any


class ISearchContext(ABC):
    """
    Abstract interface for element search contexts.

    Implementations wrap a native Selenium search context (``WebDriver``,
    ``WebElement`` or ``ShadowRoot``) and know how to refresh it.
    """

    @property
    @abstractmethod
    def wrapped_context(self) -> Any:
        """
        Get the native search context.

        Returns:
            Object exposing ``find_element`` / ``find_elements``
        """
        ...

    @property
    @abstractmethod
    def wrapped_driver(self) -> Any:
        """
        Get the WebDriver session this context belongs to.

        Returns:
            The session's WebDriver
        """
        ...

    @abstractmethod
    def refresh_context(self) -> "ISearchContext":
        """
        Re-acquire this context after it has gone stale.

        Returns:
            This context, with a valid native search context
        """
        ...
