"""
Driver Context - Session-root search context and driver lookup helpers.
"""

from typing import Any

from robust_web.exceptions import InvalidArgumentError
from robust_web.interfaces.context import ISearchContext


class DriverContext(ISearchContext):
    """
    Search context for the root of a WebDriver session.

    The session root never goes stale, so refreshing it is a no-op.

    Example:
        >>> context = DriverContext(driver)
        >>> rows = get_elements(context, (By.CSS_SELECTOR, "tr"))
    """

    def __init__(self, driver: Any):
        if driver is None:
            raise InvalidArgumentError("Driver cannot be None", argument="driver")
        self._driver = driver

    @property
    def wrapped_context(self) -> Any:
        return self._driver

    @property
    def wrapped_driver(self) -> Any:
        return self._driver

    def refresh_context(self) -> "DriverContext":
        return self

    def __repr__(self) -> str:
        return f"DriverContext({self._driver!r})"


def as_search_context(context: Any) -> ISearchContext:
    """
    Coerce a driver or search context into an ISearchContext.

    Args:
        context: An ISearchContext (including robust elements) or a WebDriver

    Returns:
        The context as an ISearchContext

    Raises:
        InvalidArgumentError: If context is None or cannot be refreshed
    """
    if context is None:
        raise InvalidArgumentError("Context cannot be None", argument="context")
    if isinstance(context, ISearchContext):
        return context
    if hasattr(context, "execute_script"):
        return DriverContext(context)
    raise InvalidArgumentError(
        f"Unsupported search context {type(context).__name__}; "
        "wrap raw elements in a RobustWebElement",
        argument="context",
    )


def get_driver(context: Any) -> Any:
    """
    Get the WebDriver behind a search context.

    Args:
        context: WebDriver, WebElement, ShadowRoot, or ISearchContext

    Returns:
        The session's WebDriver

    Raises:
        InvalidArgumentError: If no driver can be found
    """
    if isinstance(context, ISearchContext):
        return context.wrapped_driver
    if hasattr(context, "execute_script"):
        return context
    # WebElement.parent / ShadowRoot.session hold the driver
    for attribute in ("parent", "session"):
        driver = getattr(context, attribute, None)
        if driver is not None and hasattr(driver, "execute_script"):
            return driver
    raise InvalidArgumentError(
        f"Cannot determine the driver for {type(context).__name__}",
        argument="context",
    )
