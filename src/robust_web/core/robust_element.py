"""
Robust Web Element - Self-healing proxy for Selenium WebElement references.

A RobustWebElement remembers how it was found (search context, locator and
match index) instead of only holding the element reference the driver
returned. When the page mutates and the driver reports the reference stale,
the element is found again and the failed operation is retried once, so
callers see the same result they would have seen without the mutation.

Index modes:
    - ``n >= 0``: the (n+1)-th match is required
    - ``RobustWebElement.FIRST``: the first match is required
    - ``RobustWebElement.OPTIONAL``: the element may be absent; check with
      ``has_reference()``. Operations on an absent optional element raise
      ``ElementNotFoundError`` and ``wrapped_element`` returns None.

Example:
    >>> items = get_elements(driver, (By.CSS_SELECTOR, ".item"))
    >>> items[1].text  # re-resolves the 2nd match if the list re-rendered
    >>> banner = get_element(driver, (By.ID, "promo"), RobustWebElement.OPTIONAL)
    >>> if banner.has_reference():
    ...     banner.click()
"""

from typing import Any, Callable, Dict, List, Optional, TypeVar, TYPE_CHECKING
import logging

from selenium.common.exceptions import (
    NoSuchElementException,
    StaleElementReferenceException,
    TimeoutException,
)
from selenium.webdriver.common.by import By
from selenium.webdriver.remote.webelement import WebElement

from robust_web.config import get_settings
from robust_web.core.driver_context import as_search_context, get_driver
from robust_web.core.locators import (
    Locator,
    LocatorLike,
    SessionCapabilities,
    Strategy,
    classify,
    to_locator,
)
from robust_web.core.scripts import locate_by_css, locate_by_xpath
from robust_web.core.wait import SearchContextWait
from robust_web.exceptions import ElementNotFoundError, InvalidArgumentError
from robust_web.interfaces.context import ISearchContext

if TYPE_CHECKING:
    from robust_web.config.settings import Settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RobustWebElement(ISearchContext):
    """
    WebElement proxy that re-acquires its reference when it goes stale.

    Every operation runs against the current reference; on
    ``StaleElementReferenceException`` the reference is re-resolved (polling
    up to the implied timeout) and the operation is retried exactly once.
    If re-resolution fails, the original staleness exception is raised.

    The element is also a search context, so nested lookups through
    ``find_element`` / ``find_elements`` return robust elements that can
    recover when this element goes stale.

    Attributes:
        FIRST: Index value for "first match"
        OPTIONAL: Index value for "first match, which may not exist"
    """

    FIRST = -1
    OPTIONAL = -2

    def __init__(
        self,
        context: Any,
        locator: LocatorLike,
        index: int = FIRST,
        element: Optional[Any] = None,
        settings: Optional["Settings"] = None,
    ):
        """
        Initialize the robust element.

        Args:
            context: Search context (ISearchContext, RobustWebElement or WebDriver)
            locator: ``(by, value)`` element locator
            index: Match index, FIRST or OPTIONAL
            element: Already-acquired reference to wrap (may be None); a
                RobustWebElement here is unwrapped and its context, locator
                and index are used instead of the other arguments
            settings: Settings to use; defaults to the global settings

        Raises:
            InvalidArgumentError: If context or locator is missing or index is invalid
        """
        if isinstance(element, RobustWebElement):
            robust = element
            element = robust._wrapped
            context = robust._context
            locator = robust._base_locator
            index = robust._index

        if context is None:
            raise InvalidArgumentError("Context cannot be None", argument="context")
        locator = to_locator(locator)
        if isinstance(index, bool) or not isinstance(index, int) or index < self.OPTIONAL:
            raise InvalidArgumentError(f"Specified index is invalid: {index!r}", argument="index")

        settings = settings or get_settings()
        self._settings = settings
        self._timeouts = settings.timeouts
        self._context = as_search_context(context)
        self._driver = get_driver(self._context)
        self._base_locator = locator
        self._index = index
        self._wrapped: Optional[WebElement] = element

        capabilities = SessionCapabilities.for_driver(self._driver, settings.locators)
        resolution = classify(locator, index, capabilities)
        self._strategy = resolution.strategy
        self._locator = resolution.locator
        self._selector = resolution.selector
        logger.debug(f"{self!r} will resolve with strategy {self._strategy.value}")

        if element is None:
            if index == self.OPTIONAL:
                self._acquire_reference()
            else:
                self._refresh_reference(None)

    # ==================== Accessors ====================

    @property
    def context(self) -> ISearchContext:
        """Get the search context for this element."""
        return self._context

    @property
    def locator(self) -> Locator:
        """Get the locator used to resolve this element (rewritten for INDEXED_PATH)."""
        return self._locator

    @property
    def index(self) -> int:
        """Get the element index (FIRST = first match; OPTIONAL = optional element)."""
        return self._index

    @property
    def strategy(self) -> Strategy:
        """Get the resolution strategy chosen at construction."""
        return self._strategy

    @property
    def selector(self) -> Optional[str]:
        """Get the XPath/CSS selector used by the indexed strategies."""
        return self._selector

    @property
    def wrapped_element(self) -> Optional[WebElement]:
        """
        Get the wrapped element reference, resolving it if needed.

        Returns:
            The live WebElement, or None for an absent optional element
        """
        if self._wrapped is None:
            self._refresh_reference(None)
        return self._wrapped

    def has_reference(self) -> bool:
        """
        Determine if this robust element wraps a valid reference.

        An optional element without a reference gets one lookup attempt
        before answering. Other elements always have (or fail to get) one.

        Returns:
            True if a reference was acquired; otherwise False
        """
        if self._index == self.OPTIONAL and self._wrapped is None:
            self._acquire_reference()
            return self._wrapped is not None
        return True

    # ==================== Search context ====================

    @property
    def wrapped_context(self) -> WebElement:
        return self._element()

    @property
    def wrapped_driver(self) -> Any:
        return self._driver

    def refresh_context(self) -> "RobustWebElement":
        return self._refresh_reference(None)

    def find_element(self, by: str = By.ID, value: Optional[str] = None) -> "RobustWebElement":
        """Find the first matching element within this element."""
        return get_element(self, (by, value), settings=self._settings)

    def find_elements(self, by: str = By.ID, value: Optional[str] = None) -> List["RobustWebElement"]:
        """Find all matching elements within this element."""
        return get_elements(self, (by, value), settings=self._settings)

    # ==================== WebElement surface ====================

    @property
    def id(self) -> str:
        return self._element().id

    @property
    def parent(self) -> Any:
        return self._driver

    @property
    def tag_name(self) -> str:
        return self._invoke(lambda element: element.tag_name)

    @property
    def text(self) -> str:
        return self._invoke(lambda element: element.text)

    @property
    def location(self) -> Dict[str, int]:
        return self._invoke(lambda element: element.location)

    @property
    def location_once_scrolled_into_view(self) -> Dict[str, int]:
        return self._invoke(lambda element: element.location_once_scrolled_into_view)

    @property
    def size(self) -> Dict[str, int]:
        return self._invoke(lambda element: element.size)

    @property
    def rect(self) -> Dict[str, Any]:
        return self._invoke(lambda element: element.rect)

    @property
    def aria_role(self) -> str:
        return self._invoke(lambda element: element.aria_role)

    @property
    def accessible_name(self) -> str:
        return self._invoke(lambda element: element.accessible_name)

    @property
    def shadow_root(self) -> Any:
        return self._invoke(lambda element: element.shadow_root)

    @property
    def screenshot_as_base64(self) -> str:
        return self._invoke(lambda element: element.screenshot_as_base64)

    @property
    def screenshot_as_png(self) -> bytes:
        return self._invoke(lambda element: element.screenshot_as_png)

    def screenshot(self, filename: str) -> bool:
        return self._invoke(lambda element: element.screenshot(filename))

    def get_attribute(self, name: str) -> Optional[str]:
        return self._invoke(lambda element: element.get_attribute(name))

    def get_dom_attribute(self, name: str) -> Optional[str]:
        return self._invoke(lambda element: element.get_dom_attribute(name))

    def get_property(self, name: str) -> Any:
        return self._invoke(lambda element: element.get_property(name))

    def value_of_css_property(self, property_name: str) -> str:
        return self._invoke(lambda element: element.value_of_css_property(property_name))

    def is_displayed(self) -> bool:
        return self._invoke(lambda element: element.is_displayed())

    def is_enabled(self) -> bool:
        return self._invoke(lambda element: element.is_enabled())

    def is_selected(self) -> bool:
        return self._invoke(lambda element: element.is_selected())

    def click(self) -> None:
        self._invoke(lambda element: element.click())

    def clear(self) -> None:
        self._invoke(lambda element: element.clear())

    def submit(self) -> None:
        self._invoke(lambda element: element.submit())

    def send_keys(self, *value: str) -> None:
        self._invoke(lambda element: element.send_keys(*value))

    # ==================== Reference management ====================

    def _element(self) -> WebElement:
        element = self.wrapped_element
        if element is None:
            raise ElementNotFoundError(
                f"Optional element is not present: {self._locator}",
                locator=self._locator,
                index=self._index,
            )
        return element

    def _invoke(self, operation: Callable[[WebElement], T]) -> T:
        """Run an operation, re-resolving and retrying once if the reference is stale."""
        try:
            return operation(self._element())
        except StaleElementReferenceException as e:
            logger.debug(f"Reference for {self!r} is stale; re-resolving")
            return operation(self._refresh_reference(e)._element())

    def _refresh_reference(
        self,
        error: Optional[StaleElementReferenceException],
    ) -> "RobustWebElement":
        """
        Re-resolve the wrapped reference, polling up to the implied timeout.

        Args:
            error: Staleness failure that triggered the refresh, if any

        Returns:
            This element, with a refreshed reference

        Raises:
            StaleElementReferenceException: ``error`` itself, if given and
                the refresh failed
        """
        self._wrapped = None
        wait = SearchContextWait(
            self._context,
            self._timeouts.implied,
            poll_frequency=self._timeouts.poll_interval,
        )
        try:
            wait.until(self._refresh_attempt, message=f"reference for {self!r} to be refreshed")
            return self
        except Exception as e:
            if error is not None:
                logger.warning(f"Could not refresh {self!r} ({e!r}); raising original failure")
                raise error from e
            if isinstance(e, TimeoutException) and e.__cause__ is not None:
                raise e.__cause__ from None
            raise

    def _refresh_attempt(self, context: ISearchContext) -> "RobustWebElement":
        try:
            return self._acquire_reference()
        except StaleElementReferenceException:
            logger.debug(f"Search context of {self!r} is stale; refreshing it first")
            context.refresh_context()
            return self._acquire_reference()

    def _acquire_reference(self) -> "RobustWebElement":
        """
        Make a single attempt to resolve the wrapped reference.

        Returns:
            This element (with an empty reference for an absent optional element)

        Raises:
            NoSuchElementException: If a required element was not found
        """
        context = self._context.wrapped_context

        if self._strategy is Strategy.INDEXED_SCRIPT_SELECTOR:
            self._wrapped = locate_by_css(self._driver, context, self._selector, self._index)
        elif self._strategy is Strategy.INDEXED_PATH:
            self._wrapped = locate_by_xpath(self._driver, context, self._selector)
        else:
            # The implied timeout already bounds retries; don't wait twice
            self._driver.implicitly_wait(0)
            try:
                if self._index > 0:
                    matches = context.find_elements(*self._locator)
                    if len(matches) <= self._index:
                        raise ElementNotFoundError(
                            f"Found {len(matches)} match(es) for {self._locator}, "
                            f"need index {self._index}",
                            locator=self._locator,
                            index=self._index,
                        )
                    self._wrapped = matches[self._index]
                else:
                    self._wrapped = context.find_element(*self._locator)
            except NoSuchElementException:
                if self._index != self.OPTIONAL:
                    raise
                self._wrapped = None
            finally:
                self._driver.implicitly_wait(self._timeouts.implied)
        return self

    def __repr__(self) -> str:
        return (
            f"RobustWebElement(locator={self._locator}, index={self._index}, "
            f"strategy={self._strategy.name})"
        )


def get_element(
    context: Any,
    locator: LocatorLike,
    index: int = RobustWebElement.FIRST,
    settings: Optional["Settings"] = None,
) -> RobustWebElement:
    """
    Get the element at an index among the matches of a locator.

    Args:
        context: Search context (ISearchContext, RobustWebElement or WebDriver)
        locator: ``(by, value)`` element locator
        index: Match index, RobustWebElement.FIRST or RobustWebElement.OPTIONAL
        settings: Settings to use; defaults to the global settings

    Returns:
        Robust element for the match
    """
    return RobustWebElement(context, locator, index, settings=settings)


def get_elements(
    context: Any,
    locator: LocatorLike,
    settings: Optional["Settings"] = None,
) -> List[RobustWebElement]:
    """
    Get all elements that match a locator, in document order.

    Each element is bound to its position, so when one goes stale it
    re-resolves to the match at the same index.

    Args:
        context: Search context (ISearchContext, RobustWebElement or WebDriver)
        locator: ``(by, value)`` element locator
        settings: Settings to use; defaults to the global settings

    Returns:
        Robust elements for every match (empty if none match)
    """
    search_context = as_search_context(context)
    locator = to_locator(locator)
    try:
        elements = search_context.wrapped_context.find_elements(*locator)
    except StaleElementReferenceException:
        logger.debug(f"Search context for {locator} is stale; refreshing it")
        elements = search_context.refresh_context().wrapped_context.find_elements(*locator)

    return [
        RobustWebElement(search_context, locator, index, element=element, settings=settings)
        for index, element in enumerate(elements)
    ]
