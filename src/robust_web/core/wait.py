"""
Search context wait - Bounded polling against a search context.
"""

from typing import Any, Callable, Iterable, Optional, Type, TypeVar
import logging

from selenium.common.exceptions import NoSuchElementException, TimeoutException
from selenium.webdriver.support.wait import POLL_FREQUENCY, WebDriverWait

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SearchContextWait(WebDriverWait):
    """
    WebDriverWait that polls a search context instead of a driver.

    The condition receives the context on every tick. Exceptions listed in
    ``ignored_exceptions`` (plus ``NoSuchElementException``) mean "try again";
    anything else ends the wait immediately. When the timeout expires, the
    raised ``TimeoutException`` is chained from the last ignored exception,
    so callers can surface the underlying cause.

    Example:
        >>> wait = SearchContextWait(context, timeout=10)
        >>> element = wait.until(lambda ctx: ctx.wrapped_context.find_element(*locator))
    """

    def __init__(
        self,
        context: Any,
        timeout: float,
        poll_frequency: float = POLL_FREQUENCY,
        ignored_exceptions: Optional[Iterable[Type[Exception]]] = None,
    ):
        ignored = [NoSuchElementException]
        if ignored_exceptions:
            ignored.extend(ignored_exceptions)
        super().__init__(context, timeout, poll_frequency=poll_frequency, ignored_exceptions=ignored)
        self._context = context
        self._ignored = tuple(ignored)

    @property
    def context(self) -> Any:
        """Get the search context being polled."""
        return self._context

    def until(self, method: Callable[[Any], T], message: str = "") -> T:
        """
        Poll ``method`` with the context until it returns a truthy value.

        Args:
            method: Condition called with the search context
            message: Message for the timeout exception

        Returns:
            The first truthy value returned by ``method``

        Raises:
            TimeoutException: If no truthy value arrives in time; its
                ``__cause__`` is the last ignored exception, if any
        """
        last_error: Optional[Exception] = None
        attempts = 0

        def attempt(context: Any) -> T:
            nonlocal last_error, attempts
            attempts += 1
            try:
                return method(context)
            except self._ignored as e:
                last_error = e
                raise

        try:
            return super().until(attempt, message)
        except TimeoutException as e:
            logger.debug(
                f"Wait for {message or method!r} timed out after {attempts} attempt(s): {last_error!r}"
            )
            raise e from last_error
