"""
Locator scripts - Injected JavaScript for indexed element lookup.

The native find operations have no "N-th match" query that works the same
for every locator kind. These two fixed programs fetch a single positional
match straight from the live document:

- LOCATE_BY_XPATH_JS(context, xpath): first node selected by a
  (positional) XPath evaluated against the context
- LOCATE_BY_CSS_JS(context, selector, index): the index-th node matching
  a CSS selector under the context

Both take ``null`` as context to search the whole document, and return
``null`` when nothing matches. Nothing is cached: each call re-queries.
"""

from typing import Any
import logging

from selenium.webdriver.common.by import By
from selenium.webdriver.remote.webelement import WebElement

from robust_web.core.locators import Locator
from robust_web.exceptions import ElementNotFoundError

logger = logging.getLogger(__name__)


LOCATE_BY_XPATH_JS = """
var context = arguments[0] || document;
var xpath = arguments[1];
var doc = context.ownerDocument || context;
var result = doc.evaluate(xpath, context, null, XPathResult.FIRST_ORDERED_NODE_TYPE, null);
return result.singleNodeValue;
"""

LOCATE_BY_CSS_JS = """
var context = arguments[0] || document;
var selector = arguments[1];
var index = arguments[2];
var matches = context.querySelectorAll(selector);
return (index < matches.length) ? matches[index] : null;
"""


def _script_context(context: Any) -> Any:
    # A driver cannot be passed as a script argument; null means "document"
    return None if hasattr(context, "execute_script") else context


def locate_by_xpath(driver: Any, context: Any, xpath: str) -> WebElement:
    """
    Fetch the first element selected by an XPath, via script.

    Args:
        driver: WebDriver that runs the script
        context: Native search context (driver or element)
        xpath: XPath expression, typically with a positional predicate

    Returns:
        The matched element

    Raises:
        ElementNotFoundError: If the XPath selects nothing
    """
    element = driver.execute_script(LOCATE_BY_XPATH_JS, _script_context(context), xpath)
    if element is None:
        logger.debug(f"XPath script found no match for {xpath}")
        raise ElementNotFoundError(
            f"No element matches XPath {xpath}",
            locator=Locator(By.XPATH, xpath),
        )
    return element


def locate_by_css(driver: Any, context: Any, selector: str, index: int) -> WebElement:
    """
    Fetch the index-th element matching a CSS selector, via script.

    Args:
        driver: WebDriver that runs the script
        context: Native search context (driver or element)
        selector: CSS selector
        index: Zero-based match index

    Returns:
        The matched element

    Raises:
        ElementNotFoundError: If fewer than index + 1 elements match
    """
    element = driver.execute_script(LOCATE_BY_CSS_JS, _script_context(context), selector, index)
    if element is None:
        logger.debug(f"CSS script found no match at index {index} for {selector}")
        raise ElementNotFoundError(
            f"No element at index {index} matches CSS selector {selector}",
            locator=Locator(By.CSS_SELECTOR, selector),
            index=index,
        )
    return element
