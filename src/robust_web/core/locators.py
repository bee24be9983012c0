"""
Locators - Locator model, dialect conversion, and resolution strategy choice.

Selenium locators are ``(by, value)`` pairs. Indexed lookups ("the third
match of this locator") are not supported uniformly by the native find
operations, so an indexed locator is classified once into the cheapest
strategy the session supports:

- DIRECT: plain find_element / find_elements with the original locator
- INDEXED_PATH: locator rewritten as a positional XPath ``(<xpath>)[n+1]``
- INDEXED_SCRIPT_SELECTOR: locator rendered as CSS and indexed by script

Example:
    >>> resolution = classify(Locator(By.ID, "row"), 2, SessionCapabilities())
    >>> resolution.strategy
    <Strategy.INDEXED_PATH: 'indexed_path'>
    >>> resolution.locator.value
    "(.//*[@id='row'])[3]"
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, NamedTuple, Optional, Tuple, TYPE_CHECKING, Union

from selenium.webdriver.common.by import By

from robust_web.exceptions import InvalidArgumentError

if TYPE_CHECKING:
    from robust_web.config.settings import LocatorSettings


class Locator(NamedTuple):
    """A Selenium locator: a ``By`` strategy and its query value."""
    by: str
    value: str

    def __str__(self) -> str:
        return f"By.{self.by}: {self.value}"


LocatorLike = Union[Locator, Tuple[str, str]]

_KNOWN_BY = {
    By.ID,
    By.NAME,
    By.CSS_SELECTOR,
    By.XPATH,
    By.TAG_NAME,
    By.CLASS_NAME,
    By.LINK_TEXT,
    By.PARTIAL_LINK_TEXT,
}


class Strategy(Enum):
    """How a robust element re-acquires its reference."""
    DIRECT = "direct"
    INDEXED_PATH = "indexed_path"
    INDEXED_SCRIPT_SELECTOR = "indexed_script_selector"


@dataclass(frozen=True)
class SessionCapabilities:
    """
    Query dialects a session can use for indexed lookups.

    Attributes:
        css: Indexed lookup by CSS selector (needs script execution)
        xpath: Indexed lookup by positional XPath (needs script execution)
    """
    css: bool = True
    xpath: bool = True

    @classmethod
    def for_driver(
        cls,
        driver: Any,
        settings: Optional["LocatorSettings"] = None,
    ) -> "SessionCapabilities":
        """
        Derive capabilities from a WebDriver, capped by settings.

        Args:
            driver: The session's WebDriver
            settings: Optional locator settings that can disable a dialect

        Returns:
            Capabilities of the session
        """
        scripting = callable(getattr(driver, "execute_script", None))
        css = scripting
        xpath = scripting
        if settings is not None:
            css = css and settings.index_by_css
            xpath = xpath and settings.index_by_xpath
        return cls(css=css, xpath=xpath)


@dataclass(frozen=True)
class Resolution:
    """
    Outcome of classifying a locator.

    Attributes:
        strategy: Chosen resolution strategy
        locator: Locator to resolve (rewritten for INDEXED_PATH)
        selector: Rendered XPath/CSS string for the INDEXED_* strategies
    """
    strategy: Strategy
    locator: Locator
    selector: Optional[str] = None


def to_locator(locator: Any) -> Locator:
    """
    Normalize a ``(by, value)`` pair into a Locator.

    Raises:
        InvalidArgumentError: If the locator is missing or malformed
    """
    if locator is None:
        raise InvalidArgumentError("Locator cannot be None", argument="locator")
    if isinstance(locator, Locator):
        return locator
    try:
        by, value = locator
    except (TypeError, ValueError) as e:
        raise InvalidArgumentError(
            f"Locator must be a (by, value) pair, got {locator!r}", argument="locator"
        ) from e
    if by not in _KNOWN_BY or not isinstance(value, str):
        raise InvalidArgumentError(f"Unsupported locator {locator!r}", argument="locator")
    return Locator(by, value)


def xpath_literal(text: str) -> str:
    """Quote text as an XPath string literal."""
    if "'" not in text:
        return f"'{text}'"
    if '"' not in text:
        return f'"{text}"'
    parts = text.split("'")
    return "concat(" + ", \"'\", ".join(f"'{part}'" for part in parts) + ")"


def _css_string(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def xpath_locator_for(locator: LocatorLike) -> Optional[str]:
    """
    Render a locator as an XPath expression relative to its search context.

    Args:
        locator: Locator to convert

    Returns:
        XPath string, or None if the locator has no XPath equivalent
    """
    by, value = to_locator(locator)
    if by == By.XPATH:
        return value
    if by == By.ID:
        return f".//*[@id={xpath_literal(value)}]"
    if by == By.NAME:
        return f".//*[@name={xpath_literal(value)}]"
    if by == By.CLASS_NAME:
        return (
            ".//*[contains(concat(' ', normalize-space(@class), ' '), "
            f"{xpath_literal(' ' + value + ' ')})]"
        )
    if by == By.TAG_NAME:
        return f".//{value}"
    if by == By.LINK_TEXT:
        return f".//a[normalize-space(.)={xpath_literal(value)}]"
    if by == By.PARTIAL_LINK_TEXT:
        return f".//a[contains(., {xpath_literal(value)})]"
    # CSS selectors have no general XPath translation
    return None


def css_locator_for(locator: LocatorLike) -> Optional[str]:
    """
    Render a locator as a CSS selector.

    Args:
        locator: Locator to convert

    Returns:
        CSS selector string, or None if the locator has no CSS equivalent
    """
    by, value = to_locator(locator)
    if by == By.CSS_SELECTOR:
        return value
    if by == By.ID:
        return f"[id={_css_string(value)}]"
    if by == By.NAME:
        return f"[name={_css_string(value)}]"
    if by == By.CLASS_NAME:
        return f".{value}"
    if by == By.TAG_NAME:
        return value
    return None


def classify(locator: LocatorLike, index: int, capabilities: SessionCapabilities) -> Resolution:
    """
    Choose the resolution strategy for a locator at an index.

    Only indices above zero need an indexed strategy; the first match,
    optional matches and unsupported combinations resolve DIRECT.

    Args:
        locator: Element locator
        index: Match index (negative values are the FIRST/OPTIONAL modes)
        capabilities: Query dialects the session supports

    Returns:
        The chosen Resolution (never fails)
    """
    locator = to_locator(locator)
    if index <= 0:
        return Resolution(Strategy.DIRECT, locator)

    if capabilities.xpath and locator.by != By.CSS_SELECTOR:
        xpath = xpath_locator_for(locator)
        if xpath is not None:
            positional = f"({xpath})[{index + 1}]"
            return Resolution(Strategy.INDEXED_PATH, Locator(By.XPATH, positional), positional)

    if capabilities.css:
        selector = css_locator_for(locator)
        if selector is not None:
            return Resolution(Strategy.INDEXED_SCRIPT_SELECTOR, locator, selector)

    return Resolution(Strategy.DIRECT, locator)
