"""
Tests for DriverContext and driver lookup helpers.
"""

import pytest
from unittest.mock import MagicMock

from robust_web.core.driver_context import DriverContext, as_search_context, get_driver
from robust_web.exceptions import InvalidArgumentError
from robust_web.interfaces import ISearchContext


class TestDriverContext:
    """Test the session-root context."""

    def test_wraps_driver(self, driver):
        context = DriverContext(driver)

        assert isinstance(context, ISearchContext)
        assert context.wrapped_context is driver
        assert context.wrapped_driver is driver

    def test_refresh_returns_self(self, driver):
        context = DriverContext(driver)
        assert context.refresh_context() is context

    def test_none_driver_rejected(self):
        with pytest.raises(InvalidArgumentError):
            DriverContext(None)


class TestAsSearchContext:
    """Test context coercion."""

    def test_driver_is_wrapped(self, driver):
        context = as_search_context(driver)
        assert isinstance(context, DriverContext)
        assert context.wrapped_driver is driver

    def test_search_context_passes_through(self, driver):
        context = DriverContext(driver)
        assert as_search_context(context) is context

    def test_none_rejected(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            as_search_context(None)
        assert exc_info.value.argument == "context"

    def test_raw_element_rejected(self):
        element = MagicMock(spec=["find_element", "find_elements", "parent"])
        with pytest.raises(InvalidArgumentError):
            as_search_context(element)


class TestGetDriver:
    """Test finding the driver behind a context."""

    def test_driver(self, driver):
        assert get_driver(driver) is driver

    def test_search_context(self, driver):
        assert get_driver(DriverContext(driver)) is driver

    def test_element_parent(self, driver):
        element = driver.find_element("id", "title")
        assert get_driver(element) is driver

    def test_shadow_root_session(self, driver):
        shadow_root = MagicMock(spec=["find_element", "find_elements", "session"])
        shadow_root.session = driver
        assert get_driver(shadow_root) is driver

    def test_unknown_rejected(self):
        with pytest.raises(InvalidArgumentError):
            get_driver(object())
