"""
Pytest configuration and fixtures.

The fixtures model a tiny live document: ``FakeDom`` holds nodes in document
order, ``FakeDriver`` answers find operations and the two locator scripts
against it, and ``FakeElement`` handles go stale when their node is removed
or re-rendered, just like real WebDriver references.
"""

import re
from typing import List, Optional

import pytest
from selenium.common.exceptions import NoSuchElementException, StaleElementReferenceException
from selenium.webdriver.common.by import By

from robust_web.core.scripts import LOCATE_BY_CSS_JS, LOCATE_BY_XPATH_JS


CSS_ATTRIBUTE = re.compile(r'^\[(id|name)="(.*)"\]$')
XPATH_POSITIONAL = re.compile(r"^\((.*)\)\[(\d+)\]$")
XPATH_ATTRIBUTE = re.compile(r"^\.//\*\[@(id|name)='(.*)'\]$")
XPATH_CLASS = re.compile(
    r"^\.//\*\[contains\(concat\(' ', normalize-space\(@class\), ' '\), ' (.*) '\)\]$"
)
XPATH_TAG = re.compile(r"^\.//(\w+)$")


class FakeNode:
    """A node in the fake document."""

    def __init__(self, tag, id=None, name=None, classes=(), text="", parent=None):
        self.tag = tag
        self.id = id
        self.name = name
        self.classes = list(classes)
        self.text = text
        self.parent = parent
        self.epoch = 0
        self.removed = False
        self.clicks = 0
        self.keys: List[str] = []

    def is_within(self, scope: Optional["FakeNode"]) -> bool:
        if scope is None:
            return True
        node = self.parent
        while node is not None:
            if node is scope:
                return True
            node = node.parent
        return False

    def attribute(self, name):
        if name == "class":
            return " ".join(self.classes) or None
        return {"id": self.id, "name": self.name}.get(name)


class FakeDom:
    """Nodes in document order, with mutation helpers."""

    def __init__(self):
        self.nodes: List[FakeNode] = []

    def add(self, tag, parent=None, **kwargs) -> FakeNode:
        node = FakeNode(tag, parent=parent, **kwargs)
        self.nodes.append(node)
        return node

    def remove(self, node: FakeNode) -> None:
        for other in list(self.nodes):
            if other is node or other.is_within(node):
                other.removed = True
                self.nodes.remove(other)

    def rerender(self) -> None:
        """Invalidate every existing handle without changing the document."""
        for node in self.nodes:
            node.epoch += 1

    def move_to_end(self, node: FakeNode) -> None:
        self.nodes.remove(node)
        self.nodes.append(node)
        node.epoch += 1

    def query(self, by, value, scope=None) -> List[FakeNode]:
        if by == By.XPATH:
            positional = XPATH_POSITIONAL.match(value)
            if positional:
                matches = self.query(By.XPATH, positional.group(1), scope)
                position = int(positional.group(2))
                return matches[position - 1:position]
        candidates = [node for node in self.nodes if node.is_within(scope)]
        return [node for node in candidates if self._matches(node, by, value)]

    @staticmethod
    def _matches(node, by, value) -> bool:
        if by == By.ID:
            return node.id == value
        if by == By.NAME:
            return node.name == value
        if by == By.CLASS_NAME:
            return value in node.classes
        if by == By.TAG_NAME:
            return node.tag == value
        if by == By.CSS_SELECTOR:
            attribute = CSS_ATTRIBUTE.match(value)
            if attribute:
                return node.attribute(attribute.group(1)) == attribute.group(2)
            if value.startswith("."):
                return value[1:] in node.classes
            if value.startswith("#"):
                return node.id == value[1:]
            return node.tag == value
        if by == By.XPATH:
            attribute = XPATH_ATTRIBUTE.match(value)
            if attribute:
                return node.attribute(attribute.group(1)) == attribute.group(2)
            css_class = XPATH_CLASS.match(value)
            if css_class:
                return css_class.group(1) in node.classes
            tag = XPATH_TAG.match(value)
            if tag:
                return node.tag == tag.group(1)
        raise ValueError(f"Fake DOM cannot evaluate {by}={value}")


class FakeElement:
    """A WebElement-like handle bound to one render of a node."""

    def __init__(self, driver, node: FakeNode):
        self.parent = driver
        self.node = node
        self.epoch = node.epoch
        self.id = f"element-{id(node)}-{node.epoch}"

    def _live(self) -> FakeNode:
        if self.node.removed or self.node.epoch != self.epoch:
            raise StaleElementReferenceException("stale element reference: element is not attached")
        return self.node

    @property
    def text(self):
        return self._live().text

    @property
    def tag_name(self):
        return self._live().tag

    @property
    def rect(self):
        self._live()
        return {"x": 0, "y": 0, "width": 10, "height": 10}

    @property
    def size(self):
        self._live()
        return {"width": 10, "height": 10}

    @property
    def location(self):
        self._live()
        return {"x": 0, "y": 0}

    def get_attribute(self, name):
        return self._live().attribute(name)

    def value_of_css_property(self, name):
        self._live()
        return "block" if name == "display" else ""

    def is_displayed(self):
        self._live()
        return True

    def is_enabled(self):
        self._live()
        return True

    def is_selected(self):
        self._live()
        return False

    def click(self):
        self._live().clicks += 1

    def send_keys(self, *value):
        self._live().keys.extend(value)

    def clear(self):
        self._live().keys.clear()

    def find_element(self, by, value):
        matches = self.find_elements(by, value)
        if not matches:
            raise NoSuchElementException(f"no such element: {by}={value}")
        return matches[0]

    def find_elements(self, by, value):
        scope = self._live()
        return [FakeElement(self.parent, node) for node in self.parent.dom.query(by, value, scope)]


class FakeDriver:
    """A WebDriver-like session over a FakeDom."""

    def __init__(self, dom: FakeDom):
        self.dom = dom
        self.implicit_wait = 10
        self.implicit_waits: List[float] = []
        self.waits_during_find: List[float] = []
        self.scripts: List[tuple] = []

    def implicitly_wait(self, seconds):
        self.implicit_wait = seconds
        self.implicit_waits.append(seconds)

    def find_element(self, by, value):
        matches = self.find_elements(by, value)
        if not matches:
            raise NoSuchElementException(f"no such element: {by}={value}")
        return matches[0]

    def find_elements(self, by, value):
        self.waits_during_find.append(self.implicit_wait)
        return [FakeElement(self, node) for node in self.dom.query(by, value)]

    def execute_script(self, script, *args):
        self.scripts.append((script, args))
        context = args[0]
        scope = context._live() if context is not None else None
        if script == LOCATE_BY_CSS_JS:
            matches = self.dom.query(By.CSS_SELECTOR, args[1], scope)
            index = args[2]
            return FakeElement(self, matches[index]) if index < len(matches) else None
        if script == LOCATE_BY_XPATH_JS:
            matches = self.dom.query(By.XPATH, args[1], scope)
            return FakeElement(self, matches[0]) if matches else None
        raise AssertionError("unexpected script")


@pytest.fixture
def settings():
    """Provide test settings with short timeouts."""
    from robust_web.config import Settings, TimeoutSettings

    return Settings(timeouts=TimeoutSettings(implied=0.3, poll_interval=0.05))


@pytest.fixture
def dom():
    """Provide a document with a heading, a list of three items and a form."""
    dom = FakeDom()
    dom.add("h1", id="title", text="Inventory")
    items = dom.add("ul", id="items")
    for number in (1, 2, 3):
        dom.add("li", parent=items, classes=["item"], text=f"Item {number}")
    form = dom.add("form", id="login")
    dom.add("input", parent=form, name="user")
    return dom


@pytest.fixture
def driver(dom):
    """Provide a fake WebDriver session over the fake document."""
    return FakeDriver(dom)


@pytest.fixture
def items(dom):
    """Provide the list item nodes, in document order."""
    return [node for node in dom.nodes if node.tag == "li"]
