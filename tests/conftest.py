# tests/conftest.py
"""
Shared fixtures: a fake Selenium-shaped element and config isolation.
"""

import time

import pytest

from uiauto_elements.config import TimeConfig
from uiauto_elements.timinglogger import TIMING_LOGGER


class FakeElement:
    """
    In-memory stand-in for a driver element handle.

    State can change over time (show_after) and queries can be made to fail
    (fail_next) to exercise polling.
    """

    def __init__(
        self,
        text="",
        displayed=True,
        enabled=True,
        selected=False,
        tag_name="div",
        attributes=None,
        children=None,
    ):
        self._text = text
        self._displayed = displayed
        self._displayed_at = None
        self.enabled = enabled
        self.selected = selected
        self._tag_name = tag_name
        self.attributes = dict(attributes or {})
        self.children = dict(children or {})
        self.calls = []
        self._failures = []

    # --- test controls ---

    def show_after(self, seconds):
        self._displayed_at = time.monotonic() + seconds

    def fail_next(self, *errors):
        self._failures.extend(errors)

    def _query(self, name):
        self.calls.append(name)
        if self._failures:
            raise self._failures.pop(0)

    # --- element surface ---

    def click(self):
        self.calls.append("click")

    def send_keys(self, *value):
        self.calls.append(("send_keys", value))
        self._text += "".join(value)

    def clear(self):
        self.calls.append("clear")
        self._text = ""

    def submit(self):
        self.calls.append("submit")

    def is_displayed(self):
        self._query("is_displayed")
        if self._displayed_at is not None:
            return time.monotonic() >= self._displayed_at
        return self._displayed

    def is_enabled(self):
        self._query("is_enabled")
        return self.enabled

    def is_selected(self):
        self._query("is_selected")
        return self.selected

    def get_attribute(self, name):
        self._query("get_attribute")
        return self.attributes.get(name)

    def find_element(self, by, value):
        self._query("find_element")
        found = self.children.get((by, value)) or []
        if not found:
            raise LookupError(f"no child for {by}={value}")
        return found[0]

    def find_elements(self, by, value):
        self._query("find_elements")
        return list(self.children.get((by, value), []))

    @property
    def text(self):
        self._query("text")
        return self._text

    @text.setter
    def text(self, value):
        self._text = value

    @property
    def tag_name(self):
        return self._tag_name

    def __repr__(self):
        return f"FakeElement(text={self._text!r})"


@pytest.fixture
def fake_element():
    """Factory for FakeElement instances."""
    return FakeElement


@pytest.fixture
def element():
    """A displayed element with text 'search-arrow'."""
    return FakeElement(text="search-arrow")


@pytest.fixture(autouse=True)
def isolated_config():
    """Reset timing config and the timing logger around every test."""
    TimeConfig.reset_to_defaults()
    yield
    TimeConfig.reset_to_defaults()
    TIMING_LOGGER.disable()
    TIMING_LOGGER.configure()
