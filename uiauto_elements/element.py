# uiauto_elements/element.py
"""
@file element.py
@brief Capability interfaces and the element/collection interfaces built from them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any, Callable, Iterable, Iterator, List, Optional

from hamcrest.core.matcher import Matcher

from .extensions import described, name_provider, should_match, wait_for
from .interfaces import BaseElement, Refreshable


class HasName(ABC):
    """Capability: human-readable element name."""

    @name_provider
    @abstractmethod
    def name(self) -> str:
        """Declared name of the element."""
        pass


class ShouldMatched(ABC):
    """Capability: assert a matcher holds right now."""

    @described
    @should_match
    @abstractmethod
    def should(self, matcher: Matcher) -> Any:
        """
        Evaluate matcher once against this element.

        @param matcher Matcher applied to the proxy itself
        @return self for chaining
        @throws AssertionMismatch if the matcher does not hold
        """
        pass


class WaitUntilMatched(ABC):
    """Capability: wait until a matcher holds."""

    @described
    @wait_for
    @abstractmethod
    def wait_until(self, matcher: Matcher, timeout: Optional[float] = None) -> Any:
        """
        Poll matcher against this element until it holds.

        @param matcher Matcher applied to the proxy itself
        @param timeout Override for the configured wait timeout, in seconds
        @return self for chaining
        @throws WaitTimeout if the matcher did not hold in time
        """
        pass


class HtmlElement(BaseElement, HasName, ShouldMatched, WaitUntilMatched):
    """
    A wrapped element with naming, assertions and waits.

    Page-element interfaces extend this and declare child lookups:

        class SearchArrow(HtmlElement):
            @find_all("css selector", ".suggest-item")
            @abstractmethod
            def suggest(self) -> ElementCollection: ...
    """
    pass


class ElementCollection(HasName, ShouldMatched, WaitUntilMatched, Refreshable):
    """A named, re-fetchable sequence of wrapped elements."""

    @abstractmethod
    def __len__(self) -> int:
        pass

    @abstractmethod
    def __iter__(self) -> Iterator[Any]:
        pass

    @abstractmethod
    def __getitem__(self, index: Any) -> Any:
        pass


class ElementList(Sequence, Refreshable):
    """
    Snapshot of child elements that can be re-fetched.

    The snapshot is taken on first access and replaced by every refresh().
    Items are wrapped as they are fetched.
    """

    def __init__(
        self,
        fetch: Callable[[], Iterable[Any]],
        wrap_item: Optional[Callable[[Any, int], Any]] = None,
    ):
        """
        @param fetch Returns the current raw child handles
        @param wrap_item Wraps a raw handle given its index
        """
        self._fetch = fetch
        self._wrap_item = wrap_item
        self._items: Optional[List[Any]] = None

    def refresh(self) -> None:
        raw = list(self._fetch())
        if self._wrap_item is None:
            self._items = raw
        else:
            self._items = [self._wrap_item(item, i) for i, item in enumerate(raw)]

    def _snapshot(self) -> List[Any]:
        if self._items is None:
            self.refresh()
        return self._items

    def __len__(self) -> int:
        return len(self._snapshot())

    def __iter__(self) -> Iterator[Any]:
        return iter(list(self._snapshot()))

    def __getitem__(self, index: Any) -> Any:
        return self._snapshot()[index]

    def __repr__(self) -> str:
        if self._items is None:
            return "ElementList(<not fetched>)"
        return f"ElementList({len(self._items)} items)"
