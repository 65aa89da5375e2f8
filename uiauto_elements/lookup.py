# uiauto_elements/lookup.py
"""
@file lookup.py
@brief Child lookup behaviors returning wrapped elements and collections.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from .context import InvocationContext
from .element import ElementCollection, ElementList, HtmlElement
from .interfaces import ContextEnricher, MethodHandler
from .markers import behavior
from .proxy import wrap

LOCATOR_KEY = "locator"


class Locator(ContextEnricher):
    """Records a (by, value) locator for a child lookup."""

    def __init__(self, by: str, value: str):
        self.by = by
        self.value = value

    def enrich(self, context: InvocationContext) -> None:
        context.store.put(LOCATOR_KEY, (self.by, self.value))

    def __repr__(self) -> str:
        return f"Locator({self.by!r}, {self.value!r})"


class ChildrenHandler(MethodHandler[Any]):
    """
    Returns an ElementCollection over the proxy's matching children.

    Children are fetched through the proxy, so behaviors declared on
    find_elements apply. The collection re-fetches on every refresh().
    """

    def __init__(self, item_interface: Optional[type] = None):
        self.item_interface = item_interface or HtmlElement

    def handle(self, context: InvocationContext, proxy: Any) -> Any:
        by, value = context.store.get(LOCATOR_KEY, tuple)
        name = context.method.name
        item_interface = self.item_interface

        def wrap_item(element: Any, index: int) -> Any:
            return wrap(element, item_interface, name=f"{name}[{index}]")

        elements = ElementList(lambda: proxy.find_elements(by, value), wrap_item)
        return wrap(elements, ElementCollection, name=name)


class ChildHandler(MethodHandler[Any]):
    """Returns the proxy's first matching child, wrapped."""

    def __init__(self, interface: Optional[type] = None):
        self.interface = interface or HtmlElement

    def handle(self, context: InvocationContext, proxy: Any) -> Any:
        by, value = context.store.get(LOCATOR_KEY, tuple)
        child = proxy.find_element(by, value)
        return wrap(child, self.interface, name=context.method.name)


def find_all(by: str, value: str, item_interface: Optional[type] = None) -> Callable[[Any], Any]:
    """
    Marker for a method returning all children matching a locator.

    @param by Locator strategy passed to find_elements
    @param value Locator value
    @param item_interface Interface each child is wrapped in (HtmlElement)
    """
    return behavior(
        handler=ChildrenHandler(item_interface),
        enrichers=(Locator(by, value),),
        label=f"find_all({by}={value})",
    )


def find_by(by: str, value: str, interface: Optional[type] = None) -> Callable[[Any], Any]:
    """Marker for a method returning the first child matching a locator."""
    return behavior(
        handler=ChildHandler(interface),
        enrichers=(Locator(by, value),),
        label=f"find_by({by}={value})",
    )
