# uiauto_elements/__init__.py
"""
UIAuto Elements - declarative behaviors for wrapped UI element handles.

This package provides:
- Proxy: wrap() puts an element handle behind a capability interface
- Markers: behavior() attaches enrichers and handlers to interface methods
- Capabilities: naming, matcher assertions (should) and waits (wait_until)
- Lookups: find_all / find_by child element behaviors
- Matchers: PyHamcrest matchers for elements and collections
- Config: wait timeout presets and YAML configuration
"""

from uiauto_elements.config import TimeConfig, TimeoutSettings
from uiauto_elements.context import InvocationContext, MethodDescriptor
from uiauto_elements.element import (
    ElementCollection,
    ElementList,
    HasName,
    HtmlElement,
    ShouldMatched,
    WaitUntilMatched,
)
from uiauto_elements.exceptions import (
    AssertionMismatch,
    ConfigError,
    ContextLostError,
    DispatchError,
    MissingContext,
    StaleElementError,
    UIAutoError,
    WaitTimeout,
)
from uiauto_elements.interfaces import BaseElement, ContextEnricher, MethodHandler, Refreshable
from uiauto_elements.lookup import find_all, find_by
from uiauto_elements.markers import Behavior, behavior, read_behaviors
from uiauto_elements.proxy import ElementProxy, proxy_type, wrap
from uiauto_elements.registry import MethodBinding, MethodRegistry
from uiauto_elements.store import ContextStore

__all__ = [
    "wrap",
    "proxy_type",
    "ElementProxy",
    "behavior",
    "Behavior",
    "read_behaviors",
    "MethodRegistry",
    "MethodBinding",
    "ContextStore",
    "InvocationContext",
    "MethodDescriptor",
    "ContextEnricher",
    "MethodHandler",
    "BaseElement",
    "Refreshable",
    "HasName",
    "ShouldMatched",
    "WaitUntilMatched",
    "HtmlElement",
    "ElementCollection",
    "ElementList",
    "find_all",
    "find_by",
    "TimeConfig",
    "TimeoutSettings",
    "UIAutoError",
    "ConfigError",
    "MissingContext",
    "DispatchError",
    "AssertionMismatch",
    "WaitTimeout",
    "StaleElementError",
    "ContextLostError",
]

__version__ = "1.0.0"
