# uiauto_elements/markers.py
"""
@file markers.py
@brief Behavior markers attached to interface methods.

A marker names the enrichers and the (optional) handler that take part in
calls to the method it decorates. Markers are plain data; the registry reads
them once per interface.

    class HasName(ABC):
        @behavior(handler=DescriptionProvider, enrichers=(DescriptionProvider,))
        @abstractmethod
        def name(self) -> str: ...

Markers may be stacked. Their enrichers run in top-to-bottom order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple, TypeVar, Union

from .interfaces import ContextEnricher, MethodHandler

MARKER_ATTR = "__uiauto_behaviors__"

F = TypeVar("F", bound=Callable[..., Any])

EnricherSpec = Union[type, ContextEnricher]
HandlerSpec = Union[type, MethodHandler]


@dataclass(frozen=True)
class Behavior:
    """
    Immutable association of a method with its participants.

    Entries are either participant classes, instantiated with no arguments
    when the registry is built, or ready-made participant instances.
    """
    enrichers: Tuple[EnricherSpec, ...] = ()
    handler: Optional[HandlerSpec] = None
    label: Optional[str] = None


def behavior(
    handler: Optional[HandlerSpec] = None,
    enrichers: Tuple[EnricherSpec, ...] = (),
    label: Optional[str] = None,
) -> Callable[[F], F]:
    """
    Decorator attaching a Behavior to an interface method.

    @param handler Handler class or instance producing the return value
    @param enrichers Enricher classes or instances, in run order
    @param label Optional name used in diagnostics
    @return Decorator returning the same function, marked
    """
    marker = Behavior(enrichers=tuple(enrichers), handler=handler, label=label)

    def decorator(func: F) -> F:
        existing = getattr(func, MARKER_ATTR, ())
        # Decorators apply bottom-up; prepend so reading order is run order.
        setattr(func, MARKER_ATTR, (marker,) + tuple(existing))
        return func

    return decorator


def read_behaviors(member: Any) -> Tuple[Behavior, ...]:
    """Return the markers declared on a function or property, in declaration order."""
    if isinstance(member, property):
        member = member.fget
    if isinstance(member, (staticmethod, classmethod)):
        member = member.__func__
    return tuple(getattr(member, MARKER_ATTR, ()))
