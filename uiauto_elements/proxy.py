# uiauto_elements/proxy.py
"""
@file proxy.py
@brief Proxy dispatcher: wraps element handles behind capability interfaces.

wrap() returns an instance of a generated type that subclasses both
ElementProxy and the requested interface. Every interface member of that
type looks up its binding in the registry held by the proxy's dispatcher,
then:

    1. build a fresh InvocationContext,
    2. run the member's enrichers in declaration order,
    3. return the handler's result, or forward the call unmodified to the
       wrapped element when no handler is declared.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Optional, Type, TypeVar

from .context import InvocationContext
from .registry import MethodBinding, MethodRegistry

log = logging.getLogger("uiauto_elements.proxy")

T = TypeVar("T")

_PROXY_TYPES: Dict[type, type] = {}
_PROXY_TYPES_LOCK = threading.Lock()


class Dispatcher:
    """Runs intercepted calls for one proxy."""

    def __init__(self, registry: MethodRegistry, element: Any, origin: Optional[str] = None):
        self.registry = registry
        self.element = element
        self.origin = origin

    def invoke(self, proxy: Any, binding: MethodBinding, args: tuple, kwargs: Dict[str, Any]) -> Any:
        """
        Dispatch one call.

        @param proxy The proxy that received the call
        @param binding Registry binding of the invoked member
        @param args Positional call arguments (without self)
        @param kwargs Keyword call arguments
        @return Handler result or the wrapped element's result
        """
        context = InvocationContext(
            method=binding.descriptor,
            target=self.element,
            args=args,
            kwargs=kwargs,
            origin=self.origin,
        )

        for enricher in binding.enrichers:
            enricher.enrich(context)

        if binding.handler is not None:
            log.debug(
                "%s [%s] handled by %s",
                context.description,
                context.invocation_id,
                type(binding.handler).__name__,
            )
            return binding.handler.handle(context, proxy)

        log.debug("%s [%s] passed through", context.description, context.invocation_id)
        target = getattr(self.element, binding.name)
        if binding.descriptor.is_property:
            return target
        return target(*args, **kwargs)


class ElementProxy:
    """
    Base of all generated proxy types.

    Holds the wrapped element and its dispatcher. Attributes that are not
    interface members are read from the wrapped element unchanged.
    """

    def __init__(self, element: Any, dispatcher: Dispatcher):
        self._wrapped = element
        self._dispatcher = dispatcher

    @property
    def wrapped_element(self) -> Any:
        """Get the underlying element handle."""
        return self._wrapped

    @property
    def origin(self) -> Optional[str]:
        """Declared name the proxy was created under, if any."""
        return self._dispatcher.origin

    @property
    def registry(self) -> MethodRegistry:
        return self._dispatcher.registry

    def __getattr__(self, item: str) -> Any:
        # Only reached for names the proxy type does not define.
        wrapped = self.__dict__.get("_wrapped")
        if wrapped is None:
            raise AttributeError(item)
        return getattr(wrapped, item)

    def __repr__(self) -> str:
        interface = self._dispatcher.registry.interface.__name__
        if self.origin:
            return f"<{interface} proxy '{self.origin}' of {self._wrapped!r}>"
        return f"<{interface} proxy of {self._wrapped!r}>"


def _dispatching_method(binding: MethodBinding) -> Any:
    name = binding.name

    def dispatch(self: ElementProxy, *args: Any, **kwargs: Any) -> Any:
        dispatcher = self._dispatcher
        return dispatcher.invoke(self, dispatcher.registry.binding(name), args, kwargs)

    # Copy identity only; copying __dict__ would carry __isabstractmethod__.
    dispatch.__name__ = binding.name
    dispatch.__qualname__ = binding.descriptor.qualified_name
    dispatch.__doc__ = binding.descriptor.doc
    return dispatch


def _dispatching_property(binding: MethodBinding) -> property:
    name = binding.name

    def getter(self: ElementProxy) -> Any:
        dispatcher = self._dispatcher
        return dispatcher.invoke(self, dispatcher.registry.binding(name), (), {})

    getter.__name__ = binding.name
    return property(getter, doc=binding.descriptor.doc)


def proxy_type(interface: Type[T]) -> Type[T]:
    """
    Get the generated proxy type for an interface.

    Builds (and validates) the interface registry on first use.
    """
    cls = _PROXY_TYPES.get(interface)
    if cls is not None:
        return cls

    registry = MethodRegistry.for_interface(interface)
    with _PROXY_TYPES_LOCK:
        cls = _PROXY_TYPES.get(interface)
        if cls is None:
            namespace: Dict[str, Any] = {"__module__": interface.__module__}
            for binding in registry.bindings():
                if binding.descriptor.is_property:
                    namespace[binding.name] = _dispatching_property(binding)
                else:
                    namespace[binding.name] = _dispatching_method(binding)
            meta = type(interface)
            cls = meta(f"{interface.__name__}Proxy", (ElementProxy, interface), namespace)
            _PROXY_TYPES[interface] = cls
            log.debug("Generated proxy type %s", cls.__name__)
    return cls


def wrap(element: Any, interface: Optional[Type[T]] = None, name: Optional[str] = None) -> T:
    """
    Wrap an element handle behind a capability interface.

    @param element Externally owned element handle
    @param interface Interface to implement (defaults to HtmlElement)
    @param name Declared name of the element, used by the naming capability
    @return Proxy implementing interface
    @throws DispatchError if a member has no handler and element lacks it
    """
    if interface is None:
        from .element import HtmlElement
        interface = HtmlElement

    cls = proxy_type(interface)
    registry = MethodRegistry.for_interface(interface)
    registry.validate_target(element)
    return cls(element, Dispatcher(registry, element, origin=name))
