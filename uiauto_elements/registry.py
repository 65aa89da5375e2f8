# uiauto_elements/registry.py
"""
@file registry.py
@brief Method registry: marker resolution and validation per interface.

The registry maps every dispatchable member of an interface to its ordered
enrichers and optional handler. It is built once per interface, validated
up front, and shared by all proxies of that interface.
"""

from __future__ import annotations

import inspect
import logging
import threading
from abc import ABC
from dataclasses import dataclass
from typing import Any, Dict, Generic, Iterator, List, Optional, Tuple

from .context import MethodDescriptor
from .exceptions import DispatchError
from .interfaces import ContextEnricher, MethodHandler
from .markers import Behavior, read_behaviors

log = logging.getLogger("uiauto_elements.registry")

_SKIPPED_BASES = (object, ABC, Generic)


@dataclass(frozen=True)
class MethodBinding:
    """Resolved participants for one interface member."""
    descriptor: MethodDescriptor
    enrichers: Tuple[ContextEnricher, ...] = ()
    handler: Optional[MethodHandler] = None

    @property
    def name(self) -> str:
        return self.descriptor.name

    @property
    def is_passthrough(self) -> bool:
        return self.handler is None


class MethodRegistry:
    """
    Registry of bindings for one interface.

    Use MethodRegistry.for_interface() to get the cached, validated
    registry; constructing one directly always rebuilds it.
    """

    _cache: Dict[type, "MethodRegistry"] = {}
    _lock = threading.Lock()

    def __init__(self, interface: type):
        self.interface = interface
        self._bindings: Dict[str, MethodBinding] = {}
        self._build()

    @classmethod
    def for_interface(cls, interface: type) -> "MethodRegistry":
        """Get the cached registry for an interface, building it on first use."""
        registry = cls._cache.get(interface)
        if registry is None:
            with cls._lock:
                registry = cls._cache.get(interface)
                if registry is None:
                    registry = cls(interface)
                    cls._cache[interface] = registry
        return registry

    @classmethod
    def clear_cache(cls) -> None:
        with cls._lock:
            cls._cache.clear()

    # --- Lookup ---

    def binding(self, name: str) -> MethodBinding:
        try:
            return self._bindings[name]
        except KeyError:
            raise DispatchError(
                self.interface.__name__,
                "no such interface member",
                methods=[name],
            ) from None

    def bindings(self) -> Iterator[MethodBinding]:
        return iter(self._bindings.values())

    def names(self) -> List[str]:
        return list(self._bindings)

    def __contains__(self, name: object) -> bool:
        return name in self._bindings

    def __len__(self) -> int:
        return len(self._bindings)

    # --- Validation ---

    def validate_target(self, element: Any) -> None:
        """
        Check that every handler-less member has a counterpart on element.

        @throws DispatchError listing the members that cannot be dispatched
        """
        missing = [
            b.name for b in self._bindings.values()
            if b.is_passthrough and not _has_target(element, b.descriptor)
        ]
        if missing:
            raise DispatchError(
                self.interface.__name__,
                f"no handler and no pass-through target on {type(element).__name__}",
                methods=missing,
            )

    # --- Construction ---

    def _build(self) -> None:
        seen = set()
        for klass in self.interface.__mro__:
            if klass in _SKIPPED_BASES:
                continue
            for name, member in vars(klass).items():
                if name in seen:
                    continue
                seen.add(name)
                kind = _member_kind(member)
                if kind is None:
                    continue
                behaviors = read_behaviors(member)
                if not behaviors and not _is_abstract(member):
                    continue
                descriptor = MethodDescriptor(
                    name=name,
                    interface=klass,
                    kind=kind,
                    signature=_signature(member),
                    doc=inspect.getdoc(member),
                )
                self._bindings[name] = self._bind(descriptor, behaviors)

        log.debug(
            "Built registry for %s: %d members (%d intercepted)",
            self.interface.__name__,
            len(self._bindings),
            sum(1 for b in self._bindings.values() if not b.is_passthrough),
        )

    def _bind(self, descriptor: MethodDescriptor, behaviors: Tuple[Behavior, ...]) -> MethodBinding:
        instances: Dict[type, Any] = {}
        enrichers: List[ContextEnricher] = []
        handlers: List[MethodHandler] = []

        for marker in behaviors:
            for spec in marker.enrichers:
                enricher = self._instantiate(spec, instances, descriptor)
                if not isinstance(enricher, ContextEnricher):
                    raise DispatchError(
                        self.interface.__name__,
                        f"{type(enricher).__name__} is not a ContextEnricher",
                        methods=[descriptor.name],
                    )
                enrichers.append(enricher)
            if marker.handler is not None:
                handler = self._instantiate(marker.handler, instances, descriptor)
                if not isinstance(handler, MethodHandler):
                    raise DispatchError(
                        self.interface.__name__,
                        f"{type(handler).__name__} is not a MethodHandler",
                        methods=[descriptor.name],
                    )
                handlers.append(handler)

        if len(handlers) > 1:
            names = ", ".join(type(h).__name__ for h in handlers)
            raise DispatchError(
                self.interface.__name__,
                f"more than one handler declared ({names})",
                methods=[descriptor.name],
            )

        return MethodBinding(
            descriptor=descriptor,
            enrichers=tuple(enrichers),
            handler=handlers[0] if handlers else None,
        )

    def _instantiate(self, spec: Any, instances: Dict[type, Any], descriptor: MethodDescriptor) -> Any:
        if not isinstance(spec, type):
            return spec
        # A class named as both enricher and handler shares one instance.
        if spec not in instances:
            try:
                instances[spec] = spec()
            except TypeError as e:
                raise DispatchError(
                    self.interface.__name__,
                    f"cannot instantiate {spec.__name__}: {e}",
                    methods=[descriptor.name],
                ) from e
        return instances[spec]


def _member_kind(member: Any) -> Optional[str]:
    if isinstance(member, property):
        return "property"
    if inspect.isfunction(member):
        return "method"
    return None


def _is_abstract(member: Any) -> bool:
    return bool(getattr(member, "__isabstractmethod__", False))


def _signature(member: Any) -> Optional[inspect.Signature]:
    func = member.fget if isinstance(member, property) else member
    try:
        return inspect.signature(func)
    except (TypeError, ValueError):
        return None


def _has_target(element: Any, descriptor: MethodDescriptor) -> bool:
    name = descriptor.name
    if descriptor.is_property:
        # Avoid evaluating driver-backed properties where the class declares them.
        if hasattr(type(element), name) or name in getattr(element, "__dict__", {}):
            return True
        return hasattr(element, name)
    return callable(getattr(element, name, None))
