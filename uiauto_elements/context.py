# uiauto_elements/context.py
"""
@file context.py
@brief Invocation context passed to every enricher and handler.
"""

from __future__ import annotations

import inspect
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple
from uuid import uuid4

from .store import ContextStore


@dataclass(frozen=True)
class MethodDescriptor:
    """Describes an interface method (or property) the dispatcher intercepts."""
    name: str
    interface: type
    kind: str = "method"
    signature: Optional[inspect.Signature] = None
    doc: Optional[str] = None

    @property
    def qualified_name(self) -> str:
        return f"{self.interface.__name__}.{self.name}"

    @property
    def is_property(self) -> bool:
        return self.kind == "property"


@dataclass(frozen=True)
class InvocationContext:
    """
    Context for a single intercepted call.

    Owns exactly one ContextStore. The remaining fields are read-only call
    metadata: the wrapped element (target), the invoked method, the call
    arguments and the declared name of the proxy that received the call.
    """
    method: MethodDescriptor
    target: Any
    args: Tuple[Any, ...] = ()
    kwargs: Dict[str, Any] = field(default_factory=dict)
    origin: Optional[str] = None
    store: ContextStore = field(default_factory=ContextStore)
    invocation_id: str = field(default_factory=lambda: str(uuid4())[:8])
    start_time: float = field(default_factory=time.time)

    @property
    def description(self) -> str:
        """Generate a human-readable description of this call."""
        parts = [self.method.qualified_name]
        if self.origin:
            parts.append(f"on '{self.origin}'")
        return " ".join(parts)

    @property
    def elapsed_time(self) -> float:
        """Time elapsed since the call started."""
        return time.time() - self.start_time

    def argument(self, name: str, default: Any = None) -> Any:
        """
        Look up a call argument by parameter name.

        Positional arguments are matched against the method signature
        (excluding self); keyword arguments win over positionals.
        """
        if name in self.kwargs:
            return self.kwargs[name]
        signature = self.method.signature
        if signature is None:
            return default
        params = [p for p in signature.parameters if p != "self"]
        if name in params:
            index = params.index(name)
            if index < len(self.args):
                return self.args[index]
        return default

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            "invocation_id": self.invocation_id,
            "method": self.method.qualified_name,
            "origin": self.origin,
            "elapsed_time": self.elapsed_time,
            "store_keys": list(self.store.keys()),
        }
