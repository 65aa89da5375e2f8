# uiauto_elements/interfaces.py
"""
@file interfaces.py
@brief Abstract base classes for behavior participants and wrapped elements.

Enrichers and handlers are the two participants a behavior marker can name.
BaseElement mirrors the query/interaction surface of the externally owned
element handle; its methods are forwarded unmodified unless a behavior is
declared on them.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Generic, List, Optional, TypeVar

if TYPE_CHECKING:
    from .context import InvocationContext

R = TypeVar("R")


class ContextEnricher(ABC):
    """
    Participant that derives facts about an invocation and writes them
    into the context store.

    Enrichers never produce the return value and must not rely on entries
    written by other enrichers.
    """

    @abstractmethod
    def enrich(self, context: "InvocationContext") -> None:
        """
        Populate the store of the given context.

        Args:
            context: Context of the intercepted call
        """
        pass


class MethodHandler(ABC, Generic[R]):
    """
    Participant that produces the value returned to the caller of an
    intercepted method.
    """

    @abstractmethod
    def handle(self, context: "InvocationContext", proxy: Any) -> R:
        """
        Produce the result of the intercepted call.

        Args:
            context: Context of the intercepted call, already enriched
            proxy: The proxy that received the call

        Returns:
            Value returned to the caller
        """
        pass


class BaseElement(ABC):
    """
    Query and interaction operations of a wrapped element handle.

    Shaped after a Selenium WebElement. Implemented by the handle itself;
    proxies forward these calls unless a behavior intercepts them.
    """

    @abstractmethod
    def click(self) -> None:
        """Click the element."""
        pass

    @abstractmethod
    def send_keys(self, *value: str) -> None:
        """Type text into the element."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Clear the element's text."""
        pass

    @abstractmethod
    def submit(self) -> None:
        """Submit the form the element belongs to."""
        pass

    @abstractmethod
    def is_displayed(self) -> bool:
        pass

    @abstractmethod
    def is_enabled(self) -> bool:
        pass

    @abstractmethod
    def is_selected(self) -> bool:
        pass

    @abstractmethod
    def get_attribute(self, name: str) -> Optional[str]:
        pass

    @abstractmethod
    def find_element(self, by: str, value: str) -> Any:
        """
        Find the first child element.

        Args:
            by: Locator strategy ("css selector", "xpath", ...)
            value: Locator value

        Returns:
            Raw child element handle
        """
        pass

    @abstractmethod
    def find_elements(self, by: str, value: str) -> List[Any]:
        """
        Find all child elements.

        Returns:
            Raw child element handles, possibly empty
        """
        pass

    @property
    @abstractmethod
    def text(self) -> str:
        """Visible text of the element."""
        pass

    @property
    @abstractmethod
    def tag_name(self) -> str:
        pass


class Refreshable(ABC):
    """Capability of wrapped state that must be re-fetched before evaluation."""

    @abstractmethod
    def refresh(self) -> None:
        pass
