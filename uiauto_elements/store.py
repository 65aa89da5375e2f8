# uiauto_elements/store.py
"""
@file store.py
@brief Per-invocation key/value store shared by enrichers and handlers.
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, Optional, Type, TypeVar

from .exceptions import MissingContext

T = TypeVar("T")


class ContextStore:
    """
    Insertion-ordered, typed key/value container scoped to one method call.

    Enrichers write entries with put(); handlers read them back with get()
    (absence is an error) or find() (absence is a None the caller handles).
    """

    def __init__(self) -> None:
        self._entries: Dict[str, Any] = {}

    def put(self, key: str, value: Any) -> None:
        """Store value under key, replacing any previous entry."""
        self._entries[key] = value

    def get(self, key: str, expected_type: Type[T]) -> T:
        """
        Read an entry that must be present.

        @param key Store key
        @param expected_type Type the value must be an instance of
        @return The stored value
        @throws MissingContext if absent or of an incompatible type
        """
        if key not in self._entries:
            raise MissingContext(key, expected_type=expected_type)
        value = self._entries[key]
        if not isinstance(value, expected_type):
            raise MissingContext(
                key,
                expected_type=expected_type,
                actual_type=type(value),
            )
        return value

    def find(self, key: str, expected_type: Type[T]) -> Optional[T]:
        """Read an entry if present and type-compatible, else None."""
        value = self._entries.get(key)
        if value is None or not isinstance(value, expected_type):
            return None
        return value

    def keys(self) -> Iterator[str]:
        return iter(list(self._entries))

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"ContextStore(keys={list(self._entries)})"
