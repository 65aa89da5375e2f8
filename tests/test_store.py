# tests/test_store.py
"""
Tests for the per-invocation context store and invocation context.
"""

import inspect

import pytest

from uiauto_elements.context import InvocationContext, MethodDescriptor
from uiauto_elements.exceptions import MissingContext
from uiauto_elements.store import ContextStore


class TestContextStore:
    """Tests for ContextStore."""

    def test_put_then_get(self):
        """Should return the stored value for a compatible type."""
        store = ContextStore()
        store.put("description", "search_arrow")
        assert store.get("description", str) == "search_arrow"

    def test_put_overwrites(self):
        """Should replace an existing entry without error."""
        store = ContextStore()
        store.put("key", 1)
        store.put("key", 2)
        assert store.get("key", int) == 2
        assert len(store) == 1

    def test_get_missing_raises(self):
        """Should raise MissingContext when the key is absent."""
        store = ContextStore()
        with pytest.raises(MissingContext) as exc_info:
            store.get("description", str)
        assert exc_info.value.key == "description"
        assert exc_info.value.expected_type is str
        assert isinstance(exc_info.value, LookupError)

    def test_get_wrong_type_raises(self):
        """Should not coerce values of an incompatible type."""
        store = ContextStore()
        store.put("timeout", "5")
        with pytest.raises(MissingContext) as exc_info:
            store.get("timeout", float)
        assert exc_info.value.actual_type is str
        assert "actual=str" in str(exc_info.value)

    def test_find_returns_none_when_absent(self):
        """Should return None for absent or incompatible entries."""
        store = ContextStore()
        store.put("timeout", "5")
        assert store.find("missing", str) is None
        assert store.find("timeout", float) is None
        assert store.find("timeout", str) == "5"

    def test_keys_keep_insertion_order(self):
        """Should report keys in insertion order."""
        store = ContextStore()
        for key in ("b", "a", "c"):
            store.put(key, key)
        assert list(store.keys()) == ["b", "a", "c"]
        assert "a" in store
        assert store.to_dict() == {"b": "b", "a": "a", "c": "c"}


class _Searchable:
    def wait_until(self, matcher, timeout=None):
        pass


class TestInvocationContext:
    """Tests for InvocationContext."""

    def _descriptor(self):
        return MethodDescriptor(
            name="wait_until",
            interface=_Searchable,
            signature=inspect.signature(_Searchable.wait_until),
        )

    def test_fresh_store_per_context(self):
        """Should give every context its own store."""
        first = InvocationContext(method=self._descriptor(), target=object())
        second = InvocationContext(method=self._descriptor(), target=object())
        first.store.put("key", "value")
        assert "key" not in second.store
        assert first.invocation_id != second.invocation_id

    def test_argument_by_position_and_keyword(self):
        """Should resolve arguments by parameter name."""
        context = InvocationContext(
            method=self._descriptor(),
            target=object(),
            args=("m",),
            kwargs={"timeout": 2},
        )
        assert context.argument("matcher") == "m"
        assert context.argument("timeout") == 2
        assert context.argument("missing", "default") == "default"

    def test_description_mentions_origin(self):
        """Should describe the call with its qualified method name."""
        context = InvocationContext(method=self._descriptor(), target=object(), origin="arrow")
        assert context.description == "_Searchable.wait_until on 'arrow'"
        assert context.to_dict()["method"] == "_Searchable.wait_until"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
