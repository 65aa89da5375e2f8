# uiauto_elements/matchers.py
"""
@file matchers.py
@brief PyHamcrest matchers for wrapped elements and element collections.

    element.wait_until(displayed()).should(both(displayed()).and_(has_text("Go")))
    page.results().should(every_item(displayed()))

Element matchers query the element through its public operations, so when
applied to a proxy every query passes back through the dispatcher.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

from hamcrest import all_of, any_of
from hamcrest.core.base_matcher import BaseMatcher
from hamcrest.core.description import Description
from hamcrest.core.helpers.wrap_matcher import wrap_matcher
from hamcrest.core.matcher import Matcher


class DisplayedMatcher(BaseMatcher):
    def _matches(self, item: Any) -> bool:
        return bool(item.is_displayed())

    def describe_to(self, description: Description) -> None:
        description.append_text("displayed")

    def describe_mismatch(self, item: Any, mismatch_description: Description) -> None:
        mismatch_description.append_text("element was not displayed")


class EnabledMatcher(BaseMatcher):
    def _matches(self, item: Any) -> bool:
        return bool(item.is_enabled())

    def describe_to(self, description: Description) -> None:
        description.append_text("enabled")

    def describe_mismatch(self, item: Any, mismatch_description: Description) -> None:
        mismatch_description.append_text("element was not enabled")


class SelectedMatcher(BaseMatcher):
    def _matches(self, item: Any) -> bool:
        return bool(item.is_selected())

    def describe_to(self, description: Description) -> None:
        description.append_text("selected")

    def describe_mismatch(self, item: Any, mismatch_description: Description) -> None:
        mismatch_description.append_text("element was not selected")


class HasTextMatcher(BaseMatcher):
    """Matches an element whose text satisfies a string or matcher."""

    def __init__(self, text: Any):
        self.text_matcher = wrap_matcher(text)

    def _matches(self, item: Any) -> bool:
        return self.text_matcher.matches(item.text)

    def describe_to(self, description: Description) -> None:
        description.append_text("text ").append_description_of(self.text_matcher)

    def describe_mismatch(self, item: Any, mismatch_description: Description) -> None:
        mismatch_description.append_text("text ")
        self.text_matcher.describe_mismatch(item.text, mismatch_description)


class HasAttributeMatcher(BaseMatcher):
    """Matches an element whose attribute satisfies a string or matcher."""

    def __init__(self, name: str, value: Any):
        self.name = name
        self.value_matcher = wrap_matcher(value)

    def _matches(self, item: Any) -> bool:
        return self.value_matcher.matches(item.get_attribute(self.name))

    def describe_to(self, description: Description) -> None:
        description.append_text(f"attribute '{self.name}' ").append_description_of(self.value_matcher)

    def describe_mismatch(self, item: Any, mismatch_description: Description) -> None:
        mismatch_description.append_text(f"attribute '{self.name}' ")
        self.value_matcher.describe_mismatch(item.get_attribute(self.name), mismatch_description)


class CombinableMatcher(BaseMatcher):
    """
    Fluent combination of matchers: both(a).and_(b), either(a).or_(b).

    Evaluates the combined matcher once per match, describing the first
    failing part on mismatch.
    """

    def __init__(self, matcher: Matcher):
        self.matcher = matcher

    def and_(self, other: Any) -> CombinableMatcher:
        return CombinableMatcher(all_of(self.matcher, wrap_matcher(other)))

    def or_(self, other: Any) -> CombinableMatcher:
        return CombinableMatcher(any_of(self.matcher, wrap_matcher(other)))

    def matches(self, item: Any, mismatch_description: Optional[Description] = None) -> bool:
        return self.matcher.matches(item, mismatch_description)

    def _matches(self, item: Any) -> bool:
        return self.matcher.matches(item)

    def describe_to(self, description: Description) -> None:
        description.append_description_of(self.matcher)

    def describe_mismatch(self, item: Any, mismatch_description: Description) -> None:
        self.matcher.describe_mismatch(item, mismatch_description)


class EveryItemMatcher(BaseMatcher):
    """
    Matches a sequence whose every item satisfies the item matcher.

    An empty sequence matches.
    """

    def __init__(self, item_matcher: Any):
        self.item_matcher = wrap_matcher(item_matcher)

    def matches(self, item: Iterable[Any], mismatch_description: Optional[Description] = None) -> bool:
        for index, element in enumerate(item):
            if not self.item_matcher.matches(element):
                if mismatch_description is not None:
                    mismatch_description.append_text(f"item {index} ")
                    self.item_matcher.describe_mismatch(element, mismatch_description)
                return False
        return True

    def _matches(self, item: Iterable[Any]) -> bool:
        return self.matches(item)

    def describe_to(self, description: Description) -> None:
        description.append_text("every item is ").append_description_of(self.item_matcher)

    def describe_mismatch(self, item: Iterable[Any], mismatch_description: Description) -> None:
        self.matches(item, mismatch_description)


def displayed() -> DisplayedMatcher:
    return DisplayedMatcher()


def enabled() -> EnabledMatcher:
    return EnabledMatcher()


def selected() -> SelectedMatcher:
    return SelectedMatcher()


def has_text(text: Any) -> HasTextMatcher:
    """Element text equals text, or satisfies it when text is a matcher."""
    return HasTextMatcher(text)


def has_attribute(name: str, value: Any) -> HasAttributeMatcher:
    return HasAttributeMatcher(name, value)


def both(matcher: Any) -> CombinableMatcher:
    return CombinableMatcher(wrap_matcher(matcher))


def either(matcher: Any) -> CombinableMatcher:
    return CombinableMatcher(wrap_matcher(matcher))


def every_item(item_matcher: Any) -> EveryItemMatcher:
    return EveryItemMatcher(item_matcher)
