# tests/test_should.py
"""
Tests for should(): single-shot matcher assertions.
"""

from abc import ABC, abstractmethod

import pytest
from hamcrest.core.base_matcher import BaseMatcher

from uiauto_elements.exceptions import AssertionMismatch, StaleElementError
from uiauto_elements.extensions import should_match
from uiauto_elements.matchers import both, displayed, has_text
from uiauto_elements.proxy import wrap


class CountingMatcher(BaseMatcher):
    """Matcher with a fixed outcome that counts evaluations."""

    def __init__(self, outcome):
        self.outcome = outcome
        self.evaluations = 0

    def _matches(self, item):
        self.evaluations += 1
        return self.outcome

    def describe_to(self, description):
        description.append_text("counted")


class BareShould(ABC):
    @should_match
    @abstractmethod
    def should(self, matcher):
        pass


class TestShould:
    """Tests for ShouldMatched.should()."""

    def test_passing_matcher_returns_proxy(self, element):
        """Should return the proxy when the matcher holds."""
        proxy = wrap(element, name="search_arrow")
        assert proxy.should(displayed()) is proxy

    def test_failing_matcher_raises_once(self, element):
        """Should evaluate a failing matcher exactly once and raise."""
        matcher = CountingMatcher(False)
        with pytest.raises(AssertionMismatch):
            wrap(element, name="search_arrow").should(matcher)
        assert matcher.evaluations == 1

    def test_passing_matcher_evaluated_once(self, element):
        """Should not re-evaluate a matcher that holds."""
        matcher = CountingMatcher(True)
        wrap(element).should(matcher)
        assert matcher.evaluations == 1

    def test_mismatch_mentions_text(self, fake_element):
        """Should describe a text mismatch of a combined matcher."""
        proxy = wrap(fake_element(text="other"), name="search_arrow")
        with pytest.raises(AssertionMismatch) as exc_info:
            proxy.should(both(displayed()).and_(has_text("search-arrow")))

        error = exc_info.value
        assert error.element_name == "search_arrow"
        assert error.method == "ShouldMatched.should"
        assert "search-arrow" in error.expected
        assert "text was 'other'" in error.mismatch
        assert "Expected:" in str(error)
        assert isinstance(error, AssertionError)

    def test_mismatch_for_hidden_element(self, fake_element):
        """Should report the first failing part of a combined matcher."""
        proxy = wrap(fake_element(text="search-arrow", displayed=False), name="arrow")
        with pytest.raises(AssertionMismatch) as exc_info:
            proxy.should(both(displayed()).and_(has_text("search-arrow")))
        assert "not displayed" in exc_info.value.mismatch

    def test_chaining(self, element):
        """Should allow should() calls to be chained."""
        proxy = wrap(element, name="search_arrow")
        assert proxy.should(displayed()).should(has_text("search-arrow")) is proxy

    def test_unnamed_element_reports_its_name(self, fake_element):
        """Should report the same name as name() for an unnamed element."""
        proxy = wrap(fake_element(displayed=False))
        with pytest.raises(AssertionMismatch) as exc_info:
            proxy.should(displayed())
        assert exc_info.value.element_name == proxy.name()
        assert "Element 'should'" not in str(exc_info.value)

    def test_name_resolved_without_description_enricher(self, element):
        """Should resolve the element name when no enricher recorded it."""
        proxy = wrap(element, BareShould, name="search_arrow")
        with pytest.raises(AssertionMismatch) as exc_info:
            proxy.should(CountingMatcher(False))
        assert exc_info.value.element_name == "search_arrow"

    def test_collaborator_errors_propagate(self, element):
        """Should not retry or hide errors raised by the wrapped element."""
        element.fail_next(StaleElementError("search_arrow"))
        with pytest.raises(StaleElementError):
            wrap(element).should(displayed())

    def test_missing_matcher_aborts(self, element):
        """Should fail before handling when no matcher is given."""
        with pytest.raises(TypeError, match="requires a matcher"):
            wrap(element).should()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
