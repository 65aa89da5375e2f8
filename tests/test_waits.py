# tests/test_waits.py
"""
Tests for the polling loop and wait_until().
"""

import time

import pytest

from uiauto_elements.config import TimeConfig
from uiauto_elements.exceptions import ContextLostError, StaleElementError, WaitTimeout
from uiauto_elements.matchers import displayed, has_text
from uiauto_elements.proxy import wrap
from uiauto_elements.timinglogger import TIMING_LOGGER, TimingEvent
from uiauto_elements.waits import is_fatal, wait_for_match


class NoSuchWindowException(Exception):
    """Named like the driver's session-level failure."""


class TestWaitForMatch:
    """Tests for wait_for_match function."""

    def test_returns_immediately_when_matched(self):
        """Should return after the first attempt when the probe matches."""
        attempts = wait_for_match(lambda: (True, ""), timeout=5)
        assert attempts == 1

    def test_waits_for_condition(self):
        """Should keep polling until the probe matches."""
        start = time.monotonic()
        counter = {"value": 0}

        def probe():
            counter["value"] += 1
            return counter["value"] >= 3, "not yet"

        attempts = wait_for_match(probe, timeout=5, interval=0.1)
        elapsed = time.monotonic() - start

        assert attempts == 3
        assert elapsed >= 0.2  # At least 2 intervals
        assert elapsed < 1.0   # But not too long

    def test_timeout_raises_error(self):
        """Should raise WaitTimeout carrying the last mismatch."""
        with pytest.raises(WaitTimeout) as exc_info:
            wait_for_match(lambda: (False, "was hidden"), timeout=0.3, interval=0.1, description="arrow")

        error = exc_info.value
        assert "Timed out" in str(error)
        assert error.timeout == 0.3
        assert error.last_mismatch == "was hidden"
        assert error.attempt_count >= 2
        assert error.elapsed_time >= 0.3

    def test_zero_timeout_polls_once(self):
        """Should still evaluate once with a zero timeout."""
        with pytest.raises(WaitTimeout) as exc_info:
            wait_for_match(lambda: (False, "no"), timeout=0, interval=0.1)
        assert exc_info.value.attempt_count == 1

    def test_transient_errors_are_mismatches(self):
        """Should keep polling through transient errors."""
        counter = {"value": 0}

        def probe():
            counter["value"] += 1
            if counter["value"] < 3:
                raise StaleElementError("arrow")
            return True, ""

        assert wait_for_match(probe, timeout=5, interval=0.05) == 3

    def test_preserves_last_transient_exception(self):
        """Should keep the last transient exception on timeout."""
        def probe():
            raise ValueError("test error")

        with pytest.raises(WaitTimeout) as exc_info:
            wait_for_match(probe, timeout=0.3, interval=0.1)

        error = exc_info.value
        assert isinstance(error.original_exception, ValueError)
        assert error.last_mismatch == "ValueError: test error"
        assert "Original exception: ValueError" in str(error)

    def test_fatal_error_propagates_immediately(self):
        """Should abort on fatal collaborator errors."""
        counter = {"value": 0}

        def probe():
            counter["value"] += 1
            raise ContextLostError("window closed")

        with pytest.raises(ContextLostError):
            wait_for_match(probe, timeout=5, interval=0.05)
        assert counter["value"] == 1


class TestErrorClassification:
    """Tests for is_fatal."""

    def test_context_lost_is_fatal(self):
        assert is_fatal(ContextLostError("gone"))

    def test_driver_session_errors_are_fatal(self):
        """Should recognize driver failures by class name."""
        assert is_fatal(NoSuchWindowException("gone"))

    def test_subclass_of_fatal_name_is_fatal(self):
        class ClosedWindow(NoSuchWindowException):
            pass

        assert is_fatal(ClosedWindow())

    def test_lookup_failures_are_transient(self):
        assert not is_fatal(StaleElementError("arrow"))
        assert not is_fatal(LookupError("no such element"))


class TestWaitUntil:
    """Tests for WaitUntilMatched.wait_until()."""

    def test_returns_proxy_without_sleeping(self, element, monkeypatch):
        """Should return the original proxy at once when already matched."""
        sleeps = []
        monkeypatch.setattr(time, "sleep", lambda seconds: sleeps.append(seconds))

        proxy = wrap(element, name="search_arrow")
        assert proxy.wait_until(displayed()) is proxy
        assert sleeps == []

    def test_element_becomes_displayed(self, fake_element):
        """Should return soon after the element is displayed."""
        raw = fake_element(text="search-arrow", displayed=False)
        raw.show_after(0.5)
        proxy = wrap(raw, name="search_arrow")

        start = time.monotonic()
        with TimeConfig.override(element_wait={"timeout": 2.0, "interval": 0.05}):
            proxy.wait_until(displayed())
        elapsed = time.monotonic() - start

        assert 0.45 <= elapsed < 0.7

    def test_timeout_bounds(self, fake_element):
        """Should time out no earlier than timeout and within one interval after."""
        proxy = wrap(fake_element(displayed=False), name="search_arrow")

        with TimeConfig.override(element_wait={"timeout": 0.5, "interval": 0.2}):
            with pytest.raises(WaitTimeout) as exc_info:
                proxy.wait_until(displayed())

        error = exc_info.value
        assert error.timeout == 0.5
        assert 0.5 <= error.elapsed_time < 0.7
        assert error.element_name == "search_arrow"
        assert error.expected == "displayed"
        assert error.last_mismatch == "element was not displayed"

    def test_unnamed_element_timeout_reports_its_name(self, fake_element):
        """Should carry the name that name() returns for an unnamed element."""
        proxy = wrap(fake_element(displayed=False))
        with pytest.raises(WaitTimeout) as exc_info:
            proxy.wait_until(displayed(), timeout=0)
        assert exc_info.value.element_name == proxy.name()

    def test_timeout_argument_overrides_config(self, fake_element):
        """Should prefer the timeout passed to the call."""
        proxy = wrap(fake_element(displayed=False))
        with pytest.raises(WaitTimeout) as exc_info:
            proxy.wait_until(displayed(), timeout=0.2)
        assert exc_info.value.timeout == 0.2

    def test_tolerates_transient_failures(self, element):
        """Should treat detached-element errors as mismatches."""
        element.fail_next(StaleElementError("search_arrow"), StaleElementError("search_arrow"))
        proxy = wrap(element, name="search_arrow")
        with TimeConfig.override(element_wait={"interval": 0.05}):
            assert proxy.wait_until(displayed()) is proxy
        assert element.calls.count("is_displayed") == 3

    def test_fatal_failure_propagates(self, element):
        """Should abort the wait when the owning context is gone."""
        element.fail_next(ContextLostError("browser closed"))
        with pytest.raises(ContextLostError):
            wrap(element).wait_until(displayed(), timeout=2)

    def test_wait_then_should_does_not_raise(self, fake_element):
        """Should leave the element in a state where should() holds."""
        raw = fake_element(text="search-arrow", displayed=False)
        raw.show_after(0.1)
        proxy = wrap(raw, name="search_arrow")
        matcher = displayed()
        proxy.wait_until(matcher, timeout=2).should(matcher).should(has_text("search-arrow"))

    def test_emits_timing_events(self, element):
        """Should report wait progress through the timing logger."""
        TIMING_LOGGER.configure(console=False, keep_history=True)
        TIMING_LOGGER.enable()

        wrap(element, name="search_arrow").wait_until(displayed())

        events = [e.event for e in TIMING_LOGGER.history()]
        assert events == ["wait_start", "wait_success"]
        assert "search_arrow" in TIMING_LOGGER.history()[0].description

    def test_timing_events_written_to_file(self, fake_element, tmp_path):
        """Should append timeout events to the configured log file."""
        log_file = tmp_path / "logs" / "timing.log"
        TIMING_LOGGER.configure(console=False, file_path=str(log_file))
        TIMING_LOGGER.enable()

        with pytest.raises(WaitTimeout):
            wrap(fake_element(displayed=False)).wait_until(displayed(), timeout=0.1)

        content = log_file.read_text(encoding="utf-8")
        assert "event=wait_start" in content
        assert "event=wait_timeout" in content


class TestTimingLogger:
    """Tests for TimingLogger and TimingEvent."""

    def test_event_line_format(self):
        event = TimingEvent("wait_timeout", "arrow", "error", {"attempts": 3}, timestamp="12:00:00")
        assert event.format() == (
            "[error] [timing] time=12:00:00 event=wait_timeout description=arrow attempts=3"
        )

    def test_disabled_logger_records_nothing(self):
        TIMING_LOGGER.configure(console=False, keep_history=True)
        TIMING_LOGGER.log(event="wait_start")
        assert TIMING_LOGGER.history() == []

    def test_transient_failures_logged_as_warnings(self, element):
        TIMING_LOGGER.configure(console=False, keep_history=True)
        TIMING_LOGGER.enable()
        element.fail_next(StaleElementError("search_arrow"))

        with TimeConfig.override(element_wait={"interval": 0.05}):
            wrap(element).wait_until(displayed())

        transient = [e for e in TIMING_LOGGER.history() if e.event == "wait_transient"]
        assert len(transient) == 1
        assert transient[0].status == "warning"
        assert transient[0].metadata["error"] == "StaleElementError"


class TestWaitTimeoutAttributes:
    """Tests for WaitTimeout attributes."""

    def test_get_root_cause(self):
        """Should get root cause from nested exceptions."""
        inner = ValueError("root cause")
        middle = WaitTimeout("inner timeout", original_exception=inner)
        error = WaitTimeout("outer timeout", original_exception=middle)

        root = error.get_root_cause()
        assert root is inner
        assert str(root) == "root cause"

    def test_get_traceback_str(self):
        """Should get formatted traceback string."""
        try:
            raise ValueError("test error")
        except ValueError as e:
            error = WaitTimeout("timeout", original_exception=e)

            tb_str = error.get_traceback_str()
            assert "ValueError" in tb_str
            assert "test error" in tb_str

    def test_traceback_empty_without_cause(self):
        assert WaitTimeout("timeout").get_traceback_str() == ""


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
