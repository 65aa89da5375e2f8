# uiauto_elements/exceptions.py
"""
@file exceptions.py
@brief Exception classes for element interception, assertions and waits.
"""

from __future__ import annotations

import traceback
from typing import Iterable, Optional


class UIAutoError(Exception):
    """Base exception for the framework."""
    pass


class ConfigError(UIAutoError):
    """Raised when timing configuration (YAML or overrides) is invalid."""
    pass


class MissingContext(UIAutoError, LookupError):
    """
    Raised when a store entry an enricher should have written is absent.

    Unreachable under a correct marker configuration. Never replaced by a
    default value.
    """

    def __init__(
        self,
        key: str,
        expected_type: Optional[type] = None,
        actual_type: Optional[type] = None,
        method: Optional[str] = None,
        message: Optional[str] = None,
    ):
        self.key = key
        self.expected_type = expected_type
        self.actual_type = actual_type
        self.method = method
        self.message = message
        super().__init__(self.__str__())

    def __str__(self) -> str:
        base = self.message or f"Missing context entry '{self.key}'"
        details = []
        if self.expected_type is not None:
            details.append(f"expected={self.expected_type.__name__}")
        if self.actual_type is not None:
            details.append(f"actual={self.actual_type.__name__}")
        if self.method:
            details.append(f"method={self.method}")
        if details:
            return f"{base} [{', '.join(details)}]"
        return base


class DispatchError(UIAutoError):
    """
    Raised when an interface cannot be dispatched: a method has neither a
    handler nor a pass-through target, or its markers are inconsistent.
    """

    def __init__(
        self,
        interface: str,
        reason: str,
        methods: Iterable[str] = (),
    ):
        self.interface = interface
        self.reason = reason
        self.methods = sorted(methods)
        super().__init__(self.__str__())

    def __str__(self) -> str:
        base = f"DispatchError: interface='{self.interface}' reason='{self.reason}'"
        if self.methods:
            base += f" methods={self.methods}"
        return base


class AssertionMismatch(UIAutoError, AssertionError):
    """
    Raised by should() when the matcher does not hold.

    Subclasses AssertionError so test runners report it as a failure.
    """

    def __init__(
        self,
        element_name: str,
        expected: str,
        mismatch: str,
        method: Optional[str] = None,
    ):
        self.element_name = element_name
        self.expected = expected
        self.mismatch = mismatch
        self.method = method
        super().__init__(self.__str__())

    def __str__(self) -> str:
        header = f"Element '{self.element_name}'"
        if self.method:
            header += f" ({self.method})"
        return (
            f"{header}\n"
            f"Expected: {self.expected}\n"
            f"     but: {self.mismatch}"
        )


class WaitTimeout(UIAutoError):
    """
    Raised when wait_until() does not see its matcher hold before the deadline.

    Attributes:
        element_name: Resolved name of the waiting element
        expected: Description of the matcher
        last_mismatch: Mismatch description from the final poll
        timeout: The configured timeout in seconds
        elapsed_time: Actual elapsed time in seconds
        attempt_count: Number of polls made
        original_exception: Last transient exception seen while polling
    """

    def __init__(
        self,
        message: str,
        *,
        element_name: Optional[str] = None,
        expected: Optional[str] = None,
        last_mismatch: Optional[str] = None,
        timeout: Optional[float] = None,
        elapsed_time: Optional[float] = None,
        attempt_count: Optional[int] = None,
        original_exception: Optional[BaseException] = None,
        stage: Optional[str] = None,
    ):
        super().__init__(message)
        self.element_name = element_name
        self.expected = expected
        self.last_mismatch = last_mismatch
        self.timeout = timeout
        self.elapsed_time = elapsed_time
        self.attempt_count = attempt_count
        self.original_exception = original_exception
        self.stage = stage

    def __str__(self) -> str:
        base_msg = super().__str__()

        details = []
        if self.original_exception is not None:
            details.append(f"Original exception: {type(self.original_exception).__name__}")
        if self.attempt_count is not None:
            details.append(f"Attempts: {self.attempt_count}")
        if self.elapsed_time is not None:
            details.append(f"Elapsed: {self.elapsed_time:.2f}s")
        if self.stage is not None:
            details.append(f"Stage: {self.stage}")

        if details:
            return f"{base_msg} [{', '.join(details)}]"
        return base_msg

    def get_root_cause(self) -> Optional[BaseException]:
        """
        Get the root cause exception by traversing the chain.

        @return The deepest original_exception in the chain, or None
        """
        current = self.original_exception
        while current is not None:
            nested = getattr(current, "original_exception", None)
            if nested is None:
                return current
            current = nested
        return None

    def get_traceback_str(self) -> str:
        """
        Get a formatted traceback string from the original exception.

        @return Formatted traceback string or empty string if no original exception
        """
        if self.original_exception is None:
            return ""

        return "".join(traceback.format_exception(
            type(self.original_exception),
            self.original_exception,
            self.original_exception.__traceback__
        ))


class StaleElementError(UIAutoError):
    """Raised by collaborators when an element reference is temporarily detached."""

    def __init__(self, element_name: str, message: Optional[str] = None):
        self.element_name = element_name
        msg = f"Element '{element_name}' is stale (no longer attached to DOM)"
        if message:
            msg += f": {message}"
        super().__init__(msg)


class ContextLostError(UIAutoError):
    """Raised by collaborators when the owning window or session no longer exists."""

    def __init__(self, message: str, element_name: Optional[str] = None):
        self.element_name = element_name
        if element_name:
            message = f"{message} (element '{element_name}')"
        super().__init__(message)
