# uiauto_elements/waits.py
"""
@file waits.py
@brief Polling loop for matcher waits with transient-failure tolerance.
"""

from __future__ import annotations

import time
from typing import Callable, Optional, Tuple

from .exceptions import ContextLostError, DispatchError, MissingContext, WaitTimeout
from .timinglogger import TIMING_LOGGER

# Driver exceptions meaning the session, window or frame is gone. Matched by
# class name so no driver package is imported here.
FATAL_ERROR_NAMES = frozenset({
    "NoSuchWindowException",
    "NoSuchFrameException",
    "InvalidSessionIdException",
})

FATAL_ERROR_TYPES: Tuple[type, ...] = (ContextLostError, MissingContext, DispatchError)

Probe = Callable[[], Tuple[bool, str]]


def _now() -> float:
    """Monotonic time source for deterministic timeout calculations."""
    return time.monotonic()


def is_fatal(error: BaseException) -> bool:
    """
    Classify an exception raised while polling.

    Fatal errors abort a wait immediately; everything else is treated as a
    mismatch for that attempt.
    """
    if isinstance(error, FATAL_ERROR_TYPES):
        return True
    return any(cls.__name__ in FATAL_ERROR_NAMES for cls in type(error).__mro__)


def wait_for_match(
    probe: Probe,
    timeout: float,
    interval: float = 0.1,
    description: str = "condition",
    stage: Optional[str] = None,
    element_name: Optional[str] = None,
    expected: Optional[str] = None,
) -> int:
    """
    Poll probe until it reports a match or timeout elapses.

    The first attempt runs immediately. A final attempt runs at the deadline,
    so a timeout is raised no later than one interval after it.

    @param probe Callable returning (matched, mismatch_description)
    @param timeout Seconds to keep polling
    @param interval Seconds to sleep between attempts
    @param description What is being waited for, for messages and logs
    @param stage Optional stage tag for logs
    @param element_name Element name carried by WaitTimeout
    @param expected Matcher description carried by WaitTimeout
    @return Number of attempts made
    @throws WaitTimeout if the probe never matched
    """
    start_time = _now()
    last_mismatch: Optional[str] = None
    last_exception: Optional[BaseException] = None
    attempt_count = 0

    if TIMING_LOGGER.is_enabled():
        TIMING_LOGGER.log(
            event="wait_start",
            description=description,
            metadata={"timeout_s": timeout, "interval_s": interval, "stage": stage},
        )

    while True:
        attempt_count += 1
        try:
            matched, mismatch = probe()
        except Exception as e:
            if is_fatal(e):
                if TIMING_LOGGER.is_enabled():
                    TIMING_LOGGER.log(
                        event="wait_fatal",
                        description=description,
                        status="error",
                        metadata={"attempts": attempt_count, "error": type(e).__name__},
                    )
                raise
            matched = False
            mismatch = f"{type(e).__name__}: {e}"
            last_exception = e
            if TIMING_LOGGER.is_enabled():
                TIMING_LOGGER.log(
                    event="wait_transient",
                    description=description,
                    status="warning",
                    metadata={"attempt": attempt_count, "error": type(e).__name__},
                )

        if matched:
            if TIMING_LOGGER.is_enabled():
                TIMING_LOGGER.log(
                    event="wait_success",
                    description=description,
                    status="success",
                    metadata={
                        "attempts": attempt_count,
                        "elapsed_s": round(_now() - start_time, 3),
                        "stage": stage,
                    },
                )
            return attempt_count

        last_mismatch = mismatch
        time_left = timeout - (_now() - start_time)
        if time_left <= 0:
            break
        time.sleep(min(interval, time_left))

    elapsed = _now() - start_time
    if TIMING_LOGGER.is_enabled():
        TIMING_LOGGER.log(
            event="wait_timeout",
            description=description,
            status="error",
            metadata={
                "timeout_s": timeout,
                "attempts": attempt_count,
                "elapsed_s": round(elapsed, 3),
                "stage": stage,
            },
        )

    raise WaitTimeout(
        f"Timed out after {timeout}s waiting for {description}: {last_mismatch}",
        element_name=element_name,
        expected=expected,
        last_mismatch=last_mismatch,
        timeout=timeout,
        elapsed_time=elapsed,
        attempt_count=attempt_count,
        original_exception=last_exception,
        stage=stage,
    )
