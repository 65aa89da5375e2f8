# uiauto_elements/timinglogger.py
"""
@file timinglogger.py
@brief Timing events emitted by the matcher poll loop.

The poll loop reports wait_start, wait_transient, wait_success, wait_fatal
and wait_timeout events. Events are printed, appended to a log file and/or
kept in memory, depending on configure(). Disabled until enable() is called.
"""

from __future__ import annotations

import os
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class TimingEvent:
    """One poll loop event."""
    event: str
    description: Optional[str] = None
    status: str = "info"
    metadata: Dict[str, Any] = field(default_factory=dict)
    timestamp: str = field(default_factory=lambda: time.strftime("%H:%M:%S"))

    def format(self) -> str:
        """Render as a single 'key=value' log line."""
        parts = [f"[{self.status.lower()}]", "[timing]", f"time={self.timestamp}", f"event={self.event}"]
        if self.description:
            parts.append(f"description={self.description}")
        parts.extend(f"{key}={value}" for key, value in self.metadata.items())
        return " ".join(parts)


class TimingLogger:
    """Thread-safe sink for TimingEvents."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._enabled = False
        self._console = True
        self._file_path: Optional[str] = None
        self._history: Optional[List[TimingEvent]] = None

    def configure(
        self,
        *,
        console: bool = True,
        file_path: Optional[str] = None,
        keep_history: bool = False,
    ) -> None:
        """
        Choose where events go.

        @param console Print events to stdout
        @param file_path Append events to this file
        @param keep_history Keep events in memory, see history()
        """
        with self._lock:
            self._console = bool(console)
            self._file_path = file_path
            self._history = [] if keep_history else None

    def enable(self) -> None:
        with self._lock:
            self._enabled = True

    def disable(self) -> None:
        with self._lock:
            self._enabled = False

    def is_enabled(self) -> bool:
        return self._enabled

    def history(self) -> List[TimingEvent]:
        """Events recorded since configure(keep_history=True)."""
        with self._lock:
            return list(self._history or [])

    def log(
        self,
        *,
        event: str,
        description: Optional[str] = None,
        status: str = "info",
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Record one event if the logger is enabled."""
        if not self._enabled:
            return

        record = TimingEvent(event, description, status, dict(metadata or {}))
        line = record.format()

        with self._lock:
            if self._history is not None:
                self._history.append(record)
            if self._file_path:
                self._append(line)

        if self._console:
            print(line, flush=True)

    def _append(self, line: str) -> None:
        try:
            os.makedirs(os.path.dirname(os.path.abspath(self._file_path)) or ".", exist_ok=True)
            with open(self._file_path, "a", encoding="utf-8") as f:
                f.write(line + "\n")
        except OSError:
            pass


TIMING_LOGGER = TimingLogger()
