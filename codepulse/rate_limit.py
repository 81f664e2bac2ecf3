"""Fixed-window, in-memory request rate limiter keyed by client address."""
from __future__ import annotations

import enum
import time
from dataclasses import dataclass, field
from threading import Lock
from typing import Callable, Dict, Optional


class Decision(enum.Enum):
    ADMIT = "admit"
    REJECT = "reject"


@dataclass
class WindowState:
    """Request counts for the active window and the instant it began."""

    started_at: float
    counts: Dict[str, int] = field(default_factory=dict)

    def roll_over(self, now: float) -> None:
        self.counts.clear()
        self.started_at = now


class FixedWindowRateLimiter:
    """Thread-safe fixed-window counter shared by every client of the process.

    All clients share a single window. The window is advanced lazily: the
    first request arriving after ``window_seconds`` have elapsed clears every
    count and starts a new window at that request's timestamp. A client may
    therefore send ``max_requests`` at the end of one window and again at the
    start of the next.
    """

    def __init__(
        self,
        max_requests: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_requests < 1:
            raise ValueError("max_requests must be at least 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        self.max_requests = max_requests
        self.window = window_seconds
        self._clock = clock
        self._state = WindowState(started_at=clock())
        self._lock = Lock()

    def admit(self, client_key: str, now: Optional[float] = None) -> Decision:
        """Count a request from ``client_key`` and decide whether it may proceed."""

        if now is None:
            now = self._clock()
        with self._lock:
            state = self._state
            if now - state.started_at > self.window:
                state.roll_over(now)
            count = state.counts.get(client_key, 0)
            if count >= self.max_requests:
                return Decision.REJECT
            state.counts[client_key] = count + 1
            return Decision.ADMIT

    def allow(self, client_key: str) -> bool:
        return self.admit(client_key) is Decision.ADMIT

    def remaining(self, client_key: str, now: Optional[float] = None) -> int:
        """Return how many requests ``client_key`` has left in the current window."""

        if now is None:
            now = self._clock()
        with self._lock:
            if now - self._state.started_at > self.window:
                return self.max_requests
            return max(0, self.max_requests - self._state.counts.get(client_key, 0))

    def reset(self) -> None:
        """Drop all counts and start a fresh window (useful for tests)."""

        with self._lock:
            self._state.roll_over(self._clock())
