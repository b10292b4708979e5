# gymdesk/shared/utils/rate_limiter.py

"""
In-memory sliding-window rate limiter.

Each key owns a FIFO of admission timestamps guarded by its own lock, so
callers on different keys never wait on each other while callers on the same
key see one consistent prune/check/append step. The key map itself is
bounded: it is kept in LRU order and capped at ``max_keys``, and
``evict_stale`` drops windows that saw no traffic for a while.

State is process-local and is lost on restart.
"""

import logging
import threading
import time
from collections import OrderedDict, deque
from datetime import timedelta
from typing import Callable, Deque, Optional, Union

logger = logging.getLogger(__name__)

WindowLength = Union[timedelta, int, float]


class _Window:
    __slots__ = ("lock", "timestamps", "retired")

    def __init__(self):
        self.lock = threading.Lock()
        self.timestamps: Deque[float] = deque()
        self.retired = False


def _seconds(window: WindowLength) -> float:
    if isinstance(window, timedelta):
        return window.total_seconds()
    return float(window)


class SlidingWindowRateLimiter:
    """
    Admission gate keyed by an arbitrary string (namespace + caller identity).

    Attributes:
        max_keys: Maximum number of tracked keys before the least recently used is dropped
        clock: Monotonic time source in seconds
    """

    def __init__(self, max_keys: int = 10_000, clock: Callable[[], float] = time.monotonic):
        self.max_keys = max_keys
        self.clock = clock
        self._windows: "OrderedDict[str, _Window]" = OrderedDict()
        self._registry_lock = threading.Lock()

    def __len__(self) -> int:
        with self._registry_lock:
            return len(self._windows)

    def _window_for(self, key: str) -> _Window:
        """Get or create the window of ``key`` and mark it most recently used."""
        with self._registry_lock:
            window = self._windows.get(key)
            if window is None:
                window = _Window()
                self._windows[key] = window
                if self.max_keys > 0 and len(self._windows) > self.max_keys:
                    self._drop_least_recent()
            else:
                self._windows.move_to_end(key)
            return window

    def _drop_least_recent(self) -> None:
        # Caller holds the registry lock
        old_key, old_window = self._windows.popitem(last=False)
        with old_window.lock:
            old_window.retired = True
        logger.debug(f"Rate limit window dropped for key {old_key} (key cap {self.max_keys} reached)")

    def try_acquire(self, key: Optional[str], max_requests: int, window: WindowLength) -> bool:
        """
        Admit one event for ``key`` if fewer than ``max_requests`` were admitted in the trailing window.

        Args:
            key: Namespaced caller identity; a blank key is never limited
            max_requests: Events allowed per window; zero or less disables limiting
            window: Window length as a timedelta or a number of seconds; zero or less disables limiting

        Returns:
            True if the event is admitted, False if the window is full (nothing is recorded)
        """
        if key is None or not key.strip():
            return True
        window_seconds = _seconds(window)
        if max_requests <= 0 or window_seconds <= 0:
            return True

        while True:
            entry = self._window_for(key)
            with entry.lock:
                if entry.retired:
                    # Evicted between lookup and lock; retry on the live entry
                    continue
                now = self.clock()
                cutoff = now - window_seconds
                timestamps = entry.timestamps
                while timestamps and timestamps[0] < cutoff:
                    timestamps.popleft()
                if len(timestamps) >= max_requests:
                    return False
                timestamps.append(now)
                return True

    def evict_stale(self, max_age: WindowLength) -> int:
        """
        Drop windows whose newest event is older than ``max_age``.

        ``max_age`` should be at least the longest window any caller uses,
        otherwise a still-relevant history could be forgotten.

        Returns:
            Number of windows removed
        """
        cutoff = self.clock() - _seconds(max_age)
        removed = 0
        with self._registry_lock:
            for key in list(self._windows.keys()):
                entry = self._windows[key]
                with entry.lock:
                    if entry.timestamps and entry.timestamps[-1] >= cutoff:
                        continue
                    entry.retired = True
                del self._windows[key]
                removed += 1

        if removed:
            logger.info(f"Evicted {removed} stale rate limit windows")
        return removed

    def reset(self) -> None:
        """Forget every window."""
        with self._registry_lock:
            for entry in self._windows.values():
                with entry.lock:
                    entry.retired = True
            self._windows.clear()
