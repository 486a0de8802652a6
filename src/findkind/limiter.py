"""Non-blocking bounded token pool used to gate background work."""

from __future__ import annotations

import threading


class ConcurrencyLimiter:
    """Fixed-capacity pool of slots that never blocks the caller.

    ``try_acquire`` either takes a slot or reports that none is free, so a
    dispatcher can fall back to running the work on its own thread instead
    of waiting on workers that may themselves be waiting on it.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._capacity = capacity
        self._held = 0
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def held(self) -> int:
        with self._lock:
            return self._held

    def try_acquire(self) -> bool:
        """Take a slot if one is free; return whether it was taken."""
        with self._lock:
            if self._held >= self._capacity:
                return False
            self._held += 1
            return True

    def release(self) -> None:
        """Return one previously acquired slot."""
        with self._lock:
            if self._held == 0:
                raise ValueError("release() called without a matching try_acquire()")
            self._held -= 1
