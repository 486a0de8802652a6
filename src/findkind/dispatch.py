"""Bounded work dispatch with inline fallback and scan-wide cancellation."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Executor
from collections.abc import Callable
from typing import Any

from .limiter import ConcurrencyLimiter

logger = logging.getLogger(__name__)


class ScanContext:
    """Shared cancellation state: the first failure wins and stops new work."""

    def __init__(self) -> None:
        self._cancelled = threading.Event()
        self._lock = threading.Lock()
        self._error: BaseException | None = None

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    @property
    def error(self) -> BaseException | None:
        with self._lock:
            return self._error

    def fail(self, exc: BaseException) -> None:
        with self._lock:
            if self._error is None:
                self._error = exc
                logger.debug("Scan cancelled: %s", exc)
        self._cancelled.set()


class Dispatcher:
    """Run units of work on the executor when a slot is free, inline otherwise.

    Submitted work must not wait on other submitted work; ``join`` is the only
    place that waits, and it waits for every unit dispatched so far, including
    units dispatched by other units.
    """

    def __init__(
        self,
        executor: Executor,
        limiter: ConcurrencyLimiter,
        context: ScanContext,
    ) -> None:
        self._executor = executor
        self._limiter = limiter
        self._context = context
        self._pending = 0
        self._settled = threading.Condition()

    @property
    def context(self) -> ScanContext:
        return self._context

    def dispatch(self, fn: Callable[..., Any], *args: Any) -> bool:
        """Start ``fn(*args)``; return False if the scan is already cancelled."""
        if self._context.cancelled:
            return False
        if not self._limiter.try_acquire():
            self._run(fn, args)
            return True
        with self._settled:
            self._pending += 1
        try:
            self._executor.submit(self._run_leased, fn, args)
        except BaseException:
            self._settle()
            raise
        return True

    def join(self) -> None:
        with self._settled:
            self._settled.wait_for(lambda: self._pending == 0)

    def _run(self, fn: Callable[..., Any], args: tuple[Any, ...]) -> None:
        try:
            fn(*args)
        except Exception as exc:
            self._context.fail(exc)

    def _run_leased(self, fn: Callable[..., Any], args: tuple[Any, ...]) -> None:
        try:
            self._run(fn, args)
        finally:
            self._settle()

    def _settle(self) -> None:
        self._limiter.release()
        with self._settled:
            self._pending -= 1
            if self._pending == 0:
                self._settled.notify_all()
