"""Tests for the Dispatcher inline fallback and ScanContext cancellation."""

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from findkind.dispatch import Dispatcher, ScanContext
from findkind.limiter import ConcurrencyLimiter


@pytest.fixture
def executor():
    with ThreadPoolExecutor(max_workers=4) as pool:
        yield pool


class TestScanContext:
    def test_first_failure_wins(self):
        context = ScanContext()
        first = RuntimeError("first")

        context.fail(first)
        context.fail(RuntimeError("second"))

        assert context.cancelled
        assert context.error is first


class TestDispatcher:
    def test_runs_inline_when_pool_is_saturated(self, executor):
        limiter = ConcurrencyLimiter(1)
        dispatcher = Dispatcher(executor, limiter, ScanContext())
        release = threading.Event()
        threads = []

        def blocker():
            threads.append(threading.get_ident())
            release.wait(timeout=5)

        def quick():
            threads.append(threading.get_ident())

        dispatcher.dispatch(blocker)
        dispatcher.dispatch(quick)
        release.set()
        dispatcher.join()

        assert threading.get_ident() in threads
        assert len(threads) == 2
        assert limiter.held == 0

    def test_held_slots_never_exceed_capacity(self, executor):
        limiter = ConcurrencyLimiter(2)
        dispatcher = Dispatcher(executor, limiter, ScanContext())
        observed = []

        def work():
            observed.append(limiter.held)

        for _ in range(50):
            dispatcher.dispatch(work)
        dispatcher.join()

        assert len(observed) == 50
        assert max(observed) <= 2

    def test_nested_dispatch_is_joined(self, executor):
        dispatcher = Dispatcher(executor, ConcurrencyLimiter(2), ScanContext())
        done = []

        def child(n):
            done.append(n)

        def parent():
            for n in range(10):
                dispatcher.dispatch(child, n)

        dispatcher.dispatch(parent)
        dispatcher.join()

        assert sorted(done) == list(range(10))

    def test_failure_cancels_further_dispatch(self, executor):
        context = ScanContext()
        dispatcher = Dispatcher(executor, ConcurrencyLimiter(1), context)
        calls = []

        def boom():
            raise RuntimeError("boom")

        dispatcher.dispatch(boom)
        dispatcher.join()

        assert context.cancelled
        assert str(context.error) == "boom"
        assert dispatcher.dispatch(calls.append, 1) is False
        assert calls == []

    def test_inline_failure_is_recorded(self, executor):
        context = ScanContext()
        limiter = ConcurrencyLimiter(1)
        assert limiter.try_acquire()
        dispatcher = Dispatcher(executor, limiter, context)

        def boom():
            raise ValueError("inline")

        assert dispatcher.dispatch(boom)

        assert isinstance(context.error, ValueError)
        limiter.release()
