import asyncio
import logging
import threading
import time

import pytest
from underbar.functional.decorators import once, memoize, delay, throttle


# --- once ---


def test_once_calls_underlying_function_once():
    calls = []

    def record(*args):
        calls.append(args)
        return len(calls)

    wrapped = once(record)
    results = [wrapped(i, i * 2) for i in range(5)]

    assert calls == [(0, 0)]
    assert results == [1, 1, 1, 1, 1]


def test_once_passes_keyword_arguments():
    wrapped = once(lambda a, b=0: a + b)
    assert wrapped(1, b=2) == 3
    assert wrapped(10, b=20) == 3


def test_once_preserves_metadata():
    def setup():
        """Run setup."""

    wrapped = once(setup)
    assert wrapped.__name__ == "setup"
    assert wrapped.__doc__ == "Run setup."


def test_once_as_method_receives_instance():
    class Counter:
        def __init__(self):
            self.count = 0

        @once
        def increment(self):
            self.count += 1
            return self.count

    counter = Counter()
    assert counter.increment() == 1
    assert counter.increment() == 1
    assert counter.count == 1


def test_once_wrapping_once():
    calls = []
    wrapped = once(once(lambda: calls.append(1) or "done"))
    assert wrapped() == "done"
    assert wrapped() == "done"
    assert calls == [1]


def test_once_is_safe_across_threads():
    calls = []
    barrier = threading.Barrier(8)

    def slow():
        calls.append(1)
        time.sleep(0.01)
        return "value"

    wrapped = once(slow)
    results = []

    def worker():
        barrier.wait()
        results.append(wrapped())

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert calls == [1]
    assert results == ["value"] * 8


# --- memoize ---


def test_memoize_computes_once_per_argument():
    calls = []

    def square(x):
        calls.append(x)
        return x * x

    wrapped = memoize(square)
    assert wrapped(4) == 16
    assert wrapped(4) == 16
    assert wrapped(5) == 25
    assert calls == [4, 5]
    assert wrapped.cache == {4: 16, 5: 25}


def test_memoize_caches_none_results():
    calls = []
    wrapped = memoize(lambda x: calls.append(x))
    wrapped("a")
    wrapped("a")
    assert calls == ["a"]


def test_memoize_recursive_function():
    @memoize
    def fib(n):
        return n if n < 2 else fib(n - 1) + fib(n - 2)

    assert fib(60) == 1548008755920


def test_memoize_unhashable_argument_is_keyed_by_repr():
    wrapped = memoize(len)
    assert wrapped([1, 2]) == 2
    assert wrapped.cache == {"[1, 2]": 2}


def test_memoize_colliding_keys_share_cached_result():
    wrapped = memoize(len)
    assert wrapped([1, 2]) == 2
    # The string "[1, 2]" has the same key, so the list's result is replayed
    assert wrapped("[1, 2]") == 2
    assert wrapped({"a": 1}) == 1
    assert wrapped([3, 4, 5]) == 3


# --- delay ---


def test_delay_returns_immediately_and_calls_later():
    done = threading.Event()
    received = []

    def callback(*args):
        received.append(args)
        done.set()

    start = time.monotonic()
    assert delay(callback, 50, "a", "b") is None
    assert received == []

    assert done.wait(2)
    assert time.monotonic() - start >= 0.04
    assert received == [("a", "b")]


def test_delay_inside_event_loop():
    received = []

    async def main():
        delay(received.append, 10, "x")
        assert received == []
        await asyncio.sleep(0.1)

    asyncio.run(main())
    assert received == ["x"]


def test_delay_negative_wait_runs_as_soon_as_possible():
    done = threading.Event()
    assert delay(done.set, -1) is None
    assert done.wait(1)


def test_delay_logs_failures(caplog, monkeypatch):
    from underbar.logger.logger import logger

    monkeypatch.setattr(logger, "propagate", True)

    def failing():
        raise RuntimeError("boom")

    async def main():
        delay(failing, 0)
        await asyncio.sleep(0.05)

    with caplog.at_level(logging.ERROR, logger="underbar"):
        asyncio.run(main())

    assert "boom" in caplog.text


# --- throttle ---


@pytest.fixture
def recorder():
    calls = []
    fired = threading.Event()

    def record(value):
        calls.append(value)
        fired.set()
        return value

    record.calls = calls
    record.fired = fired
    return record


def test_throttle_runs_leading_call_immediately(recorder):
    throttled = throttle(recorder, 100)
    assert throttled(1) == 1
    assert recorder.calls == [1]


def test_throttle_coalesces_calls_into_trailing_call(recorder):
    throttled = throttle(recorder, 100)
    throttled(1)
    recorder.fired.clear()

    assert throttled(2) == 1
    assert throttled(3) == 1
    assert recorder.calls == [1]

    assert recorder.fired.wait(2)
    assert recorder.calls == [1, 3]
    time.sleep(0.05)
    assert throttled.result == 3


def test_throttle_runs_again_after_window(recorder):
    throttled = throttle(recorder, 50)
    throttled(1)
    time.sleep(0.1)
    assert throttled(2) == 2
    assert recorder.calls == [1, 2]


def test_throttle_cancel_drops_trailing_call(recorder):
    throttled = throttle(recorder, 50)
    throttled(1)
    throttled(2)
    throttled.cancel()
    time.sleep(0.15)
    assert recorder.calls == [1]


def test_throttle_zero_wait_never_defers(recorder):
    throttled = throttle(recorder, 0)
    throttled(1)
    throttled(2)
    assert recorder.calls == [1, 2]


def test_throttle_negative_wait_behaves_like_zero(recorder):
    throttled = throttle(recorder, -5)
    throttled(1)
    throttled(2)
    assert recorder.calls == [1, 2]


@pytest.mark.filterwarnings("ignore::pytest.PytestUnhandledThreadExceptionWarning")
def test_throttle_logs_failing_trailing_call(caplog, monkeypatch):
    from underbar.logger.logger import logger

    monkeypatch.setattr(logger, "propagate", True)
    attempted = threading.Event()

    def flaky(value):
        if value == "bad":
            attempted.set()
            raise RuntimeError("trailing boom")
        return value

    throttled = throttle(flaky, 30)
    with caplog.at_level(logging.ERROR, logger="underbar"):
        assert throttled("good") == "good"
        throttled("bad")
        assert attempted.wait(2)
        time.sleep(0.05)

    assert "trailing boom" in caplog.text
    assert throttled.result == "good"
