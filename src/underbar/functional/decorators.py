"""Function decorators that wrap a callable with a little private state.

Each decorator returns an object that owns its state and exposes a single
callable entry point, so it can stand in for the wrapped function:

    - **once**: run the function a single time and replay its result.
    - **memoize**: cache results per argument, forever.
    - **delay**: run the function later, once, without blocking the caller.
    - **throttle**: run the function at most once per time window.

Wrappers keep the wrapped function's name and docstring. State is guarded by a
re-entrant lock because deferred calls run on timer threads.

Note:
    Waits are expressed in milliseconds.
"""

import asyncio
import functools
import threading
import time
import typing as tp

from underbar.config import settings
from underbar.logger.logger import logger

__all__ = ["once", "memoize", "delay", "throttle"]


class _Once:
    """Callable that invokes ``func`` on its first call only."""

    def __init__(self, func: tp.Callable[..., tp.Any]):
        functools.update_wrapper(self, func)
        self._func = func
        self._lock = threading.RLock()
        self.called = False
        self.result = None

    def __call__(self, *args, **kwargs):
        with self._lock:
            if not self.called:
                self.result = self._func(*args, **kwargs)
                self.called = True
        return self.result

    def __get__(self, instance, owner=None):
        # Bind like a plain function so methods receive their instance
        if instance is None:
            return self
        return functools.partial(self, instance)


class _Memoized:
    """Callable caching ``func(arg)`` per argument in ``cache``."""

    def __init__(self, func: tp.Callable[[tp.Any], tp.Any]):
        functools.update_wrapper(self, func)
        self._func = func
        self._lock = threading.RLock()
        self.cache: tp.Dict[tp.Hashable, tp.Any] = {}

    def __call__(self, arg):
        key = _cache_key(arg)
        with self._lock:
            if key not in self.cache:
                self.cache[key] = self._func(arg)
            return self.cache[key]


def _cache_key(arg: tp.Any) -> tp.Hashable:
    try:
        hash(arg)
    except TypeError:
        # Unhashable arguments are keyed by their repr; colliding reprs share a slot
        return repr(arg)
    return arg


class _Throttled:
    """Callable running ``func`` at most once per ``wait`` window.

    The first call after a quiet period runs immediately (leading edge). Calls
    landing inside the window only record their arguments; when the window
    closes a single trailing call runs with the most recent ones.
    """

    def __init__(self, func: tp.Callable[..., tp.Any], wait: float):
        functools.update_wrapper(self, func)
        self._func = func
        self._wait = max(wait, 0) / 1000.0
        self._lock = threading.RLock()
        self._previous: tp.Optional[float] = None
        self._pending: tp.Optional[tp.Tuple[tuple, dict]] = None
        self._timer: tp.Optional[threading.Timer] = None
        self._generation = 0
        self.result = None

    def __call__(self, *args, **kwargs):
        with self._lock:
            now = time.monotonic()
            if self._previous is None or now - self._previous >= self._wait:
                self._stop_timer()
                self._pending = None
                self._previous = now
                self.result = self._func(*args, **kwargs)
            else:
                self._pending = (args, kwargs)
                if self._timer is None:
                    remaining = self._wait - (now - self._previous)
                    self._start_timer(remaining)
            return self.result

    def cancel(self) -> None:
        """Drop any pending trailing call and reset the window."""
        with self._lock:
            self._stop_timer()
            self._pending = None
            self._previous = None

    def _start_timer(self, interval: float) -> None:
        self._generation += 1
        self._timer = threading.Timer(
            interval, self._trailing, args=(self._generation,)
        )
        self._timer.daemon = settings.TIMER_DAEMON
        self._timer.start()

    def _stop_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self._generation += 1

    def _trailing(self, generation: int) -> None:
        with self._lock:
            # A leading call or cancel() superseded this timer
            if generation != self._generation:
                return
            self._timer = None
            if self._pending is None:
                return
            args, kwargs = self._pending
            self._pending = None
            self._previous = time.monotonic()
            logger.debug(f"Running trailing call of throttled {self._func!r}")
            self.result = _run_deferred(self._func, args, kwargs)


def _run_deferred(func, args, kwargs=None):
    try:
        return func(*args, **(kwargs or {}))
    except Exception as e:
        logger.error(
            f"Deferred call to {getattr(func, '__name__', func)!r} failed: {e}",
            exc_info=True,
        )
        raise


def once(func: tp.Callable[..., tp.Any]) -> tp.Callable[..., tp.Any]:
    """Return a wrapper that runs ``func`` at most one time.

    The first call passes its arguments through and caches the result; every
    later call returns that result without calling ``func``, whatever its
    arguments.

    Example:
        >>> initialize = once(lambda: print("setup") or 42)
        >>> initialize()
        setup
        42
        >>> initialize()
        42
    """
    return _Once(func)


def memoize(func: tp.Callable[[tp.Any], tp.Any]) -> tp.Callable[[tp.Any], tp.Any]:
    """Return a single-argument wrapper that caches ``func``'s results.

    The argument is the cache key. Unhashable arguments are keyed by their
    ``repr``, so distinct arguments with equal reprs (``[1, 2]`` and the
    string ``"[1, 2]"``) share one cached result. The cache is exposed as
    ``.cache`` and is never pruned.
    """
    return _Memoized(func)


def delay(func: tp.Callable[..., tp.Any], wait: float, *args: tp.Any) -> None:
    """Call ``func(*args)`` once, no sooner than ``wait`` milliseconds from now.

    Returns immediately. Inside a running asyncio event loop the call is
    scheduled on that loop; otherwise it runs on a ``threading.Timer``.
    There is no way to cancel the call.

    Args:
        func: Callable to run later.
        wait: Delay in milliseconds. Negative waits count as zero.
        *args: Positional arguments for ``func``.
    """
    wait = max(wait, 0)

    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        loop = None

    if loop is not None:
        logger.debug(f"Scheduling {func!r} on event loop in {wait}ms")
        loop.call_later(wait / 1000.0, _run_deferred, func, args)
        return None

    logger.debug(f"Scheduling {func!r} on timer thread in {wait}ms")
    timer = threading.Timer(wait / 1000.0, _run_deferred, args=(func, args))
    timer.daemon = settings.TIMER_DAEMON
    timer.start()
    return None


def throttle(func: tp.Callable[..., tp.Any], wait: float) -> tp.Callable[..., tp.Any]:
    """Return a wrapper that calls ``func`` at most once per ``wait`` ms.

    Both edges fire: a call after a quiet period runs immediately, and calls
    made during the window collapse into one trailing call, using the latest
    arguments, once the window ends. Each call returns the result of the most
    recent completed invocation. The wrapper's ``cancel()`` discards a
    pending trailing call. A negative ``wait`` counts as zero.
    """
    return _Throttled(func, wait)
