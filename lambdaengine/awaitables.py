"""Coroutine tasks resumed on a thread pool, on the next tick or after a delay."""

from __future__ import annotations

import collections
import datetime
import heapq
import itertools
import threading
import time
from typing import Any, Callable, Coroutine, Generator

from . import log
from .thread_pool import ThreadPool

Resume = Callable[[], None]
Schedule = Callable[[Resume], None]


class AwaitableManager:
    """Holds suspended coroutines and hands ready ones to a thread pool.

    ``await manager.next_tick()`` resumes on the next :meth:`pump`;
    ``await manager.sleep(t)`` resumes on the first pump after ``t`` has passed.
    """

    def __init__(self, pool: ThreadPool) -> None:
        self._pool = pool
        self._lock = threading.Lock()
        self._next_tick: collections.deque[Resume] = collections.deque()
        self._timers: list[tuple[float, int, Resume]] = []
        self._sequence = itertools.count()
        self._exception_lock = threading.Lock()
        self._exceptions: collections.deque[BaseException] = collections.deque()

    def next_tick(self) -> "_NextTick":
        """An awaitable that resumes on the next pump."""
        return _NextTick(self)

    def sleep(self, wait_time: float | datetime.timedelta) -> "_Sleep":
        """An awaitable that resumes once ``wait_time`` seconds have passed.

        A wait of zero or less does not suspend at all.
        """
        if isinstance(wait_time, datetime.timedelta):
            wait_time = wait_time.total_seconds()
        return _Sleep(self, float(wait_time))

    def pump(self) -> None:
        """Send every ready coroutine to the pool, then re-raise one stored failure."""
        with self._lock:
            ready = list(self._next_tick)
            self._next_tick.clear()

            now = time.monotonic()
            while self._timers and self._timers[0][0] <= now:
                ready.append(heapq.heappop(self._timers)[2])

        for resume in ready:
            self._pool.add(self._job(resume))

        self._rethrow_one()

    def _job(self, resume: Resume) -> Callable[[], None]:
        def run() -> None:
            try:
                resume()
            except BaseException as exc:
                with self._exception_lock:
                    self._exceptions.append(exc)

        return run

    def _rethrow_one(self) -> None:
        with self._exception_lock:
            if not self._exceptions:
                return
            exc = self._exceptions.popleft()
        raise exc

    def _push_next_tick(self, resume: Resume) -> None:
        with self._lock:
            self._next_tick.append(resume)

    def _push_timer(self, wait_time: float, resume: Resume) -> None:
        with self._lock:
            deadline = time.monotonic() + wait_time
            heapq.heappush(self._timers, (deadline, next(self._sequence), resume))


class _NextTick:
    def __init__(self, manager: AwaitableManager) -> None:
        self._manager = manager

    def __await__(self) -> Generator[Schedule, None, None]:
        yield self._manager._push_next_tick


class _Sleep:
    def __init__(self, manager: AwaitableManager, wait_time: float) -> None:
        self._manager = manager
        self._wait_time = wait_time

    def __await__(self) -> Generator[Schedule, None, None]:
        if self._wait_time <= 0:
            return
        manager, wait_time = self._manager, self._wait_time
        yield lambda resume: manager._push_timer(wait_time, resume)


class Task:
    """Runs a coroutine eagerly until its first suspension.

    An exception escaping the coroutine is logged and ends the task.
    """

    def __init__(self, coroutine: Coroutine[Any, Any, Any]) -> None:
        self._coroutine = coroutine
        self._done = False
        self._resume()

    def done(self) -> bool:
        """Whether the coroutine has finished."""
        return self._done

    def _resume(self) -> None:
        try:
            schedule = self._coroutine.send(None)
        except StopIteration:
            self._done = True
            return
        except Exception:
            self._done = True
            log.error("Unhandled task exception")
            return

        if not callable(schedule):
            self._coroutine.close()
            self._done = True
            log.error("Unhandled task exception")
            return

        schedule(self._resume)


def start_task(coroutine: Coroutine[Any, Any, Any]) -> Task:
    """Start ``coroutine`` as a task and return it."""
    return Task(coroutine)