"""Named worker threads and a fixed-size pool that runs queued jobs."""

from __future__ import annotations

import collections
import os
import threading
from typing import Any, Callable

from . import log

Job = Callable[[], Any]


def default_worker_count() -> int:
    """One fewer than the number of CPUs, kept between 1 and 32."""
    return min(max((os.cpu_count() or 1) - 1, 1), 32)


class NamedThread:
    """A named thread with a stop request and a captured exception.

    ``func`` is called as ``func(stop_event, *args)``; ``stop_event`` is set
    once :meth:`request_stop` has been called.
    """

    def __init__(self, name: str, func: Callable[..., Any], *args: Any) -> None:
        self.name = name
        self._stop = threading.Event()
        self._exception: BaseException | None = None
        self._thread = threading.Thread(
            target=self._run, args=(func, args), name=name, daemon=True
        )
        self._thread.start()

    def _run(self, func: Callable[..., Any], args: tuple) -> None:
        try:
            func(self._stop, *args)
        except BaseException as exc:  # stored for the owner to inspect
            self._exception = exc

    def request_stop(self) -> None:
        """Ask the thread to stop; it decides when to honour the request."""
        self._stop.set()

    def join(self) -> None:
        """Wait for the thread to finish."""
        if self._thread is not threading.current_thread():
            self._thread.join()

    def exception(self) -> BaseException | None:
        """The exception the thread's function raised, if any."""
        return self._exception


class ThreadPool:
    """Runs jobs on a fixed set of worker threads.

    On close the workers finish every job still queued before they stop.
    """

    def __init__(self, worker_count: int | None = None) -> None:
        if worker_count is None:
            worker_count = default_worker_count()

        self._jobs: collections.deque[Job] = collections.deque()
        self._jobs_ready = threading.Condition()
        self._pending = 0
        self._idle = threading.Condition()
        self._closed = False

        log.info("Starting thread pool with {} workers", worker_count)

        self._workers = [
            NamedThread(f"tp_worker_{index}", self._worker, f"tp_worker_{index}")
            for index in range(worker_count)
        ]

    def add(self, job: Job) -> None:
        """Queue ``job`` to run on a worker."""
        with self._idle:
            self._pending += 1
        with self._jobs_ready:
            self._jobs.append(job)
            self._jobs_ready.notify()

    def drain(self) -> None:
        """Block until every job added so far has finished."""
        with self._idle:
            self._idle.wait_for(lambda: self._pending == 0)

    def close(self) -> None:
        """Stop the workers once the queue is empty and wait for them."""
        if self._closed:
            return
        self._closed = True
        for worker in self._workers:
            worker.request_stop()
        with self._jobs_ready:
            self._jobs_ready.notify_all()
        for worker in self._workers:
            worker.join()

    def __enter__(self) -> "ThreadPool":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _worker(self, stop: threading.Event, worker_name: str) -> None:
        log.register_thread(worker_name)

        while True:
            with self._jobs_ready:
                self._jobs_ready.wait_for(lambda: bool(self._jobs) or stop.is_set())
                if stop.is_set() and not self._jobs:
                    break
                job = self._jobs.popleft()

            try:
                job()
            finally:
                with self._idle:
                    self._pending -= 1
                    if self._pending == 0:
                        self._idle.notify_all()

        log.unregister_thread(threading.get_ident())