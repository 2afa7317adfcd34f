"""Fixed-size pool of worker threads that run queued callables."""

from __future__ import annotations

import os
import threading
from collections import deque
from collections.abc import Callable
from concurrent.futures import Future
from typing import Any


class ThreadPoolStoppedError(RuntimeError):
    """Raised when a task is enqueued into a pool that has been shut down."""


class ThreadPoolManager:
    """Run tasks on a fixed number of worker threads.

    ``enqueue`` returns a :class:`concurrent.futures.Future` holding the task's
    result or exception. On shutdown the workers finish every task still queued
    and are then joined.
    """

    def __init__(self, max_threads: int | None = None) -> None:
        if max_threads is None:
            max_threads = os.cpu_count() or 1
        if max_threads < 0:
            raise ValueError(f"max_threads must not be negative, got {max_threads}")
        self.max_threads = max_threads
        self._tasks: deque[Callable[[], None]] = deque()
        self._condition = threading.Condition()
        self._stop = False
        self._workers = [
            threading.Thread(target=self._worker, name=f"thread-pool-worker-{n}", daemon=True)
            for n in range(max_threads)
        ]
        for worker in self._workers:
            worker.start()

    def enqueue(self, func: Callable[..., Any], *args: Any, **kwargs: Any) -> Future:
        """Queue ``func(*args, **kwargs)`` and return a future for its result."""
        future: Future = Future()

        def run() -> None:
            if not future.set_running_or_notify_cancel():
                return
            try:
                result = func(*args, **kwargs)
            except Exception as exc:
                future.set_exception(exc)
            else:
                future.set_result(result)

        with self._condition:
            if self._stop:
                raise ThreadPoolStoppedError("ThreadPoolManager is stopped")
            self._tasks.append(run)
            self._condition.notify()
        return future

    def shutdown(self) -> None:
        """Stop accepting tasks, let workers drain the queue, and join them."""
        with self._condition:
            self._stop = True
            self._condition.notify_all()
        current = threading.current_thread()
        for worker in self._workers:
            if worker is not current:
                worker.join()

    def _worker(self) -> None:
        while True:
            with self._condition:
                self._condition.wait_for(lambda: self._stop or bool(self._tasks))
                if self._stop and not self._tasks:
                    return
                task = self._tasks.popleft()
            task()

    def __enter__(self) -> ThreadPoolManager:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()