"""Thread-safe task queue served by a set of worker threads."""

from __future__ import annotations

import threading
from collections import deque
from collections.abc import Callable
from concurrent.futures import Future
from typing import Any


class TaskQueue:
    """Queue of callables served by threads started with :meth:`start`.

    Tasks may be queued before any thread runs. :meth:`finish` sends one stop
    marker per running thread behind the queued work and waits for them;
    :meth:`cancel_pending` drops every task not yet started.
    """

    def __init__(self) -> None:
        self._condition = threading.Condition()
        self._work: deque[tuple[Callable[[], Any], Future] | None] = deque()
        self._threads: list[threading.Thread] = []

    def queue(self, func: Callable[[], Any]) -> Future:
        """Queue ``func`` and return a future for the value it returns."""
        future: Future = Future()
        with self._condition:
            self._work.append((func, future))
            self._condition.notify()
        return future

    def start(self, count: int = 1) -> None:
        """Start ``count`` worker threads."""
        for _ in range(count):
            thread = threading.Thread(target=self._thread_task, daemon=True)
            self._threads.append(thread)
            thread.start()

    def abort(self) -> None:
        """Cancel every pending task, then stop and wait for the workers."""
        self.cancel_pending()
        self.finish()

    def cancel_pending(self) -> None:
        """Drop every task that has not started; their futures are cancelled."""
        with self._condition:
            dropped = list(self._work)
            self._work.clear()
        for entry in dropped:
            if entry is not None:
                entry[1].cancel()

    def finish(self) -> None:
        """Ask every worker to stop after the queued work and wait for them."""
        with self._condition:
            self._work.extend(None for _ in self._threads)
            self._condition.notify_all()
        current = threading.current_thread()
        for thread in self._threads:
            if thread is not current:
                thread.join()
        self._threads.clear()

    def _thread_task(self) -> None:
        while True:
            with self._condition:
                self._condition.wait_for(lambda: bool(self._work))
                entry = self._work.popleft()
            if entry is None:
                return
            func, future = entry
            if not future.set_running_or_notify_cancel():
                continue
            try:
                result = func()
            except Exception as exc:
                future.set_exception(exc)
            else:
                future.set_result(result)

    def __enter__(self) -> TaskQueue:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.finish()