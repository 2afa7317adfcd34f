"""Event loop that resumes delayed generator-based coroutines on a worker thread."""

from __future__ import annotations

import heapq
import itertools
import threading
import time
from collections.abc import Callable, Generator
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Delay:
    """Awaitable yielded by a coroutine to sleep ``duration`` seconds on the loop."""

    duration: float

    def wakeup_time(self, now: float | None = None) -> float:
        """Return the monotonic time at which the delay ends."""
        if now is None:
            now = time.monotonic()
        return now + self.duration


_Coroutine = Generator[Delay, None, Any]


class EventLoopCoroutine:
    """Run delayed tasks on a worker thread.

    Each scheduled task is a coroutine that yields a :class:`Delay`; the worker
    resumes it once the delay has passed. Closing the loop waits until every
    delayed task has run.
    """

    def __init__(self) -> None:
        self._delayed: list[tuple[float, int, _Coroutine, Future]] = []
        self._sequence = itertools.count()
        self._condition = threading.Condition()
        self._running = True
        self._worker = threading.Thread(
            target=self._run, name="coroutine-event-loop", daemon=True
        )
        self._worker.start()

    def schedule_after(self, delay: float, task: Callable[[], Any]) -> Future:
        """Run ``task`` on the worker after ``delay`` seconds; return its future."""

        def coroutine() -> _Coroutine:
            yield Delay(delay)
            return task()

        future: Future = Future()
        self._advance(coroutine(), future)
        return future

    def close(self) -> None:
        """Stop the loop once all delayed tasks have run, and join the worker."""
        with self._condition:
            self._running = False
            self._condition.notify_all()
        if self._worker is not threading.current_thread():
            self._worker.join()

    def _advance(self, coroutine: _Coroutine, future: Future) -> None:
        if future.cancelled():
            coroutine.close()
            return
        try:
            awaitable = coroutine.send(None)
        except StopIteration as stop:
            if not future.cancelled():
                future.set_result(stop.value)
            return
        except Exception as exc:
            if not future.cancelled():
                future.set_exception(exc)
            return
        with self._condition:
            heapq.heappush(
                self._delayed,
                (awaitable.wakeup_time(), next(self._sequence), coroutine, future),
            )
            self._condition.notify()

    def _run(self) -> None:
        while True:
            with self._condition:
                while True:
                    if not self._running and not self._delayed:
                        return
                    if not self._delayed:
                        self._condition.wait()
                        continue
                    now = time.monotonic()
                    wakeup = self._delayed[0][0]
                    if wakeup <= now:
                        _, _, coroutine, future = heapq.heappop(self._delayed)
                        break
                    self._condition.wait(wakeup - now)
            self._advance(coroutine, future)

    def __enter__(self) -> EventLoopCoroutine:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()