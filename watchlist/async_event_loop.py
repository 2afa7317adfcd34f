"""Event loop combining delayed coroutines, event waiters and event streams."""

from __future__ import annotations

import heapq
import itertools
import threading
import time
from collections.abc import Callable, Generator, Iterable, Iterator
from dataclasses import dataclass
from typing import Any, Union

from watchlist import logger
from watchlist.event_loop_coroutine import Delay

_PROCESS_INTERVAL = 0.2

EventData = Union[int, float, str]


@dataclass(frozen=True)
class Event:
    """A named event carrying an int, float or str payload."""

    name: str
    data: EventData = 0

    def get_data(self, kind: type) -> Any:
        """Return the payload if it is of type ``kind``; raise TypeError otherwise."""
        if not isinstance(self.data, kind):
            raise TypeError(
                f"event {self.name!r} holds {type(self.data).__name__}, not {kind.__name__}"
            )
        return self.data


@dataclass(frozen=True)
class _EventAwaiter:
    name: str


class _Suspend:
    """Awaitable that leaves a task suspended until it is resumed by hand."""


_SUSPEND = _Suspend()

_Coroutine = Generator[Any, Any, Any]


class Task:
    """A coroutine driven by an :class:`AsyncEventLoop`.

    The coroutine starts running as soon as the task is created and runs until
    it yields an awaitable: a :class:`Delay`, an event wait, or a plain
    suspension that only :meth:`resume` ends.
    """

    def __init__(self, loop: AsyncEventLoop, coroutine: _Coroutine) -> None:
        self._loop = loop
        self._coroutine = coroutine
        self._lock = threading.RLock()
        self._finished = threading.Event()
        self._advance(None)

    @property
    def done(self) -> bool:
        """True once the coroutine has returned or failed."""
        return self._finished.is_set()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the task is done; return False on timeout."""
        return self._finished.wait(timeout)

    def resume(self) -> None:
        """Resume the coroutine from its current suspension; no-op once done."""
        self._advance(None)

    def _advance(self, value: Any) -> None:
        with self._lock:
            if self._finished.is_set():
                return
            error: Exception | None = None
            while True:
                try:
                    if error is not None:
                        awaitable = self._coroutine.throw(error)
                    else:
                        awaitable = self._coroutine.send(value)
                except StopIteration:
                    self._finished.set()
                    return
                except Exception as exc:
                    logger.log_exception(exc)
                    self._finished.set()
                    return
                try:
                    self._loop._suspend(self, awaitable)
                    return
                except TypeError as exc:
                    error = exc


class AsyncEventLoop:
    """Worker thread that resumes tasks when their delay ends or their event arrives.

    Tasks woken by events are resumed before delayed tasks, the most recently
    woken first. Closing the loop waits for delayed and woken tasks, but not
    for tasks still waiting for an event.
    """

    def __init__(self) -> None:
        self._delayed: list[tuple[float, int, Task]] = []
        self._sequence = itertools.count()
        self._pending: list[tuple[Task, Event]] = []
        self._waiters: dict[str, list[Task]] = {}
        self._condition = threading.Condition()
        self._running = True
        self._worker = threading.Thread(
            target=self._run, name="async-event-loop", daemon=True
        )
        self._worker.start()

    def schedule_after(self, delay: float, task: Callable[[], Any]) -> Task:
        """Run ``task`` on the worker after ``delay`` seconds."""

        def coroutine() -> _Coroutine:
            yield Delay(delay)
            task()

        return Task(self, coroutine())

    def schedule(self, task: Callable[[], Any]) -> Task:
        """Return a suspended task that runs ``task`` when resumed."""

        def coroutine() -> _Coroutine:
            yield _SUSPEND
            task()

        return Task(self, coroutine())

    def create_event_stream(self, pattern: str, count: int) -> Iterator[Event]:
        """Lazily yield ``count`` events named ``<pattern>_<i>`` with data ``i``."""
        for i in range(count):
            yield Event(f"{pattern}_{i}", i)

    def wait_for_event(self, event_name: str) -> Task:
        """Return a task that finishes once an event named ``event_name`` is emitted."""

        def coroutine() -> _Coroutine:
            event = yield _EventAwaiter(event_name)
            logger.info(f"Event received: {event.name}")

        return Task(self, coroutine())

    def process_events(self, events: Iterable[Event]) -> Task:
        """Return a task that emits each event of ``events``, pausing between them."""

        def coroutine() -> _Coroutine:
            for event in events:
                logger.info(f"Processing event: {event.name}")
                self.emit_event(event)
                yield Delay(_PROCESS_INTERVAL)

        return Task(self, coroutine())

    def emit_event(self, event: Event) -> None:
        """Wake every task currently waiting for an event with this name."""
        with self._condition:
            waiters = self._waiters.pop(event.name, None)
            if waiters:
                self._pending.extend((task, event) for task in waiters)
            self._condition.notify()
        if waiters:
            logger.debug(f"Emitted event: {event.name}")

    def close(self) -> None:
        """Stop once delayed and woken tasks have run, and join the worker."""
        with self._condition:
            self._running = False
            self._condition.notify_all()
        if self._worker is not threading.current_thread():
            self._worker.join()

    def _suspend(self, task: Task, awaitable: Any) -> None:
        if isinstance(awaitable, Delay):
            with self._condition:
                heapq.heappush(
                    self._delayed, (awaitable.wakeup_time(), next(self._sequence), task)
                )
                self._condition.notify()
        elif isinstance(awaitable, _EventAwaiter):
            with self._condition:
                self._waiters.setdefault(awaitable.name, []).append(task)
        elif awaitable is _SUSPEND:
            return
        else:
            raise TypeError(f"cannot await {awaitable!r} on an AsyncEventLoop")

    def _run(self) -> None:
        while True:
            with self._condition:
                while True:
                    if not self._running and not self._delayed and not self._pending:
                        return
                    if self._pending:
                        task, value = self._pending.pop()
                        break
                    now = time.monotonic()
                    if self._delayed and self._delayed[0][0] <= now:
                        _, _, task = heapq.heappop(self._delayed)
                        value = None
                        break
                    timeout = self._delayed[0][0] - now if self._delayed else None
                    self._condition.wait(timeout)
            task._advance(value)

    def __enter__(self) -> AsyncEventLoop:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()