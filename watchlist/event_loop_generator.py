"""Event loop whose worker thread runs events pulled lazily from generators."""

from __future__ import annotations

import itertools
import threading
import time
from collections import deque
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass

from watchlist import logger

_GENERATE_INTERVAL = 0.1


@dataclass(frozen=True)
class GeneratedEvent:
    """A named action to be run by the event loop."""

    id: int
    name: str
    action: Callable[[], None]


class EventLoopGenerator:
    """Run scheduled events one by one on a worker thread.

    Event sequences produced by :meth:`event_generator` are consumed on a
    producer thread by :meth:`process_event_sequence`, which schedules each
    event as it is generated. On close the worker runs what is still queued.
    """

    _ids = itertools.count(1)
    _ids_lock = threading.Lock()

    def __init__(self) -> None:
        self._events: deque[GeneratedEvent] = deque()
        self._condition = threading.Condition()
        self._running = True
        self._worker = threading.Thread(
            target=self._run, name="generator-event-loop", daemon=True
        )
        self._worker.start()

    def schedule_event(self, name: str, action: Callable[[], None]) -> None:
        """Queue ``action`` under ``name``; ids increase across all loops."""
        with self._ids_lock:
            event_id = next(self._ids)
        with self._condition:
            self._events.append(GeneratedEvent(event_id, name, action))
            self._condition.notify()

    def event_generator(
        self, count: int, pattern_name: str, pattern_action: Callable[[int], None]
    ) -> Iterator[GeneratedEvent]:
        """Lazily yield ``count`` events named ``"<pattern_name> #<n>"``."""
        for i in range(count):
            yield GeneratedEvent(i, f"{pattern_name} #{i + 1}", lambda i=i: pattern_action(i))
            time.sleep(_GENERATE_INTERVAL)

    def process_event_sequence(self, events: Iterable[GeneratedEvent]) -> threading.Thread:
        """Schedule every event of ``events`` from a new producer thread."""

        def produce() -> None:
            for event in events:
                self.schedule_event(event.name, event.action)

        producer = threading.Thread(target=produce, name="generator-producer", daemon=True)
        producer.start()
        return producer

    def close(self) -> None:
        """Stop the loop once the queued events have run, and join the worker."""
        with self._condition:
            self._running = False
            self._condition.notify_all()
        if self._worker is not threading.current_thread():
            self._worker.join()

    def _run(self) -> None:
        while True:
            with self._condition:
                self._condition.wait_for(lambda: not self._running or bool(self._events))
                if not self._events:
                    if not self._running:
                        return
                    continue
                event = self._events.popleft()
            try:
                logger.info(f"Processing event: {event.name} (ID: {event.id})")
                event.action()
            except Exception as exc:
                logger.log_exception(exc)

    def __enter__(self) -> EventLoopGenerator:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()