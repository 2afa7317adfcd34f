"""Runnable demonstrations of the pool and the three event loops."""

from __future__ import annotations

import time

from watchlist import logger
from watchlist.async_event_loop import AsyncEventLoop, Event
from watchlist.event_loop_coroutine import EventLoopCoroutine
from watchlist.event_loop_generator import EventLoopGenerator
from watchlist.thread_pool import ThreadPoolManager

_TASK_ONE_SECONDS = 1.0
_TASK_TWO_SECONDS = 2.0
_GEN_OBSERVE_SECONDS = 3.0
_CORO_LONG_DELAY = 1.0
_CORO_SHORT_DELAY = 0.5
_CORO_OBSERVE_SECONDS = 2.0
_ASYNC_LONG_DELAY = 1.0
_ASYNC_SHORT_DELAY = 0.25
_ASYNC_OBSERVE_SECONDS = 5.0

IMMEDIATE_TASK_MESSAGE = "Task executed immediately!"
DELAYED_TASK_MESSAGE = "Delayed task body executed"


def _sleep_then(seconds: float, result: str) -> str:
    time.sleep(seconds)
    return result


def example_thread_pool_manager() -> list[str]:
    """Run two sleeping tasks on a pool of three threads; return their results."""
    results: list[str] = []
    with ThreadPoolManager(3) as pool:
        first = pool.enqueue(_sleep_then, _TASK_ONE_SECONDS, "Task 1 completed")
        second = pool.enqueue(_sleep_then, _TASK_TWO_SECONDS, "Task 2 completed")
        for future in (first, second):
            result = future.result()
            logger.info(result)
            results.append(result)
    return results


def example_eloop_gen() -> int:
    """Schedule one event and a generated sequence of five on a generator loop."""
    with EventLoopGenerator() as loop:
        loop.schedule_event("Single Task", lambda: logger.info("Executing single task"))
        events = loop.event_generator(
            5,
            "Sequential Task",
            lambda i: logger.info(f"Executing sequential task step {i}"),
        )
        logger.info("Events initiated.")
        producer = loop.process_event_sequence(events)
        time.sleep(_GEN_OBSERVE_SECONDS)
        producer.join()
    return 0


def example_eloop_coro() -> int:
    """Schedule two delayed tasks on a coroutine loop; the shorter runs first."""
    with EventLoopCoroutine() as loop:
        loop.schedule_after(
            _CORO_LONG_DELAY, lambda: logger.info("Task executed after 1 second")
        )
        loop.schedule_after(
            _CORO_SHORT_DELAY, lambda: logger.info("Task executed after 500ms")
        )
        time.sleep(_CORO_OBSERVE_SECONDS)
    return 0


def task_to_be_executed_immediately() -> str:
    """Report that the immediate task ran and return the reported message."""
    message = IMMEDIATE_TASK_MESSAGE
    logger.info(message)
    return message


def task_to_be_executed() -> str:
    """Report that the delayed task ran and return the reported message."""
    message = DELAYED_TASK_MESSAGE
    logger.info(message)
    return message


def example_async_eloop() -> int:
    """Exercise event waits, delayed tasks, a manual task and an event stream."""
    with AsyncEventLoop() as loop:
        loop.wait_for_event("custom_event")
        loop.wait_for_event("sensor_data_0")
        loop.schedule_after(
            _ASYNC_LONG_DELAY, lambda: logger.info("Delayed task executed!")
        )
        loop.schedule_after(_ASYNC_SHORT_DELAY, task_to_be_executed)
        immediate = loop.schedule(task_to_be_executed_immediately)
        immediate.resume()
        stream = loop.create_event_stream("sensor_data", 5)
        loop.process_events(stream)
        loop.emit_event(Event("custom_event", "Hello from custom event!"))
        time.sleep(_ASYNC_OBSERVE_SECONDS)
    return 0


def run_concurrency_examples() -> None:
    """Run every example in turn."""
    logger.info("Starting Concurrency examples")
    example_thread_pool_manager()
    logger.info("thread_pool DONE")
    example_eloop_gen()
    logger.info("main_eloop_gen DONE")
    example_eloop_coro()
    logger.info("main_eloop_coro DONE")
    example_async_eloop()
    logger.info("main_eloop_hybrid DONE")


def main(argv: list[str] | None = None) -> int:
    """Run the examples; return 0 on success and 1 on failure."""
    try:
        run_concurrency_examples()
    except Exception as exc:
        logger.log_exception(exc)
        return 1
    return 0