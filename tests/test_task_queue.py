import threading
from concurrent.futures import CancelledError

import pytest

from watchlist.task_queue import TaskQueue


def test_queued_task_result_arrives_through_future():
    with TaskQueue() as tasks:
        tasks.start(2)
        future = tasks.queue(lambda: "hello world")
        assert future.result(timeout=5) == "hello world"


def test_tasks_queued_before_start_run_after_start():
    tasks = TaskQueue()
    future = tasks.queue(lambda: "early")
    assert not future.done()
    tasks.start()
    assert future.result(timeout=5) == "early"
    tasks.finish()


def test_single_worker_runs_tasks_in_order():
    order = []
    tasks = TaskQueue()
    for n in range(6):
        tasks.queue(lambda n=n: order.append(n))
    tasks.start(1)
    tasks.finish()
    assert order == list(range(6))


def test_finish_waits_for_queued_work():
    tasks = TaskQueue()
    tasks.start(3)
    futures = [tasks.queue(lambda n=n: n * 2) for n in range(10)]
    tasks.finish()
    assert all(f.done() for f in futures)
    assert [f.result() for f in futures] == [n * 2 for n in range(10)]


def test_cancel_pending_cancels_unstarted_tasks():
    tasks = TaskQueue()
    future = tasks.queue(lambda: "never")
    tasks.cancel_pending()
    assert future.cancelled()
    with pytest.raises(CancelledError):
        future.result(timeout=1)


def test_abort_drops_pending_but_lets_running_task_finish():
    started = threading.Event()
    release = threading.Event()

    def blocking():
        started.set()
        release.wait(5)
        return "ran"

    tasks = TaskQueue()
    tasks.start(1)
    running = tasks.queue(blocking)
    assert started.wait(5)
    pending = tasks.queue(lambda: "pending")
    tasks.cancel_pending()
    release.set()
    tasks.finish()
    assert running.result(timeout=1) == "ran"
    assert pending.cancelled()


def test_abort_stops_workers():
    tasks = TaskQueue()
    tasks.start(2)
    done = tasks.queue(lambda: 1)
    assert done.result(timeout=5) == 1
    tasks.abort()
    late = tasks.queue(lambda: 2)
    assert not late.done()
    tasks.cancel_pending()
    assert late.cancelled()


def test_exception_in_task_is_set_on_future():
    def boom():
        raise ValueError("bad task")

    with TaskQueue() as tasks:
        tasks.start()
        future = tasks.queue(boom)
        with pytest.raises(ValueError, match="bad task"):
            future.result(timeout=5)
        assert tasks.queue(lambda: "after").result(timeout=5) == "after"