"""Application entry point: runs the background jobs on a thread pool."""

from __future__ import annotations

import sys
from collections.abc import Sequence

from watchlist import logger
from watchlist.async_event_loop import AsyncEventLoop, Event
from watchlist.thread_pool import ThreadPoolManager
from watchlist.worker import run_sqlite_thread_worker

VERSION_MAJOR = 0
VERSION_MINOR = 0
VERSION_PATCH = 1
VERSION_STRING = "0.0.1"
VERSION_PRERELEASE = ""
VERSION_BUILD = ""
VERSION_BRANCH = ""
VERSION_COMMIT = "d52ab3a"
VERSION_FULL = "0.0.1"

_SQLITE_DONE = "SQLiteCpp thread completed."


def has_argument(argv: Sequence[str], argument: str) -> bool:
    """Return True when ``argument`` appears after the program name in ``argv``."""
    return argument in argv[1:]


def wait_for_tracy_if_requested(argv: Sequence[str]) -> bool:
    """Wait for a line on stdin when ``--wait-for-tracy`` is given; return whether it waited."""
    if not has_argument(argv, "--wait-for-tracy"):
        return False
    logger.info("Watchlist is waiting so Tracy can connect. Press Enter to exit...")
    sys.stdin.readline()
    return True


def _run_async_loop() -> None:
    with AsyncEventLoop() as loop:
        loop.wait_for_event("async_loop_quit")
        loop.emit_event(Event("async_loop_quit", "Async loop quit event"))


def _run_sqlite_job() -> str:
    run_sqlite_thread_worker()
    return _SQLITE_DONE


def run_application(argv: Sequence[str] | None = None) -> int:
    """Run the application; ``argv`` includes the program name. Return an exit code."""
    if argv is None:
        argv = sys.argv
    try:
        wait_for_tracy_if_requested(argv)
        logger.info(f"Watchlist Version: {VERSION_FULL}")
        with ThreadPoolManager(3) as pool:
            pool.enqueue(_run_async_loop)
            sqlite_job = pool.enqueue(_run_sqlite_job)
            logger.debug(sqlite_job.result())
    except Exception as exc:
        logger.log_exception(exc)
        return 1
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Command entry point."""
    return run_application(argv)