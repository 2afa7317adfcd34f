"""Three threads started from a function, a callable object and a lambda."""

from __future__ import annotations

import threading

from watchlist import logger


def foo(count: int) -> None:
    """Log ``count`` times from a plain function."""
    for _ in range(count):
        logger.info("Thread using function pointer as callable")


class ThreadObj:
    """Callable object that logs a fixed number of times."""

    def __call__(self, count: int) -> None:
        for _ in range(count):
            logger.info("Thread using function object as callable")


def main(argv: list[str] | None = None) -> int:
    """Run the three threads and wait for all of them."""
    logger.info("Threads 1 and 2 and 3 operating independently")

    def lambda_like(count: int) -> None:
        for _ in range(count):
            logger.info("Thread using lambda expression as callable")

    threads = [
        threading.Thread(target=target, args=(3,))
        for target in (foo, ThreadObj(), lambda_like)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return 0