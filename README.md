# watchlist

A small toolkit for keeping a watchlist of network devices and for running
work in the background. It has three parts:

- **Storage.** `DatabaseItem` records hold a device id, name, IP address, port
  (0–65535) and an alive flag. `SQLiteDatabase` keeps them in an SQLite file
  and implements the abstract `Database` interface. `MySQLDatabase` takes a
  `MySQLConnectionSettings` and has the same interface. It has no client
  library behind it, so every method raises `MissingClientError`.
- **Concurrency.** `ThreadPoolManager` is a fixed worker pool that returns
  `concurrent.futures.Future` objects. `TaskQueue` is a simple task queue with
  `start`, `finish`, `abort` and `cancel_pending`. There are also three event
  loops, each running on its own worker thread: `EventLoopGenerator`,
  `EventLoopCoroutine` and `AsyncEventLoop`.
- **Logging.** The `watchlist.logger` module prints one-line records to
  standard output in the form `[I] <time> | <file>:<line> | <message>`. It
  provides `log`, `info`, `warning`, `error`, `fatal`, `debug`, `trace` and
  `log_exception`.

The package needs only the Python standard library. It supports Python 3.10
and later.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Storing devices

```python
from watchlist.database import DatabaseItem
from watchlist.sqlite_database import SQLiteDatabase

with SQLiteDatabase("devices.sqlite") as db:
    db.initialize()
    db.replace_all([
        DatabaseItem("router", "Main router", "192.168.1.1", 80, True),
        DatabaseItem("printer-office", "Office printer", "192.168.1.75", 9100, False),
    ])
    db.upsert_item(DatabaseItem("printer-office", "Office printer", "192.168.1.75", 9100, True))

    for item in db.get_all_sorted_by_id():
        print(item)

    print(db.get_item("router"))       # None when the id is unknown
    print(db.contains_item("router"))  # True
    print(db.count_items())            # 2
    print(db.remove_item("router"))    # True when a row was removed
    db.clear()
```

Each method behaves as follows:

- `initialize` creates the `items` table. If an older `items` table without a
  `device_id` column is found, it is dropped first.
- `add_item` raises `sqlite3.IntegrityError` when the id is already stored.
- `upsert_item` inserts the item, or updates the stored item with the same id.
- `replace_all` clears the table and inserts the new items in a single
  transaction. If anything fails, the table is left unchanged.

## Running work in the background

```python
from watchlist.thread_pool import ThreadPoolManager

with ThreadPoolManager(3) as pool:
    future = pool.enqueue(lambda a, b: a + b, 5, 3)
    print(future.result())  # 8
```

When the pool shuts down, the workers first finish every task still in the
queue. After that, `enqueue` raises `ThreadPoolStoppedError`.

```python
from watchlist.async_event_loop import AsyncEventLoop, Event

with AsyncEventLoop() as loop:
    waiter = loop.wait_for_event("custom_event")
    loop.emit_event(Event("custom_event", "Hello from custom event!"))
    loop.process_events(loop.create_event_stream("sensor_data", 5))
```

The `AsyncEventLoop` methods work like this:

- `wait_for_event` returns a `Task`, which finishes once an event with that
  name is emitted.
- `schedule_after(delay, task)` runs a callable after a number of seconds.
- `schedule(task)` returns a suspended `Task`, which runs only when you call
  `resume()`.
- `process_events` emits each event of a stream, pausing between them.
- Closing the loop waits for delayed tasks and for tasks already woken by an
  event. It does not wait for tasks still waiting for an event.

The other two loops:

- `EventLoopCoroutine.schedule_after(delay, task)` runs a callable on the
  loop's worker after `delay` seconds and returns a future for its result.
- `EventLoopGenerator.event_generator(...)` produces events lazily.
  `process_event_sequence(...)` schedules them from a producer thread, and the
  loop's worker runs them in order.

## Commands

```
watchlist                          # thread pool with an async event loop and an SQLite worker
watchlist --wait-for-tracy         # same, but first waits for a line on standard input
watchlist-concurrency-examples     # runs the thread-pool and event-loop examples
watchlist-multithread-demo         # three threads started from three kinds of callables
watchlist-logger                   # prints sample log records
```

`watchlist` writes its sample devices to `thread_worker_3_storage.sqlite` in
the current directory. It logs them, then exits with status 0, or 1 if a job
failed.

## What it does not do

- The `watchlist` command opens no window and has no interactive interface.
  It runs its background jobs, logs the results and exits.
- `MySQLDatabase` cannot store anything, because no MySQL client is included.
  Use `SQLiteDatabase` for persistent storage.