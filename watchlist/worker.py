"""Worker job that fills and reads the device database."""

from __future__ import annotations

import os
from pathlib import Path

from watchlist import logger
from watchlist.database import DatabaseItem
from watchlist.sqlite_database import SQLiteDatabase

DEFAULT_DATABASE_NAME = "thread_worker_3_storage.sqlite"

_DEVICES = (
    DatabaseItem("router", "Main router", "192.168.1.1", 80, True),
    DatabaseItem("camera-front-door", "Front door camera", "192.168.1.42", 554, True),
    DatabaseItem("printer-office", "Office printer", "192.168.1.75", 9100, False),
)


def run_sqlite_thread_worker(
    database_path: str | os.PathLike[str] | None = None,
) -> list[DatabaseItem]:
    """Store the sample devices, log them, and return them sorted by id.

    The database defaults to a file in the current directory.
    """
    path = Path.cwd() / DEFAULT_DATABASE_NAME if database_path is None else Path(database_path)
    logger.info(f"Thread worker 3 opening SQLite database: {path}")

    with SQLiteDatabase(path) as database:
        database.initialize()
        database.replace_all(_DEVICES)
        database.upsert_item(
            DatabaseItem("printer-office", "Office printer", "192.168.1.75", 9100, True)
        )

        devices = database.get_all_sorted_by_id()
        for device in devices:
            logger.info(
                f"Thread worker 3 device: {device.name} ({device.id}) at "
                f"{device.ip_address}:{device.port} alive={str(device.alive).lower()}"
            )

        router = database.get_item("router")
        if router is not None:
            logger.info(f"Thread worker 3 loaded router IP: {router.ip_address}")

        logger.info(f"Thread worker 3 device count: {database.count_items()}")
    return devices