"""Device storage backed by an SQLite file."""

from __future__ import annotations

import os
import sqlite3
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from typing import Any

from watchlist.database import Database, DatabaseItem

_TABLE = "items"
_COLUMNS = "device_id, name, ip_address, port, alive"


def _table_exists(connection: sqlite3.Connection, table_name: str) -> bool:
    row = connection.execute(
        "SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = ? LIMIT 1",
        (table_name,),
    ).fetchone()
    return row is not None


def _table_has_column(connection: sqlite3.Connection, table_name: str, column_name: str) -> bool:
    rows = connection.execute(f"PRAGMA table_info({table_name})")
    return any(row[1] == column_name for row in rows)


def _row_to_item(row: tuple[Any, ...]) -> DatabaseItem:
    device_id, name, ip_address, port, alive = row
    return DatabaseItem(str(device_id), str(name), str(ip_address), int(port) & 0xFFFF, alive != 0)


def _item_params(item: DatabaseItem) -> tuple[Any, ...]:
    return (item.id, item.name, item.ip_address, int(item.port), 1 if item.alive else 0)


class SQLiteDatabase(Database):
    """Device storage in an SQLite database file (created when missing)."""

    def __init__(self, database_path: str | os.PathLike[str]) -> None:
        self._connection = sqlite3.connect(os.fspath(database_path), isolation_level=None)

    @contextmanager
    def _transaction(self) -> Iterator[None]:
        self._connection.execute("BEGIN")
        try:
            yield
        except BaseException:
            self._connection.execute("ROLLBACK")
            raise
        self._connection.execute("COMMIT")

    def initialize(self) -> None:
        if _table_exists(self._connection, _TABLE) and not _table_has_column(
            self._connection, _TABLE, "device_id"
        ):
            self._connection.execute(f"DROP TABLE {_TABLE}")
        self._connection.execute(
            f"CREATE TABLE IF NOT EXISTS {_TABLE} ("
            "id INTEGER PRIMARY KEY AUTOINCREMENT,"
            "device_id TEXT NOT NULL UNIQUE,"
            "name TEXT NOT NULL,"
            "ip_address TEXT NOT NULL,"
            "port INTEGER NOT NULL,"
            "alive INTEGER NOT NULL"
            ")"
        )

    def add_item(self, item: DatabaseItem) -> None:
        """Insert a device; raises sqlite3.IntegrityError when the id exists."""
        self._connection.execute(
            f"INSERT INTO {_TABLE} ({_COLUMNS}) VALUES (?, ?, ?, ?, ?)",
            _item_params(item),
        )

    def upsert_item(self, item: DatabaseItem) -> None:
        self._connection.execute(
            f"INSERT INTO {_TABLE} ({_COLUMNS}) VALUES (?, ?, ?, ?, ?) "
            "ON CONFLICT(device_id) DO UPDATE SET "
            "name = excluded.name,"
            "ip_address = excluded.ip_address,"
            "port = excluded.port,"
            "alive = excluded.alive",
            _item_params(item),
        )

    def get_item(self, item_id: str) -> DatabaseItem | None:
        row = self._connection.execute(
            f"SELECT {_COLUMNS} FROM {_TABLE} WHERE device_id = ?", (item_id,)
        ).fetchone()
        return None if row is None else _row_to_item(row)

    def get_all_items(self) -> list[DatabaseItem]:
        rows = self._connection.execute(f"SELECT {_COLUMNS} FROM {_TABLE}")
        return [_row_to_item(row) for row in rows]

    def replace_all(self, items: Iterable[DatabaseItem]) -> None:
        """Clear and refill the table in one transaction; nothing changes on failure."""
        with self._transaction():
            self.clear()
            for item in items:
                self.add_item(item)

    def get_all_sorted_by_id(self) -> list[DatabaseItem]:
        rows = self._connection.execute(
            f"SELECT {_COLUMNS} FROM {_TABLE} ORDER BY device_id"
        )
        return [_row_to_item(row) for row in rows]

    def contains_item(self, item_id: str) -> bool:
        row = self._connection.execute(
            f"SELECT 1 FROM {_TABLE} WHERE device_id = ? LIMIT 1", (item_id,)
        ).fetchone()
        return row is not None

    def count_items(self) -> int:
        (count,) = self._connection.execute(f"SELECT COUNT(*) FROM {_TABLE}").fetchone()
        return int(count)

    def remove_item(self, item_id: str) -> bool:
        cursor = self._connection.execute(
            f"DELETE FROM {_TABLE} WHERE device_id = ?", (item_id,)
        )
        return cursor.rowcount > 0

    def clear(self) -> None:
        self._connection.execute(f"DELETE FROM {_TABLE}")

    def close(self) -> None:
        """Close the underlying connection."""
        self._connection.close()

    def __enter__(self) -> SQLiteDatabase:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()