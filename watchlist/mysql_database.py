"""MySQL storage facade: configured with connection settings, but without a client."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import NoReturn

from watchlist.database import Database, DatabaseItem

_MISSING_CLIENT_MESSAGE = (
    "MySQLDatabase is a facade example. Add a MySQL client library before using it."
)


class MissingClientError(RuntimeError):
    """Raised by every MySQLDatabase operation: no MySQL client is available."""


@dataclass(frozen=True)
class MySQLConnectionSettings:
    """Where and as whom to connect to a MySQL server."""

    host: str
    database: str
    user: str
    password: str = field(repr=False)
    port: int = 3306


def _missing_client() -> NoReturn:
    raise MissingClientError(_MISSING_CLIENT_MESSAGE)


class MySQLDatabase(Database):
    """Database facade for MySQL; every operation raises MissingClientError."""

    def __init__(self, settings: MySQLConnectionSettings) -> None:
        self.settings = settings

    def initialize(self) -> None:
        _missing_client()

    def add_item(self, item: DatabaseItem) -> None:
        _missing_client()

    def upsert_item(self, item: DatabaseItem) -> None:
        _missing_client()

    def get_item(self, item_id: str) -> DatabaseItem | None:
        _missing_client()

    def get_all_items(self) -> list[DatabaseItem]:
        _missing_client()

    def replace_all(self, items: Iterable[DatabaseItem]) -> None:
        _missing_client()

    def get_all_sorted_by_id(self) -> list[DatabaseItem]:
        _missing_client()

    def contains_item(self, item_id: str) -> bool:
        _missing_client()

    def count_items(self) -> int:
        _missing_client()

    def remove_item(self, item_id: str) -> bool:
        _missing_client()

    def clear(self) -> None:
        _missing_client()