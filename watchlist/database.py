"""Device record and the storage interface every backend implements."""

from __future__ import annotations

import abc
from collections.abc import Iterable
from dataclasses import dataclass

_MAX_PORT = 0xFFFF


@dataclass(frozen=True)
class DatabaseItem:
    """A watched network device."""

    id: str
    name: str
    ip_address: str
    port: int = 0
    alive: bool = False

    def __post_init__(self) -> None:
        if not 0 <= self.port <= _MAX_PORT:
            raise ValueError(f"port must be between 0 and {_MAX_PORT}, got {self.port}")


class Database(abc.ABC):
    """Storage for device records keyed by their id."""

    @abc.abstractmethod
    def initialize(self) -> None:
        """Create the tables or metadata the backend needs."""

    @abc.abstractmethod
    def add_item(self, item: DatabaseItem) -> None:
        """Add a new device; fail if its id is already stored."""

    @abc.abstractmethod
    def upsert_item(self, item: DatabaseItem) -> None:
        """Add a device or update the stored one with the same id."""

    @abc.abstractmethod
    def get_item(self, item_id: str) -> DatabaseItem | None:
        """Return the device stored under ``item_id``, or None."""

    @abc.abstractmethod
    def get_all_items(self) -> list[DatabaseItem]:
        """Return every device in the backend's natural order."""

    @abc.abstractmethod
    def replace_all(self, items: Iterable[DatabaseItem]) -> None:
        """Replace all stored devices with ``items`` in one operation."""

    @abc.abstractmethod
    def get_all_sorted_by_id(self) -> list[DatabaseItem]:
        """Return every device ordered by id ascending."""

    @abc.abstractmethod
    def contains_item(self, item_id: str) -> bool:
        """Return True when ``item_id`` is stored."""

    @abc.abstractmethod
    def count_items(self) -> int:
        """Return the number of stored devices."""

    @abc.abstractmethod
    def remove_item(self, item_id: str) -> bool:
        """Remove a device; return True when one was removed."""

    @abc.abstractmethod
    def clear(self) -> None:
        """Remove every device, keeping the storage ready for reuse."""