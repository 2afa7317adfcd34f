import sqlite3

import pytest

from watchlist.database import DatabaseItem
from watchlist.sqlite_database import SQLiteDatabase


def router():
    return DatabaseItem("router", "Main router", "192.168.1.1", 80, True)


def printer(alive=False):
    return DatabaseItem("printer-office", "Office printer", "192.168.1.75", 9100, alive)


def camera():
    return DatabaseItem("camera-front-door", "Front door camera", "192.168.1.42", 554, True)


@pytest.fixture
def database_path(tmp_path):
    return tmp_path / "watchlist_sqlite_database_test.sqlite"


@pytest.fixture
def database(database_path):
    db = SQLiteDatabase(database_path)
    db.initialize()
    yield db
    db.close()


def test_add_item_stores_new_device(database):
    database.add_item(router())

    item = database.get_item("router")

    assert item is not None
    assert item.id == "router"
    assert item.name == "Main router"
    assert item.ip_address == "192.168.1.1"
    assert item.port == 80
    assert item.alive is True


def test_get_item_returns_none_for_missing_id(database):
    assert database.get_item("missing") is None


def test_upsert_item_adds_and_updates_device(database):
    database.upsert_item(printer(False))
    database.upsert_item(printer(True))

    item = database.get_item("printer-office")

    assert item is not None
    assert item.alive is True
    assert database.count_items() == 1


def test_replace_all_clears_old_devices_and_adds_new_devices(database):
    database.add_item(DatabaseItem("old-device", "Old device", "10.0.0.10", 1234, False))

    database.replace_all([router(), printer()])

    assert not database.contains_item("old-device")
    assert database.contains_item("router")
    assert database.contains_item("printer-office")
    assert database.count_items() == 2


def test_get_all_sorted_by_id_returns_ascending_ids(database):
    database.replace_all([router(), camera(), printer()])

    items = database.get_all_sorted_by_id()

    assert len(items) == 3
    assert [item.id for item in items] == ["camera-front-door", "printer-office", "router"]


def test_remove_item_deletes_existing_device(database):
    database.add_item(router())

    assert database.remove_item("router") is True
    assert database.contains_item("router") is False
    assert database.remove_item("router") is False


def test_clear_removes_all_devices(database):
    database.replace_all([router(), printer()])

    database.clear()

    assert database.count_items() == 0
    assert database.get_all_items() == []


def test_add_item_rejects_duplicate_id(database):
    database.add_item(router())
    with pytest.raises(sqlite3.IntegrityError):
        database.add_item(router())
    assert database.count_items() == 1


def test_get_all_items_round_trip(database):
    items = [router(), camera(), printer(True)]
    database.replace_all(items)
    assert sorted(database.get_all_items(), key=lambda item: item.id) == sorted(
        items, key=lambda item: item.id
    )


def test_replace_all_rolls_back_on_failure(database):
    database.add_item(router())

    with pytest.raises(sqlite3.IntegrityError):
        database.replace_all([printer(), printer()])

    assert database.get_all_items() == [router()]


def test_initialize_drops_legacy_table(database_path):
    with sqlite3.connect(database_path) as legacy:
        legacy.execute("CREATE TABLE items (id INTEGER, name TEXT)")
        legacy.execute("INSERT INTO items VALUES (1, 'legacy')")
    legacy.close()

    with SQLiteDatabase(database_path) as db:
        db.initialize()
        assert db.count_items() == 0
        db.add_item(router())
        assert db.get_item("router") == router()


def test_data_survives_reopen(database_path):
    with SQLiteDatabase(database_path) as db:
        db.initialize()
        db.add_item(router())

    with SQLiteDatabase(database_path) as db:
        db.initialize()
        assert db.get_all_items() == [router()]


def test_context_manager_closes_connection(database_path):
    with SQLiteDatabase(database_path) as db:
        db.initialize()
    with pytest.raises(sqlite3.ProgrammingError):
        db.count_items()