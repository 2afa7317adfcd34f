from watchlist import worker
from watchlist.sqlite_database import SQLiteDatabase


def _messages(out):
    return [line.rsplit(" | ", 1)[-1] for line in out.splitlines() if " | " in line]


def test_returns_devices_sorted_by_id(tmp_path):
    devices = worker.run_sqlite_thread_worker(tmp_path / "db.sqlite")
    assert [d.id for d in devices] == ["camera-front-door", "printer-office", "router"]


def test_printer_is_updated_to_alive(tmp_path):
    path = tmp_path / "db.sqlite"
    worker.run_sqlite_thread_worker(path)
    with SQLiteDatabase(path) as database:
        printer = database.get_item("printer-office")
        assert printer is not None
        assert printer.alive is True
        assert printer.port == 9100


def test_running_twice_keeps_three_devices(tmp_path):
    path = tmp_path / "db.sqlite"
    first = worker.run_sqlite_thread_worker(path)
    second = worker.run_sqlite_thread_worker(path)
    assert first == second
    with SQLiteDatabase(path) as database:
        assert database.count_items() == 3


def test_logs_devices_router_and_count(tmp_path, capsys):
    worker.run_sqlite_thread_worker(tmp_path / "db.sqlite")
    messages = _messages(capsys.readouterr().out)
    assert "Thread worker 3 loaded router IP: 192.168.1.1" in messages
    assert "Thread worker 3 device count: 3" in messages
    assert (
        "Thread worker 3 device: Main router (router) at 192.168.1.1:80 alive=true"
        in messages
    )


def test_default_path_is_in_current_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    devices = worker.run_sqlite_thread_worker()
    assert len(devices) == 3
    assert (tmp_path / worker.DEFAULT_DATABASE_NAME).is_file()
    with SQLiteDatabase(tmp_path / worker.DEFAULT_DATABASE_NAME) as database:
        assert database.count_items() == 3