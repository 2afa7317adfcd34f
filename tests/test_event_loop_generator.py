import threading

from watchlist.event_loop_generator import EventLoopGenerator, GeneratedEvent


def test_scheduled_event_runs_on_worker_thread(capsys):
    ran = threading.Event()
    idents = []

    def action():
        idents.append(threading.get_ident())
        ran.set()

    with EventLoopGenerator() as loop:
        loop.schedule_event("Single Task", action)
        assert ran.wait(5)
    out = capsys.readouterr().out
    assert "Processing event: Single Task (ID: " in out
    assert len(idents) == 1
    assert idents[0] != threading.get_ident()


def test_event_generator_yields_named_events_lazily():
    calls = []
    with EventLoopGenerator() as loop:
        events = loop.event_generator(3, "Sequential Task", calls.append)
        first = next(events)
        assert isinstance(first, GeneratedEvent)
        assert first.id == 0
        assert first.name == "Sequential Task #1"
        assert calls == []
        rest = list(events)
    assert [e.name for e in rest] == ["Sequential Task #2", "Sequential Task #3"]
    assert [e.id for e in rest] == [1, 2]
    first.action()
    rest[1].action()
    assert calls == [0, 2]


def test_event_generator_with_zero_count_is_empty():
    with EventLoopGenerator() as loop:
        assert list(loop.event_generator(0, "Nothing", lambda i: None)) == []


def test_process_event_sequence_runs_all_actions_in_order():
    seen = []
    with EventLoopGenerator() as loop:
        producer = loop.process_event_sequence(
            loop.event_generator(4, "Sequential Task", seen.append)
        )
        producer.join(5)
        assert not producer.is_alive()
    assert seen == [0, 1, 2, 3]


def test_close_runs_events_still_queued():
    gate = threading.Event()
    seen = []
    loop = EventLoopGenerator()
    loop.schedule_event("blocker", lambda: gate.wait(5))
    for n in range(5):
        loop.schedule_event(f"task {n}", lambda n=n: seen.append(n))
    gate.set()
    loop.close()
    assert seen == list(range(5))


def test_failing_action_does_not_stop_loop(capsys):
    done = threading.Event()

    def boom():
        raise RuntimeError("action failed")

    with EventLoopGenerator() as loop:
        loop.schedule_event("bad", boom)
        loop.schedule_event("good", done.set)
        assert done.wait(5)
    out = capsys.readouterr().out
    assert "Exception error: action failed" in out


def test_processing_is_logged_with_name(capsys):
    with EventLoopGenerator() as loop:
        loop.schedule_event("Logged Task", lambda: None)
    out = capsys.readouterr().out
    assert "Processing event: Logged Task (ID: " in out


def test_ids_increase_across_scheduled_events(capsys):
    with EventLoopGenerator() as loop:
        loop.schedule_event("first", lambda: None)
        loop.schedule_event("second", lambda: None)
    lines = [line for line in capsys.readouterr().out.splitlines() if "Processing event" in line]
    ids = [int(line.rsplit("(ID: ", 1)[1].rstrip(")")) for line in lines]
    assert len(ids) == 2
    assert ids[1] > ids[0]