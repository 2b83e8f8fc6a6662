from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError
from sqlmodel import SQLModel

from models.checkin import Checkin
from tests.conftest import DAY, DAY0, failing_commits


def _rows(services, task_id):
    with services.session_factory() as s:
        return s.execute(select(Checkin).where(Checkin.task_id == task_id)).scalars().all()


def test_create_sets_created_from_clock(services, make_task):
    task = make_task()
    assert task.id is not None
    assert task.created == services.clock.now()


def test_get_missing_task_is_not_an_error(services):
    res = services.tasks.get(999)
    assert res.ok and res.value is None


def test_update_keeps_id_and_created(services, make_task, clock):
    task = make_task()
    clock.advance(DAY)
    res = services.tasks.update(task.id, {
        "title": "Evening run", "description": "5k",
        "start_date": task.start_date, "end_date": task.end_date + DAY,
    })
    assert res.ok
    updated = services.tasks.get(task.id).value
    assert updated.title == "Evening run"
    assert updated.created == task.created
    assert updated.end_date == task.end_date + DAY


def test_update_missing_task_fails(services):
    res = services.tasks.update(42, {"title": "Nope", "description": "",
                                     "start_date": DAY0, "end_date": DAY0})
    assert not res.ok


def test_list_active_excludes_ended_tasks(services, make_task):
    now = services.clock.now()
    make_task(title="Ended", start=DAY0 - 5 * DAY, end=DAY0)
    make_task(title="Ends now", start=DAY0, end=now)
    older = make_task(title="Older", start=DAY0, end=DAY0 + 10 * DAY)
    newer = make_task(title="Newer", start=DAY0 + DAY, end=DAY0 + 10 * DAY)

    active = services.tasks.list_active(now)
    assert [t.id for t in active] == [newer.id, older.id]
    assert all(t.end_date > now for t in active)


def test_list_active_degrades_to_empty_on_read_failure(services, make_task):
    make_task()
    SQLModel.metadata.drop_all(services.engine)
    assert services.tasks.list_active(services.clock.now()) == []


def test_upsert_is_idempotent(services, make_task):
    task = make_task()
    for _ in range(2):
        assert services.checkins.upsert(task.id, DAY0, True, "felt good").ok
    rows = _rows(services, task.id)
    assert len(rows) == 1
    assert (rows[0].completed, rows[0].notes) == (1, "felt good")


def test_upsert_overwrites_existing_day(services, make_task):
    task = make_task()
    services.checkins.upsert(task.id, DAY0, True, "first")
    services.checkins.upsert(task.id, DAY0, False, None)
    rows = _rows(services, task.id)
    assert len(rows) == 1
    assert rows[0].completed == 0 and rows[0].notes is None


def test_counts_and_ordering(services, make_task):
    task = make_task()
    services.checkins.upsert(task.id, DAY0 + 2 * DAY, True, None)
    services.checkins.upsert(task.id, DAY0, True, None)
    services.checkins.upsert(task.id, DAY0 + DAY, False, None)

    assert services.checkins.count_completed(task.id).value == 2
    assert services.checkins.count_all(task.id).value == 3
    dates = [c.date for c in services.checkins.list_ordered_by_date(task.id).value]
    assert dates == [DAY0, DAY0 + DAY, DAY0 + 2 * DAY]


def test_delete_cascades_to_checkins(services, make_task):
    task = make_task()
    keep = make_task(title="Other task")
    for i in range(3):
        services.checkins.upsert(task.id, DAY0 + i * DAY, True, None)
    services.checkins.upsert(keep.id, DAY0, True, None)

    res = services.tasks.delete(task.id)
    assert res.ok and res.value == 3
    assert services.tasks.get(task.id).value is None
    assert services.checkins.count_all(task.id).value == 0
    assert services.checkins.count_all(keep.id).value == 1


def test_delete_rolls_back_when_a_step_fails(services, make_task, monkeypatch):
    task = make_task()
    for i in range(3):
        services.checkins.upsert(task.id, DAY0 + i * DAY, i % 2 == 0, None)

    real_delete = services.checkins.delete_for_task

    def failing(session, task_id):
        real_delete(session, task_id)
        raise OperationalError("DELETE FROM tasks", {}, Exception("disk I/O error"))

    monkeypatch.setattr(services.checkins, "delete_for_task", failing)

    res = services.tasks.delete(task.id)
    assert not res.ok
    assert "disk" not in res.error
    assert services.tasks.get(task.id).value is not None
    with services.session_factory() as s:
        count = s.execute(select(func.count()).select_from(Checkin)
                          .where(Checkin.task_id == task.id)).scalar_one()
    assert count == 3


def test_create_rolls_back_when_commit_fails(services, monkeypatch):
    monkeypatch.setattr(services.tasks, "session_factory", failing_commits(services.session_factory))
    res = services.tasks.create({"title": "Journal", "description": "",
                                 "start_date": DAY0, "end_date": DAY0 + DAY}, now=DAY0)
    assert not res.ok
    assert "locked" not in res.error
    monkeypatch.undo()
    assert services.tasks.list_active(0) == []


def test_update_rolls_back_when_commit_fails(services, make_task, monkeypatch):
    task = make_task(title="Run")
    monkeypatch.setattr(services.tasks, "session_factory", failing_commits(services.session_factory))
    res = services.tasks.update(task.id, {"title": "Run far", "description": "x",
                                          "start_date": task.start_date, "end_date": task.end_date})
    assert not res.ok
    assert "locked" not in res.error
    monkeypatch.undo()
    unchanged = services.tasks.get(task.id).value
    assert unchanged.title == "Run" and unchanged.description == ""


def test_upsert_rolls_back_when_commit_fails(services, make_task, monkeypatch):
    task = make_task()
    monkeypatch.setattr(services.checkins, "session_factory", failing_commits(services.session_factory))
    res = services.checkins.upsert(task.id, DAY0, True, "note")
    assert not res.ok
    assert "locked" not in res.error
    monkeypatch.undo()
    assert _rows(services, task.id) == []


def test_select_then_write_upsert(services, make_task, monkeypatch):
    task = make_task()
    monkeypatch.setattr(services.checkins, "_on_conflict_insert", lambda session: None)
    assert services.checkins.upsert(task.id, DAY0, True, "first").ok
    assert services.checkins.upsert(task.id, DAY0, False, "second").ok
    [row] = _rows(services, task.id)
    assert (row.completed, row.notes) == (0, "second")


def test_select_then_write_upsert_retries_after_losing_the_key(services, make_task, monkeypatch):
    task = make_task()
    monkeypatch.setattr(services.checkins, "_on_conflict_insert", lambda session: None)
    services.checkins.upsert(task.id, DAY0, False, "other writer")

    real_factory = services.session_factory
    opened = []

    def racing_factory():
        s = real_factory()
        if not opened:
            # first attempt misses the row another session already committed
            s.get = lambda *args, **kwargs: None
        opened.append(s)
        return s

    monkeypatch.setattr(services.checkins, "session_factory", racing_factory)
    assert services.checkins.upsert(task.id, DAY0, True, "this writer").ok
    assert len(opened) == 2
    [row] = _rows(services, task.id)
    assert (row.completed, row.notes) == (1, "this writer")
