"""TaskListStore の単体テスト"""

import json
from datetime import date, datetime, timedelta, timezone

import pytest

from src.tasklist import (
    InMemoryKeyValueStore,
    Priority,
    StorageError,
    TaskListStore,
)


class FailingKeyValueStore:
    """書き込み・読み込みが常に失敗するストア"""

    def get(self, key):
        raise StorageError("read failed")

    def set(self, key, value):
        raise StorageError("write failed")


@pytest.fixture
def clock():
    start = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)
    ticks = iter(range(10_000))
    return lambda: start + timedelta(minutes=next(ticks))


@pytest.fixture
def kv():
    return InMemoryKeyValueStore()


@pytest.fixture
def store(kv, clock):
    store = TaskListStore(kv, clock=clock)
    store.load()
    return store


def test_add_appends_task_with_defaults(store):
    task = store.add("  Buy milk  ")

    assert task is not None
    assert len(store) == 1
    assert task.text == "Buy milk"
    assert task.completed is False
    assert task.priority is Priority.MEDIUM
    assert task.due_date is None
    assert task.created_at.tzinfo is not None
    assert store.tasks == (task,)


def test_add_keeps_due_date_and_priority(store):
    task = store.add("Report", due_date=date(2024, 1, 10), priority="high")

    assert task.due_date == date(2024, 1, 10)
    assert task.priority is Priority.HIGH


def test_add_generates_distinct_ids(store):
    ids = {store.add(f"task {n}").id for n in range(50)}
    assert len(ids) == 50


@pytest.mark.parametrize("text", ["", "   ", "\t\n"])
def test_add_blank_text_is_noop(store, kv, text):
    store.add("existing")
    before = kv.get("todos")

    assert store.add(text) is None
    assert len(store) == 1
    assert kv.get("todos") == before


def test_add_appends_to_end(store):
    first = store.add("first")
    second = store.add("second")
    assert [t.id for t in store.tasks] == [first.id, second.id]


def test_ids_are_not_reused_after_delete(kv, clock):
    ids = iter(["a", "a", "b"])
    store = TaskListStore(kv, clock=clock, id_factory=lambda: next(ids))
    first = store.add("one")
    store.delete(first.id)

    second = store.add("two")
    assert first.id == "a"
    assert second.id == "b"


def test_toggle_twice_restores_flag(store):
    task = store.add("Toggle me")

    assert store.toggle_complete(task.id).completed is True
    assert store.toggle_complete(task.id).completed is False
    assert store.get(task.id).completed is False


def test_toggle_unknown_id_is_noop(store):
    store.add("only")
    assert store.toggle_complete("missing") is None
    assert store.tasks[0].completed is False


def test_delete_twice_is_noop_second_time(store):
    keep = store.add("keep")
    drop = store.add("drop")

    assert store.delete(drop.id) is True
    assert len(store) == 1
    assert store.delete(drop.id) is False
    assert store.tasks == (keep,)


def test_clear_completed_removes_only_completed(store):
    a = store.add("a")
    b = store.add("b")
    c = store.add("c")
    store.toggle_complete(a.id)
    store.toggle_complete(c.id)

    assert store.clear_completed() == 2
    assert [t.id for t in store.tasks] == [b.id]
    assert all(not t.completed for t in store.tasks)
    assert store.clear_completed() == 0


def test_every_mutation_persists_whole_collection(store, kv):
    task = store.add("persist me", due_date=date(2024, 2, 1), priority=Priority.LOW)
    records = json.loads(kv.get("todos"))
    assert records == [
        {
            "id": task.id,
            "text": "persist me",
            "completed": False,
            "dueDate": "2024-02-01",
            "priority": "low",
            "createdAt": records[0]["createdAt"],
        }
    ]

    store.toggle_complete(task.id)
    assert json.loads(kv.get("todos"))[0]["completed"] is True

    store.delete(task.id)
    assert json.loads(kv.get("todos")) == []


def test_load_restores_persisted_collection(store, kv, clock):
    store.add("one", due_date=date(2024, 3, 1), priority="high")
    done = store.add("two")
    store.toggle_complete(done.id)

    reloaded = TaskListStore(kv, clock=clock)
    reloaded.load()
    assert reloaded.tasks == store.tasks


def test_load_absent_key_is_empty(kv):
    store = TaskListStore(kv)
    store.load()
    assert store.tasks == ()


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        "{}",
        '[{"id": "x"}]',
        '[{"id": "x", "text": "  ", "completed": false, "dueDate": null, "priority": "medium", "createdAt": "2024-01-01T00:00:00Z"}]',
        '[{"id": "x", "text": "t", "completed": false, "dueDate": "2024-02-30", "priority": "medium", "createdAt": "2024-01-01T00:00:00Z"}]',
        '[{"id": "x", "text": "t", "completed": false, "dueDate": null, "priority": "urgent", "createdAt": "2024-01-01T00:00:00Z"}]',
    ],
)
def test_load_malformed_data_starts_empty(raw):
    kv = InMemoryKeyValueStore({"todos": raw})
    store = TaskListStore(kv)
    store.load()
    assert store.tasks == ()


def test_load_read_failure_starts_empty():
    store = TaskListStore(FailingKeyValueStore())
    store.load()
    assert store.tasks == ()


def test_write_failure_keeps_in_memory_state():
    store = TaskListStore(FailingKeyValueStore())
    task = store.add("still here")

    assert store.tasks == (task,)
    assert store.toggle_complete(task.id).completed is True


def test_custom_storage_key(kv):
    store = TaskListStore(kv, storage_key="tasks-v2")
    store.add("keyed")
    assert kv.get("todos") is None
    assert json.loads(kv.get("tasks-v2"))[0]["text"] == "keyed"


def test_subscribers_notified_after_effective_mutations(store):
    seen = []
    unsubscribe = store.subscribe(lambda tasks: seen.append(len(tasks)))

    task = store.add("a")
    store.add("   ")
    store.toggle_complete("missing")
    store.toggle_complete(task.id)
    store.clear_completed()
    assert seen == [1, 1, 0]

    unsubscribe()
    store.add("b")
    assert seen == [1, 1, 0]


def test_counts_and_view(store):
    a = store.add("a", priority="low")
    store.add("b", priority="high")
    store.toggle_complete(a.id)

    counts = store.counts()
    assert (counts.total, counts.active, counts.completed) == (2, 1, 1)

    view = store.view("active", "priority")
    assert [t.text for t in view.tasks] == ["b"]
    assert view.counts == counts


def test_add_datetime_due_date_is_reduced_to_day(store, kv):
    seen = []
    store.subscribe(lambda tasks: seen.append(len(tasks)))

    meeting = store.add("meeting", due_date=datetime(2024, 1, 10, 15, 30))
    second = store.add("second")

    assert meeting.due_date == date(2024, 1, 10)
    assert type(meeting.due_date) is date
    assert second is not None
    assert seen == [1, 2]
    assert json.loads(kv.get("todos"))[0]["dueDate"] == "2024-01-10"
    assert store.toggle_complete(meeting.id).completed is True


def test_default_priority_alias():
    assert Priority.DEFAULT is Priority.MEDIUM
    assert [p.value for p in Priority] == ["high", "medium", "low"]
