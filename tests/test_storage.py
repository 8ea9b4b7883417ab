"""キー・バリューストアと表示設定のテスト"""

import pytest

from src.tasklist import (
    InMemoryKeyValueStore,
    Preferences,
    SqliteKeyValueStore,
    TaskListStore,
    Theme,
    load_preferences,
    save_preferences,
)


@pytest.fixture
def sqlite_store(tmp_path):
    return SqliteKeyValueStore(db_path=tmp_path / "kv.db")


def test_sqlite_get_missing_key(sqlite_store):
    assert sqlite_store.get("todos") is None


def test_sqlite_set_overwrites(sqlite_store):
    sqlite_store.set("todos", "[]")
    sqlite_store.set("todos", '["x"]')
    assert sqlite_store.get("todos") == '["x"]'


def test_sqlite_persists_across_instances(tmp_path):
    db_path = tmp_path / "nested" / "kv.db"
    SqliteKeyValueStore(db_path=db_path).set("theme", "dark")

    assert db_path.exists()
    assert SqliteKeyValueStore(db_path=db_path).get("theme") == "dark"


def test_sqlite_path_from_env(tmp_path, monkeypatch):
    db_path = tmp_path / "env.db"
    monkeypatch.setenv("TASKLIST_DB_PATH", str(db_path))

    store = SqliteKeyValueStore()
    assert store.db_path == db_path


def test_task_store_survives_restart_on_sqlite(tmp_path):
    db_path = tmp_path / "tasks.db"
    first = TaskListStore(SqliteKeyValueStore(db_path=db_path))
    first.load()
    task = first.add("Survive restart", priority="high")
    first.toggle_complete(task.id)

    second = TaskListStore(SqliteKeyValueStore(db_path=db_path))
    second.load()
    assert second.tasks == first.tasks


def test_preferences_default_when_absent():
    prefs = load_preferences(InMemoryKeyValueStore())
    assert prefs == Preferences(theme=Theme.LIGHT, language="en")


def test_preferences_round_trip(sqlite_store):
    save_preferences(sqlite_store, Preferences(theme=Theme.DARK, language="ja"))

    assert sqlite_store.get("theme") == "dark"
    assert load_preferences(sqlite_store) == Preferences(theme=Theme.DARK, language="ja")


def test_preferences_ignore_unknown_values():
    kv = InMemoryKeyValueStore({"theme": "neon", "language": "fr"})
    defaults = Preferences(theme=Theme.DARK, language="ja")

    assert load_preferences(kv, defaults) == defaults


def test_save_preferences_rejects_unsupported_language():
    with pytest.raises(ValueError):
        save_preferences(InMemoryKeyValueStore(), Preferences(language="fr"))


def test_sqlite_path_env_beats_configured_default(tmp_path, monkeypatch):
    env_path = tmp_path / "env.db"
    monkeypatch.setenv("TASKLIST_DB_PATH", str(env_path))

    store = SqliteKeyValueStore(default_path=tmp_path / "configured.db")
    assert store.db_path == env_path


def test_sqlite_path_explicit_beats_env(tmp_path, monkeypatch):
    monkeypatch.setenv("TASKLIST_DB_PATH", str(tmp_path / "env.db"))

    store = SqliteKeyValueStore(db_path=tmp_path / "explicit.db", default_path=tmp_path / "configured.db")
    assert store.db_path == tmp_path / "explicit.db"


def test_sqlite_path_configured_default_without_env(tmp_path, monkeypatch):
    monkeypatch.delenv("TASKLIST_DB_PATH", raising=False)

    store = SqliteKeyValueStore(default_path=tmp_path / "configured.db")
    assert store.db_path == tmp_path / "configured.db"
