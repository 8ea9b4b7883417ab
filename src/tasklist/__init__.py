"""Task list core: store, view derivation and key-value persistence."""

from .exceptions import StorageError, TaskListError
from .models import FilterType, Priority, SortType, Task, TaskCounts, Taxonomy
from .preferences import Preferences, Theme, load_preferences, save_preferences
from .serialization import TaskRecord, dump_tasks, parse_tasks
from .storage import InMemoryKeyValueStore, KeyValueStore, SqliteKeyValueStore
from .store import TaskListStore
from .view import TaskView, TaskViewItem, derive_view, filter_tasks, is_overdue, sort_tasks

__all__ = [
    "FilterType",
    "InMemoryKeyValueStore",
    "KeyValueStore",
    "Preferences",
    "Priority",
    "SortType",
    "SqliteKeyValueStore",
    "StorageError",
    "Task",
    "TaskCounts",
    "TaskListError",
    "TaskListStore",
    "TaskRecord",
    "TaskView",
    "TaskViewItem",
    "Taxonomy",
    "Theme",
    "derive_view",
    "dump_tasks",
    "filter_tasks",
    "is_overdue",
    "load_preferences",
    "parse_tasks",
    "save_preferences",
    "sort_tasks",
]
