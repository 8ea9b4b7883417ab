"""Task List Store

Owns the authoritative task collection. Every effective mutation writes the
whole collection through to the key-value store and then notifies
subscribers. Rejected input (blank text, unknown id) is a silent no-op.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from datetime import date, datetime, timezone
from typing import Callable, List, Optional, Set, Tuple, Union

from .exceptions import StorageError
from .models import FilterType, Priority, SortType, Task, TaskCounts
from .serialization import dump_tasks, parse_tasks
from .storage import KeyValueStore
from .view import TaskView, count_tasks, derive_view

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "todos"

Listener = Callable[[Tuple[Task, ...]], None]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return uuid.uuid4().hex


class TaskListStore:
    """In-memory task collection with write-through persistence."""

    def __init__(
        self,
        kv_store: KeyValueStore,
        storage_key: str = DEFAULT_STORAGE_KEY,
        clock: Optional[Callable[[], datetime]] = None,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        self.kv_store = kv_store
        self.storage_key = storage_key
        self._clock = clock or _utc_now
        self._id_factory = id_factory or _new_id
        self._tasks: List[Task] = []
        self._listeners: List[Listener] = []
        self._issued_ids: Set[str] = set()

    @property
    def tasks(self) -> Tuple[Task, ...]:
        """Tasks in insertion order."""
        return tuple(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def get(self, task_id: str) -> Optional[Task]:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def counts(self) -> TaskCounts:
        return count_tasks(self._tasks)

    def view(
        self,
        filter_type: Union[FilterType, str] = FilterType.ALL,
        sort_type: Union[SortType, str] = SortType.PRIORITY,
        today: Optional[date] = None,
    ) -> TaskView:
        return derive_view(self._tasks, filter_type, sort_type, today)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a callback run after every mutation.

        Returns a function that removes the callback.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def load(self) -> None:
        """Replace the collection with the persisted one.

        Absent, unreadable or malformed data yields an empty collection.
        """
        try:
            raw = self.kv_store.get(self.storage_key)
        except StorageError:
            logger.warning("Failed to read key=%s; starting empty", self.storage_key, exc_info=True)
            raw = None

        tasks: List[Task] = []
        if raw is not None:
            try:
                tasks = parse_tasks(raw)
            except ValueError as exc:
                logger.warning("Discarding malformed task list under key=%s: %s", self.storage_key, exc)
                tasks = []

        self._tasks = tasks
        self._issued_ids.update(task.id for task in tasks)
        logger.debug("Loaded %d tasks from key=%s", len(tasks), self.storage_key)

    def add(
        self,
        text: str,
        due_date: Optional[date] = None,
        priority: Optional[Union[Priority, str]] = None,
    ) -> Optional[Task]:
        """Append a new task. Returns None when text is blank.

        A datetime due date is reduced to its calendar day.
        """
        text = text.strip()
        if not text:
            return None
        if isinstance(due_date, datetime):
            due_date = due_date.date()

        task = Task(
            id=self._unique_id(),
            text=text,
            completed=False,
            due_date=due_date,
            priority=Priority(priority) if priority is not None else Priority.DEFAULT,
            created_at=self._clock(),
        )
        self._tasks.append(task)
        logger.debug("Added task id=%s priority=%s", task.id, task.priority.value)
        self._commit()
        return task

    def toggle_complete(self, task_id: str) -> Optional[Task]:
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                toggled = replace(task, completed=not task.completed)
                self._tasks[index] = toggled
                logger.debug("Toggled task id=%s completed=%s", task_id, toggled.completed)
                self._commit()
                return toggled
        return None

    def delete(self, task_id: str) -> bool:
        remaining = [task for task in self._tasks if task.id != task_id]
        if len(remaining) == len(self._tasks):
            return False
        self._tasks = remaining
        logger.debug("Deleted task id=%s", task_id)
        self._commit()
        return True

    def clear_completed(self) -> int:
        """Remove every completed task. Returns how many were removed."""
        remaining = [task for task in self._tasks if not task.completed]
        removed = len(self._tasks) - len(remaining)
        if not removed:
            return 0
        self._tasks = remaining
        logger.debug("Cleared %d completed tasks", removed)
        self._commit()
        return removed

    def _unique_id(self) -> str:
        task_id = self._id_factory()
        while task_id in self._issued_ids:
            task_id = self._id_factory()
        self._issued_ids.add(task_id)
        return task_id

    def _commit(self) -> None:
        self._persist()
        snapshot = self.tasks
        for listener in list(self._listeners):
            listener(snapshot)

    def _persist(self) -> None:
        try:
            self.kv_store.set(self.storage_key, dump_tasks(self._tasks))
        except StorageError:
            logger.exception("Failed to persist %d tasks under key=%s", len(self._tasks), self.storage_key)
