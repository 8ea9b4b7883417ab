"""Dependency helpers shared across FastAPI routes."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional, Tuple, Union

from src.tasklist import (
    FilterType,
    SortType,
    SqliteKeyValueStore,
    Task,
    TaskListStore,
)
from src.tasklist.config import Config
from src.tasklist.logger import setup_logger

from .schemas import TaskCountsResponse, TaskListResponse, TaskResponse

logger = logging.getLogger(__name__)

config = Config.from_yaml()
setup_logger(log_level=config.log_level, log_file=config.log_file)


@lru_cache(maxsize=1)
def get_kv_store() -> SqliteKeyValueStore:
    """Singleton key-value store backing tasks and preferences."""
    return SqliteKeyValueStore(default_path=config.storage.db_path)


def _log_change(tasks: Tuple[Task, ...]) -> None:
    logger.info("Task list changed: %d tasks", len(tasks))


@lru_cache(maxsize=1)
def get_task_store() -> TaskListStore:
    """Singleton TaskListStore, loaded from the key-value store on first use."""
    store = TaskListStore(get_kv_store(), storage_key=config.storage.key)
    store.load()
    store.subscribe(_log_change)
    return store


def build_task_list(
    store: TaskListStore,
    filter_type: Optional[Union[FilterType, str]] = None,
    sort_type: Optional[Union[SortType, str]] = None,
) -> TaskListResponse:
    """Derive the current view and convert it to an API response."""
    filter_type = FilterType(filter_type or config.view.default_filter)
    sort_type = SortType(sort_type or config.view.default_sort)
    view = store.view(filter_type, sort_type)
    return TaskListResponse(
        filter=filter_type,
        sort=sort_type,
        items=[serialize_task(item.task, item.overdue) for item in view.items],
        counts=TaskCountsResponse(
            total=view.counts.total,
            active=view.counts.active,
            completed=view.counts.completed,
        ),
    )


def serialize_task(task: Task, overdue: bool) -> TaskResponse:
    """Convert domain Task to API response."""
    return TaskResponse(
        id=task.id,
        text=task.text,
        completed=task.completed,
        due_date=task.due_date,
        priority=task.priority,
        created_at=task.created_at,
        overdue=overdue,
    )
