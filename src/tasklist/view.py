"""Filtered and sorted projections of the task collection.

Every function here is pure: inputs are never mutated, and results are new
tuples. Incomplete tasks always sort ahead of completed ones; the sort
selector only orders tasks within each of those two groups.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from functools import cmp_to_key
from typing import Iterable, Optional, Tuple, Union

from .models import FilterType, SortType, Task, TaskCounts


@dataclass(frozen=True, slots=True)
class TaskViewItem:
    task: Task
    overdue: bool


@dataclass(frozen=True, slots=True)
class TaskView:
    items: Tuple[TaskViewItem, ...]
    counts: TaskCounts

    @property
    def tasks(self) -> Tuple[Task, ...]:
        return tuple(item.task for item in self.items)


def filter_tasks(
    tasks: Iterable[Task], filter_type: Union[FilterType, str] = FilterType.ALL
) -> Tuple[Task, ...]:
    filter_type = FilterType(filter_type)
    if filter_type is FilterType.ACTIVE:
        return tuple(task for task in tasks if not task.completed)
    if filter_type is FilterType.COMPLETED:
        return tuple(task for task in tasks if task.completed)
    return tuple(tasks)


def _compare_due_dates(a: Task, b: Task) -> int:
    """Dated tasks first, earlier dates first. 0 when equal or both undated."""
    if a.due_date is not None and b.due_date is not None:
        return (a.due_date > b.due_date) - (a.due_date < b.due_date)
    if a.due_date is not None:
        return -1
    if b.due_date is not None:
        return 1
    return 0


def _compare_priority(a: Task, b: Task) -> int:
    return a.priority.rank - b.priority.rank


def _compare_created_desc(a: Task, b: Task) -> int:
    return (b.created_at > a.created_at) - (b.created_at < a.created_at)


def _comparator(sort_type: SortType):
    def compare(a: Task, b: Task) -> int:
        if a.completed != b.completed:
            return 1 if a.completed else -1

        if sort_type is SortType.PRIORITY:
            return _compare_priority(a, b) or _compare_due_dates(a, b)
        if sort_type is SortType.DUE_DATE:
            return _compare_due_dates(a, b) or _compare_priority(a, b)
        return _compare_created_desc(a, b)

    return compare


def sort_tasks(
    tasks: Iterable[Task], sort_type: Union[SortType, str] = SortType.PRIORITY
) -> Tuple[Task, ...]:
    return tuple(sorted(tasks, key=cmp_to_key(_comparator(SortType(sort_type)))))


def is_overdue(task: Task, today: Optional[date] = None) -> bool:
    """True when the task is open and its due date is before today.

    Comparison is by calendar day; a task due today is not overdue.
    """
    if task.due_date is None or task.completed:
        return False
    if today is None:
        today = date.today()
    return task.due_date < today


def count_tasks(tasks: Iterable[Task]) -> TaskCounts:
    total = 0
    completed = 0
    for task in tasks:
        total += 1
        if task.completed:
            completed += 1
    return TaskCounts(total=total, active=total - completed, completed=completed)


def derive_view(
    tasks: Iterable[Task],
    filter_type: Union[FilterType, str] = FilterType.ALL,
    sort_type: Union[SortType, str] = SortType.PRIORITY,
    today: Optional[date] = None,
) -> TaskView:
    """Filter, sort and flag the collection for display.

    Counts always reflect the whole collection, not the filtered subset.
    """
    tasks = tuple(tasks)
    if today is None:
        today = date.today()
    ordered = sort_tasks(filter_tasks(tasks, filter_type), sort_type)
    items = tuple(TaskViewItem(task=task, overdue=is_overdue(task, today)) for task in ordered)
    return TaskView(items=items, counts=count_tasks(tasks))
