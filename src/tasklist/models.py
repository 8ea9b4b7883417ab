from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Optional


class Priority(str, Enum):
    """Three-valued priority. Declaration order is the sort order."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    # alias of MEDIUM, used for new tasks
    DEFAULT = "medium"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {Priority.HIGH: 0, Priority.MEDIUM: 1, Priority.LOW: 2}


class FilterType(str, Enum):
    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"


class SortType(str, Enum):
    PRIORITY = "priority"
    DUE_DATE = "dueDate"
    CREATED = "created"


class Taxonomy(str, Enum):
    """How the priority field is labelled for display.

    ``category`` reads high/medium/low as work/personal/other. The stored
    value and its sort order are the same under both taxonomies.
    """

    URGENCY = "urgency"
    CATEGORY = "category"


@dataclass(frozen=True, slots=True)
class Task:
    """A single to-do entry."""

    id: str
    text: str
    completed: bool
    due_date: Optional[date]
    priority: Priority
    created_at: datetime


@dataclass(frozen=True, slots=True)
class TaskCounts:
    total: int
    active: int
    completed: int
