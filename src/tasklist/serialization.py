"""Persisted record shape of the task list.

The whole collection is stored under one key as a JSON array of records::

    {"id": str, "text": str, "completed": bool, "dueDate": "YYYY-MM-DD" | null,
     "priority": "high" | "medium" | "low", "createdAt": ISO-8601 instant}
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from .models import Priority, Task


class TaskRecord(BaseModel):
    """Wire form of a Task (camelCase keys)."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., min_length=1)
    text: str
    completed: bool = False
    due_date: Optional[date] = Field(default=None, alias="dueDate")
    priority: Priority = Priority.MEDIUM
    created_at: datetime = Field(..., alias="createdAt")

    @field_validator("text")
    @classmethod
    def _text_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("text must not be blank")
        return value

    @field_validator("due_date", mode="before")
    @classmethod
    def _empty_due_date(cls, value: Any) -> Any:
        if value == "":
            return None
        return value

    @field_validator("created_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @classmethod
    def from_task(cls, task: Task) -> "TaskRecord":
        return cls(
            id=task.id,
            text=task.text,
            completed=task.completed,
            due_date=task.due_date,
            priority=task.priority,
            created_at=task.created_at,
        )

    def to_task(self) -> Task:
        return Task(
            id=self.id,
            text=self.text,
            completed=self.completed,
            due_date=self.due_date,
            priority=self.priority,
            created_at=self.created_at,
        )


_RECORDS = TypeAdapter(List[TaskRecord])


def dump_tasks(tasks: Iterable[Task]) -> str:
    records = [TaskRecord.from_task(task) for task in tasks]
    return _RECORDS.dump_json(records, by_alias=True).decode("utf-8")


def parse_tasks(raw: str) -> list[Task]:
    """Parse a persisted collection.

    Raises:
        ValueError: malformed JSON, an invalid record, or a repeated id.
            pydantic's ValidationError is a ValueError subclass.
    """
    records = _RECORDS.validate_json(raw)
    seen: set[str] = set()
    for record in records:
        if record.id in seen:
            raise ValueError(f"duplicate task id: {record.id}")
        seen.add(record.id)
    return [record.to_task() for record in records]
