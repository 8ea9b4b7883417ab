"""Pydantic schemas for the FastAPI server."""

from __future__ import annotations

from datetime import date, datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from src.tasklist import FilterType, Priority, SortType, Theme


class HealthResponse(BaseModel):
    """Response for health check endpoint."""

    status: str


class TaskResponse(BaseModel):
    """Serialized task with its derived overdue flag."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    text: str
    completed: bool
    due_date: Optional[date] = Field(default=None, alias="dueDate")
    priority: Priority
    created_at: datetime = Field(..., alias="createdAt")
    overdue: bool = False


class TaskCountsResponse(BaseModel):
    """Aggregate counts over the whole collection."""

    total: int
    active: int
    completed: int


class TaskListResponse(BaseModel):
    """Filtered and sorted task list."""

    filter: FilterType
    sort: SortType
    items: List[TaskResponse]
    counts: TaskCountsResponse


class TaskCreateRequest(BaseModel):
    """Request body for adding a task.

    Blank text is accepted and ignored; the list is returned unchanged.
    """

    model_config = ConfigDict(populate_by_name=True)

    text: str = Field(default="")
    due_date: Optional[date] = Field(default=None, alias="dueDate", description="ISO date (YYYY-MM-DD)")
    priority: Priority = Field(default=Priority.MEDIUM)


class PreferencesResponse(BaseModel):
    """Stored display preferences."""

    theme: Theme
    language: Literal["en", "ja"]


class PreferencesUpdateRequest(BaseModel):
    """Request body for updating preferences. Omitted fields are kept."""

    theme: Optional[Theme] = None
    language: Optional[Literal["en", "ja"]] = None
