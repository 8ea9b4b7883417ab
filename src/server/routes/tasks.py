"""Task list endpoints.

Every endpoint answers with the re-derived list, so a client re-renders from
one response after each action. Unknown ids and blank text are no-ops.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, HTTPException, Query

from src.tasklist import FilterType, SortType

from ..dependencies import build_task_list, get_task_store
from ..schemas import TaskCreateRequest, TaskListResponse

logger = logging.getLogger(__name__)


def register_task_routes(app: FastAPI) -> None:
    """Register task list endpoints."""

    @app.get("/api/tasks", response_model=TaskListResponse)
    async def list_tasks(
        filter: Optional[FilterType] = Query(default=None),
        sort: Optional[SortType] = Query(default=None),
    ) -> TaskListResponse:
        """List tasks for the given filter and sort selectors."""
        store = get_task_store()
        try:
            return build_task_list(store, filter, sort)
        except Exception as exc:
            logger.exception("Failed to list tasks: %s", exc)
            raise HTTPException(status_code=500, detail="Failed to list tasks") from exc

    @app.post("/api/tasks", response_model=TaskListResponse)
    async def add_task(
        request: TaskCreateRequest,
        filter: Optional[FilterType] = Query(default=None),
        sort: Optional[SortType] = Query(default=None),
    ) -> TaskListResponse:
        """Add a task."""
        store = get_task_store()
        try:
            store.add(request.text, due_date=request.due_date, priority=request.priority)
            return build_task_list(store, filter, sort)
        except Exception as exc:
            logger.exception("Failed to add task: %s", exc)
            raise HTTPException(status_code=500, detail="Failed to add task") from exc

    @app.post("/api/tasks/clear-completed", response_model=TaskListResponse)
    async def clear_completed(
        filter: Optional[FilterType] = Query(default=None),
        sort: Optional[SortType] = Query(default=None),
    ) -> TaskListResponse:
        """Remove every completed task."""
        store = get_task_store()
        try:
            store.clear_completed()
            return build_task_list(store, filter, sort)
        except Exception as exc:
            logger.exception("Failed to clear completed tasks: %s", exc)
            raise HTTPException(status_code=500, detail="Failed to clear completed tasks") from exc

    @app.post("/api/tasks/{task_id}/toggle", response_model=TaskListResponse)
    async def toggle_task(
        task_id: str,
        filter: Optional[FilterType] = Query(default=None),
        sort: Optional[SortType] = Query(default=None),
    ) -> TaskListResponse:
        """Flip a task's completed flag."""
        store = get_task_store()
        try:
            store.toggle_complete(task_id)
            return build_task_list(store, filter, sort)
        except Exception as exc:
            logger.exception("Failed to toggle task: %s", exc)
            raise HTTPException(status_code=500, detail="Failed to toggle task") from exc

    @app.delete("/api/tasks/{task_id}", response_model=TaskListResponse)
    async def delete_task(
        task_id: str,
        filter: Optional[FilterType] = Query(default=None),
        sort: Optional[SortType] = Query(default=None),
    ) -> TaskListResponse:
        """Delete a task."""
        store = get_task_store()
        try:
            store.delete(task_id)
            return build_task_list(store, filter, sort)
        except Exception as exc:
            logger.exception("Failed to delete task: %s", exc)
            raise HTTPException(status_code=500, detail="Failed to delete task") from exc
