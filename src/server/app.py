"""FastAPI application bootstrap."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .dependencies import get_kv_store, get_task_store
from .routes import (
    register_health_routes,
    register_preference_routes,
    register_task_routes,
)

__all__ = ["app", "create_app", "get_kv_store", "get_task_store"]


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(title="Task List API", version="1.0.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_health_routes(app)
    register_task_routes(app)
    register_preference_routes(app)

    return app


app = create_app()
