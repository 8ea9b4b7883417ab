"""Display preference endpoints."""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException

from src.tasklist import StorageError, load_preferences, save_preferences

from ..dependencies import config, get_kv_store
from ..schemas import PreferencesResponse, PreferencesUpdateRequest

logger = logging.getLogger(__name__)


def register_preference_routes(app: FastAPI) -> None:
    """Register theme/language preference endpoints."""

    @app.get("/api/preferences", response_model=PreferencesResponse)
    async def get_preferences() -> PreferencesResponse:
        prefs = load_preferences(get_kv_store(), config.preferences)
        return PreferencesResponse(theme=prefs.theme, language=prefs.language)

    @app.put("/api/preferences", response_model=PreferencesResponse)
    async def update_preferences(request: PreferencesUpdateRequest) -> PreferencesResponse:
        kv_store = get_kv_store()
        prefs = load_preferences(kv_store, config.preferences)
        if request.theme is not None:
            prefs.theme = request.theme
        if request.language is not None:
            prefs.language = request.language
        try:
            save_preferences(kv_store, prefs)
        except StorageError as exc:
            logger.exception("Failed to save preferences: %s", exc)
            raise HTTPException(status_code=500, detail="Failed to save preferences") from exc
        return PreferencesResponse(theme=prefs.theme, language=prefs.language)
