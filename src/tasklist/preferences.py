"""Display preferences kept next to the task list in the key-value store."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .exceptions import StorageError
from .storage import KeyValueStore

logger = logging.getLogger(__name__)

THEME_KEY = "theme"
LANGUAGE_KEY = "language"
SUPPORTED_LANGUAGES = ("en", "ja")


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"


@dataclass(slots=True)
class Preferences:
    theme: Theme = Theme.LIGHT
    language: str = "en"


def _read(kv_store: KeyValueStore, key: str) -> Optional[str]:
    try:
        return kv_store.get(key)
    except StorageError:
        logger.warning("Failed to read preference key=%s", key, exc_info=True)
        return None


def load_preferences(kv_store: KeyValueStore, defaults: Optional[Preferences] = None) -> Preferences:
    """Read theme and language, falling back to defaults for absent or unknown values."""
    defaults = defaults or Preferences()

    raw_theme = _read(kv_store, THEME_KEY)
    try:
        theme = Theme(raw_theme) if raw_theme is not None else defaults.theme
    except ValueError:
        logger.warning("Ignoring unknown theme preference: %r", raw_theme)
        theme = defaults.theme

    raw_language = _read(kv_store, LANGUAGE_KEY)
    if raw_language in SUPPORTED_LANGUAGES:
        language = raw_language
    else:
        if raw_language is not None:
            logger.warning("Ignoring unsupported language preference: %r", raw_language)
        language = defaults.language

    return Preferences(theme=theme, language=language)


def save_preferences(kv_store: KeyValueStore, preferences: Preferences) -> None:
    """Persist both preferences.

    Raises:
        ValueError: the language code is not supported.
        StorageError: the backend write failed.
    """
    if preferences.language not in SUPPORTED_LANGUAGES:
        raise ValueError(f"unsupported language: {preferences.language}")
    kv_store.set(THEME_KEY, Theme(preferences.theme).value)
    kv_store.set(LANGUAGE_KEY, preferences.language)
