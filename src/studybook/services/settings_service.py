"""Settings holder with change notification."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeAlias

from studybook.models.settings import Settings

logger = logging.getLogger(__name__)

SettingsListener: TypeAlias = Callable[[Settings], None]


class SettingsService:
    """Owns the current ``Settings`` and tells listeners when it changes."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or Settings()
        self._listeners: list[SettingsListener] = []

    @property
    def current(self) -> Settings:
        return self._settings

    def subscribe(self, listener: SettingsListener) -> None:
        self._listeners.append(listener)

    def replace(self, settings: Settings) -> None:
        self._settings = settings
        self._notify()

    def update(self, **changes: Any) -> Settings:
        """Apply top-level changes; nested ``durations``/``colors`` may be dicts.

        Values go through the model validators, so bad numbers are clamped.
        """
        data = self._settings.model_dump()
        for key, value in changes.items():
            if isinstance(value, dict) and isinstance(data.get(key), dict):
                data[key] = {**data[key], **value}
            else:
                data[key] = value
        self._settings = Settings.model_validate(data)
        logger.debug("Settings updated: %s", sorted(changes))
        self._notify()
        return self._settings

    def _notify(self) -> None:
        for listener in self._listeners:
            listener(self._settings)
