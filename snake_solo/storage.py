"""Persisted best score and settings."""

import json
import logging
from pathlib import Path
from typing import Optional

from .models import Settings

logger = logging.getLogger(__name__)

BEST_KEY = "snake.best"
SETTINGS_KEY = "snake.settings"


class MemoryStore:
    def __init__(self, data: Optional[dict] = None):
        self.data: dict[str, str] = dict(data or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str):
        self.data[key] = value


class JsonFileStore:
    """String key-value pairs kept in one JSON file.

    An unreadable or malformed file reads as empty; a failed write is logged
    and the value stays in memory for the rest of the process.
    """

    def __init__(self, path):
        self.path = Path(path)
        self.data: dict[str, str] = self._load()

    def _load(self) -> dict:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except UnicodeDecodeError as e:
            logger.warning("Ignoring corrupt storage file %s: %s", self.path, e)
            return {}
        except OSError as e:
            logger.warning("Could not read %s: %s", self.path, e)
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("Ignoring corrupt storage file %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring storage file %s: not an object", self.path)
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str):
        self.data[key] = value
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(self.data, indent=2), encoding="utf-8")
        except OSError as e:
            logger.warning("Could not write %s: %s", self.path, e)


class Storage:
    def __init__(self, store):
        self.store = store

    def get_best_score(self) -> int:
        raw = self.store.get(BEST_KEY)
        if raw is None:
            return 0
        try:
            return max(0, int(raw))
        except (TypeError, ValueError):
            logger.warning("Ignoring corrupt best score %r", raw)
            return 0

    def set_best_score(self, score: int):
        self.store.set(BEST_KEY, str(score))

    def get_settings(self) -> Settings:
        raw = self.store.get(SETTINGS_KEY)
        if raw is None:
            return Settings()
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Ignoring corrupt settings %r", raw)
            return Settings()
        return Settings.from_dict(data)

    def save_settings(self, settings: Settings):
        self.store.set(SETTINGS_KEY, json.dumps(settings.to_dict()))
