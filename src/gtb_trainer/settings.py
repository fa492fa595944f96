"""
Player settings and the key/value persistence boundary they are stored through.
"""

import json
import logging
from pathlib import Path
from typing import Any, Protocol

from pydantic import BaseModel, Field, ValidationError, field_validator

from .corpus.models import DEFAULT_LANGUAGE, HINT_LANGUAGES

logger = logging.getLogger("gtb-trainer")

DATA_DIR_ENV_VAR = "GTB_TRAINER_DATA_DIR"
SETTINGS_FILE = "settings.json"


class KeyValueStore(Protocol):
    """String key/value storage used to persist settings."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryStore:
    """In-process store, used by tests and throwaway sessions."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStore:
    """Store persisted as a flat JSON object of strings.

    The file is read once on creation and rewritten on every ``set``.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self._data: dict[str, str] = {}
        if self.path.exists():
            try:
                with open(self.path, "r", encoding="utf-8") as f:
                    self._data = {str(k): str(v) for k, v in json.load(f).items()}
            except (json.JSONDecodeError, AttributeError) as e:
                logger.warning(f"⚠️ Ignoring unreadable settings file {self.path}: {e}")

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(self._data, f, indent=2, ensure_ascii=False)


class TrainerSettings(BaseModel):
    """Settings of the hint trainer, passed explicitly into each session."""

    point: int = Field(default=1, ge=1, le=3, description="Difficulty bucket: 1 (<=5), 2 (6-8), 3 (>=9 letters)")
    hint_length: int = Field(default=2, ge=1, description="Characters revealed at round start")
    enable_shortcut: bool = Field(default=True, description="Whether shortcut aliases are accepted")
    language: str = Field(default=DEFAULT_LANGUAGE, description="Answer language of generated rounds")
    score: int = Field(default=0, ge=0, description="Accumulated score")
    custom_shortcuts: str = Field(default="", description="User shortcut text, 'key = value1, value2' per line")

    @field_validator("language")
    @classmethod
    def validate_language(cls, v: str) -> str:
        """Ensure the language can be used to generate rounds."""
        if v not in HINT_LANGUAGES:
            raise ValueError(f"'{v}' is not a hint language")
        return v

    @classmethod
    def load(cls, store: KeyValueStore) -> "TrainerSettings":
        """Read settings from a store, falling back to defaults per key."""
        values: dict[str, Any] = {}
        for key in cls.model_fields:
            raw = store.get(key)
            if raw is None:
                continue
            if key == "enable_shortcut":
                values[key] = raw.strip().lower() != "false"
            else:
                values[key] = raw

            try:
                cls.model_validate({key: values[key]})
            except ValidationError:
                logger.warning(f"⚠️ Stored setting {key}={raw!r} is invalid, using default")
                del values[key]

        return cls(**values)

    def save(self, store: KeyValueStore) -> None:
        """Write every setting to the store as a string."""
        for key, value in self.model_dump().items():
            store.set(key, _to_stored(value))

    def update(self, store: KeyValueStore, **changes: Any) -> "TrainerSettings":
        """Validated copy with ``changes`` applied and persisted.

        Raises:
            ValueError: If a key is unknown
            ValidationError: If a changed value is invalid
        """
        unknown = sorted(set(changes) - set(type(self).model_fields))
        if unknown:
            raise ValueError(f"Unknown setting(s): {', '.join(unknown)}")

        updated = self.model_validate({**self.model_dump(), **changes})
        for key in changes:
            store.set(key, _to_stored(getattr(updated, key)))
        return updated


def _to_stored(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
