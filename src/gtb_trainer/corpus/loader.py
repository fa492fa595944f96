"""
Loading of the theme corpus from bundled or user supplied JSON/YAML files.
"""

import json
import logging
import os
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Iterable, Iterator

import yaml
from pydantic import ValidationError

from .models import TranslationItem

logger = logging.getLogger("gtb-trainer")

CORPUS_ENV_VAR = "GTB_TRAINER_CORPUS"
BUNDLED_CORPUS = "themes.yaml"


class CorpusError(Exception):
    """Raised when a corpus file cannot be parsed into theme entries."""


class ThemeCorpus:
    """Immutable, in-memory table of themes.

    Loaded once at startup and only read afterwards, so instances can be
    shared between sessions.

    Example:
        >>> corpus = ThemeCorpus.load(Path("themes.yaml"))
        >>> corpus.total_themes
        42
        >>> corpus.get(7).theme
        'Jellyfish'
    """

    def __init__(self, items: Iterable[TranslationItem], last_updated: str | None = None) -> None:
        self._items: tuple[TranslationItem, ...] = tuple(items)
        self._by_id: dict[int | str, TranslationItem] = {item.id: item for item in self._items}
        self.last_updated = last_updated

    @classmethod
    def from_data(cls, data: Any) -> "ThemeCorpus":
        """Build a corpus from decoded JSON/YAML data.

        Accepts either a bare list of theme entries or a mapping with a
        ``themes`` list and an optional ``last_updated`` value.

        Raises:
            CorpusError: If the data has the wrong shape or an entry is invalid
        """
        last_updated = None
        if isinstance(data, dict):
            if "themes" not in data:
                raise CorpusError("Corpus file must contain a 'themes' key")
            last_updated = data.get("last_updated")
            data = data["themes"]

        if not isinstance(data, list):
            raise CorpusError(f"Expected a list of themes, got {type(data).__name__}")

        try:
            items = [TranslationItem(**entry) for entry in data]
        except (TypeError, ValidationError) as e:
            raise CorpusError(f"Invalid theme entry: {e}") from e

        return cls(items, last_updated=str(last_updated) if last_updated is not None else None)

    @classmethod
    def load(cls, path: Path | str) -> "ThemeCorpus":
        """Load a corpus from a ``.json``, ``.yaml`` or ``.yml`` file.

        Raises:
            FileNotFoundError: If the file doesn't exist
            CorpusError: If the suffix is unsupported or the content is malformed
        """
        path = Path(path)
        suffix = path.suffix.lower()
        if suffix not in (".json", ".yaml", ".yml"):
            raise CorpusError(f"Unsupported corpus format: '{path.suffix}'")

        with open(path, "r", encoding="utf-8") as f:
            try:
                data = json.load(f) if suffix == ".json" else yaml.safe_load(f)
            except (json.JSONDecodeError, yaml.YAMLError) as e:
                raise CorpusError(f"Could not parse {path.name}: {e}") from e

        corpus = cls.from_data(data)
        logger.debug(f"📚 Loaded {corpus.total_themes} themes from {path}")
        return corpus

    @property
    def items(self) -> tuple[TranslationItem, ...]:
        return self._items

    @property
    def total_themes(self) -> int:
        return len(self._items)

    @property
    def total_translations(self) -> int:
        return sum(len(item.translations) for item in self._items)

    def get(self, item_id: int | str) -> TranslationItem | None:
        """Look up an entry by its identifier."""
        return self._by_id.get(item_id)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[TranslationItem]:
        return iter(self._items)


@lru_cache(maxsize=1)
def load_default_corpus() -> ThemeCorpus:
    """Load the corpus named by ``GTB_TRAINER_CORPUS``, or the bundled one."""
    override = os.getenv(CORPUS_ENV_VAR)
    if override:
        return ThemeCorpus.load(Path(override).expanduser())

    with resources.as_file(resources.files(__package__) / "data" / BUNDLED_CORPUS) as path:
        return ThemeCorpus.load(path)
