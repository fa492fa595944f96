"""
GTB Trainer - a guess-the-theme hint trainer and multilingual theme search.
"""

from .corpus import ThemeCorpus, TranslationItem, load_default_corpus
from .generator import HintGenerationError, HintGenerator, reveal_more
from .matching import check_answer, is_work_theme
from .models import AnswerCheck, HintResult, RoundState, SearchCondition
from .normalize import format_theme, remove_accents
from .search import pattern_search, search_translations
from .session import GameSession, SessionError
from .settings import JsonFileStore, MemoryStore, TrainerSettings
from .shortcuts import ShortcutBook, parse_shortcuts

try:
    from importlib.metadata import version as _get_version
    __version__ = _get_version("gtb-trainer")
except Exception:
    __version__ = "0.1.0"  # Fallback if metadata unavailable
__all__ = [
    "AnswerCheck",
    "GameSession",
    "HintGenerationError",
    "HintGenerator",
    "HintResult",
    "JsonFileStore",
    "MemoryStore",
    "RoundState",
    "SearchCondition",
    "SessionError",
    "ShortcutBook",
    "ThemeCorpus",
    "TrainerSettings",
    "TranslationItem",
    "check_answer",
    "format_theme",
    "is_work_theme",
    "load_default_corpus",
    "parse_shortcuts",
    "pattern_search",
    "remove_accents",
    "reveal_more",
    "search_translations",
]
