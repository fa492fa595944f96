"""
Multilingual theme corpus: themes, translations, shortcuts and multiwords.
"""

from .loader import CorpusError, ThemeCorpus, load_default_corpus
from .models import (
    COMPLEMENT_LANGUAGE,
    DEFAULT_LANGUAGE,
    HINT_LANGUAGES,
    LANGUAGE_CODES,
    Multiword,
    Occurrence,
    Translation,
    TranslationItem,
)

__all__ = [
    "COMPLEMENT_LANGUAGE",
    "DEFAULT_LANGUAGE",
    "HINT_LANGUAGES",
    "LANGUAGE_CODES",
    "CorpusError",
    "Multiword",
    "Occurrence",
    "ThemeCorpus",
    "Translation",
    "TranslationItem",
    "load_default_corpus",
]
