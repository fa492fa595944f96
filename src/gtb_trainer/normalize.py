"""
Text normalization shared by answer matching, exact search and pattern search.
"""

import re
import unicodedata

# Scripts that must never be decomposed
_KOREAN = re.compile("[\uac00-\ud7a3]")
_JAPANESE = re.compile("[\u3040-\u30ff\u4e00-\u9fff]")

_COMBINING_MARKS = re.compile("[\u0300-\u036f]")
_WHITESPACE = re.compile(r"\s+")

# Letters without a canonical decomposition
_SPECIAL_LETTERS = str.maketrans({"ı": "i", "ł": "l", "Ł": "l"})


def remove_accents(text: str) -> str:
    """Strip diacritics from text, leaving Korean and Japanese untouched.

    Uses Unicode NFKD normalization to decompose accented characters,
    then drops the combining diacritical marks (U+0300-U+036F).

    Args:
        text: Input text to normalize

    Returns:
        Text without accents, or the input unchanged when it contains
        Hangul syllables, Hiragana/Katakana or Kanji.

    Example:
        >>> remove_accents("Çörek")
        'Corek'
        >>> remove_accents("Łódź")
        'lodz'
    """
    if _KOREAN.search(text) or _JAPANESE.search(text):
        return text

    decomposed = unicodedata.normalize("NFKD", text.translate(_SPECIAL_LETTERS))
    return _COMBINING_MARKS.sub("", decomposed)


def format_theme(theme: str) -> str:
    """Canonical key for exact/partial matching.

    Accents removed, lowercased, trimmed and with every whitespace run dropped.
    Not suitable for pattern matching, which is position-sensitive.

    Example:
        >>> format_theme("  Ice Cream ")
        'icecream'
    """
    return _WHITESPACE.sub("", remove_accents(theme).lower().strip())


def strip_spaces(text: str) -> str:
    """Remove every space and trim, for comparing answers with typed guesses."""
    return text.replace(" ", "").strip()


def hint_structure(hint: str | None) -> str:
    """Describe the word lengths of a hint mask, e.g. ``"5-4"``."""
    if not hint:
        return ""
    return "-".join(str(len(segment)) for segment in hint.split(" "))
