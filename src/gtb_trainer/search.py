"""
Theme search over the corpus: free-text exact/partial search and
per-language wildcard pattern search.
"""

import logging
import math
import re
from typing import Iterable, Sequence

from .corpus.loader import ThemeCorpus
from .corpus.models import DEFAULT_LANGUAGE, TranslationItem
from .models import PatternSpan, SearchCondition, SearchPage
from .normalize import format_theme, remove_accents

logger = logging.getLogger("gtb-trainer")

ITEMS_PER_PAGE = 50

WILDCARD = "_"
SPACE_WILDCARD_SUFFIX = "!"

# Runs of one or two digits expand to that many wildcards
_DIGIT_RUN = re.compile(r"[0-9]{1,2}")


def is_match(candidate: str, query: str, exact: bool) -> bool:
    """Equality when exact, otherwise substring containment of the query."""
    return candidate == query if exact else query in candidate


def search_translations(corpus: ThemeCorpus, query: str, exact: bool = False) -> list[TranslationItem]:
    """Find entries whose theme or any translation matches the query.

    Matching is accent/case/space-insensitive. Results are ranked with exact
    theme matches first, then (partial searches only) themes containing the
    query, then alphabetically by theme.

    Args:
        corpus: Corpus to search
        query: Free text typed by the user
        exact: Require whole-text equality instead of containment

    Returns:
        Ranked list of matching entries, empty for an empty query
    """
    if not query:
        return []

    normalized_query = format_theme(query)

    results: list[tuple[TranslationItem, str]] = []
    for item in corpus:
        theme = format_theme(item.theme)
        if is_match(theme, normalized_query, exact) or any(
            is_match(format_theme(t.translation), normalized_query, exact)
            for t in item.translations.values()
        ):
            results.append((item, theme))

    def rank(entry: tuple[TranslationItem, str]) -> tuple:
        item, theme = entry
        return (
            theme != normalized_query,
            not exact and normalized_query not in theme,
            remove_accents(item.theme).casefold(),
            item.theme,
        )

    results.sort(key=rank)
    return [item for item, _ in results]


def expand_pattern(pattern: str) -> tuple[str, bool]:
    """Normalize a user pattern into its wildcard form.

    Lowercases and trims, strips a trailing ``!`` (which lets wildcards match
    spaces), turns ``-`` into a space and expands digit runs into wildcards.

    Returns:
        (expanded pattern, allow_space_wildcard)

    Example:
        >>> expand_pattern("3a4")
        ('___a____', False)
        >>> expand_pattern("3-4!")
        ('___ ____', True)
    """
    pattern = pattern.lower().strip()
    allow_space_wildcard = False

    if pattern.endswith(SPACE_WILDCARD_SUFFIX):
        allow_space_wildcard = True
        pattern = pattern[:-1].strip()

    pattern = pattern.replace("-", " ")
    pattern = _DIGIT_RUN.sub(lambda m: WILDCARD * int(m.group()), pattern)
    return pattern, allow_space_wildcard


def matches_pattern(word: str, pattern: str, allow_space_wildcard: bool = False) -> bool:
    """Position-wise wildcard match of an already normalized word."""
    if len(word) != len(pattern):
        return False

    for word_char, pattern_char in zip(word, pattern):
        if pattern_char == WILDCARD:
            if word_char == " " and not allow_space_wildcard:
                return False
        elif pattern_char != word_char:
            return False
    return True


def condition_target(item: TranslationItem, language: str) -> str | None:
    """Text a condition is evaluated on, or None when the language is absent."""
    if not language or language == DEFAULT_LANGUAGE:
        return item.theme
    return item.translation_for(language)


def matches_condition(item: TranslationItem, condition: SearchCondition) -> bool:
    if not condition.pattern.strip():
        return True

    target = condition_target(item, condition.language)
    if target is None:
        return False

    pattern, allow_space_wildcard = expand_pattern(condition.pattern)
    return matches_pattern(remove_accents(target).lower(), pattern, allow_space_wildcard)


def pattern_search(corpus: ThemeCorpus, conditions: Sequence[SearchCondition]) -> list[TranslationItem]:
    """Entries satisfying every pattern condition, in corpus order.

    Blank patterns are vacuously true. When no condition carries a pattern
    the result is empty rather than the whole corpus.
    """
    if not conditions or all(not c.pattern.strip() for c in conditions):
        return []

    results = [item for item in corpus if all(matches_condition(item, c) for c in conditions)]
    logger.debug(f"🔎 Pattern search {[c.pattern for c in conditions]} -> {len(results)} results")
    return results


def highlight_pattern(text: str, condition: SearchCondition) -> list[PatternSpan]:
    """Split text into wildcard-matched, literal-matched and plain spans.

    Consecutive positions of the same kind are merged. If the text does not
    have the pattern's length the whole text is a single plain span.
    """
    pattern, _ = expand_pattern(condition.pattern)
    normalized_text = remove_accents(text).lower()

    if not pattern or len(normalized_text) != len(pattern) or len(text) != len(pattern):
        return [PatternSpan(text=text, kind="plain")]

    spans: list[PatternSpan] = []
    for i, char in enumerate(text):
        if pattern[i] == WILDCARD:
            kind = "wildcard"
        elif pattern[i] == normalized_text[i]:
            kind = "literal"
        else:
            kind = "plain"

        if spans and spans[-1].kind == kind:
            spans[-1] = PatternSpan(text=spans[-1].text + char, kind=kind)
        else:
            spans.append(PatternSpan(text=char, kind=kind))
    return spans


def paginate(items: Iterable[TranslationItem], page: int = 1, per_page: int = ITEMS_PER_PAGE) -> SearchPage:
    """Slice results into 1-based pages."""
    items = list(items)
    total_pages = math.ceil(len(items) / per_page)
    start = (max(page, 1) - 1) * per_page
    return SearchPage(
        items=items[start:start + per_page],
        page=page,
        total_pages=total_pages,
        total_results=len(items),
    )
