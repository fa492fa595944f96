"""
Answer acceptance: decide which remaining answers a guess satisfies.
"""

import logging

from .corpus.models import TranslationItem
from .models import AnswerCheck, RoundState
from .normalize import format_theme, strip_spaces
from .shortcuts import ShortcutBook

logger = logging.getLogger("gtb-trainer")


def is_work_theme(word: str, item: TranslationItem | None) -> bool:
    """Whether a word names the same theme as a corpus entry in any language.

    The word is compared, accent/case/space-insensitively, against the theme
    and every translation, also trying its singular (trailing "s" removed)
    and plural (trailing "s" added) forms.

    Example:
        >>> is_work_theme("Jellyfishes", jellyfish_item)
        False
        >>> is_work_theme("medusas", jellyfish_item)
        True
    """
    if item is None:
        return False

    word_formatted = format_theme(word)
    candidates = {
        word_formatted,
        word_formatted[:-1] if word_formatted.endswith("s") else word_formatted,
        word_formatted + "s",
    }
    works = {format_theme(form) for form in item.surface_forms()}
    return not candidates.isdisjoint(works)


def themes_for_answer(state: RoundState, answer: str) -> list[TranslationItem]:
    """Matched corpus entries whose round-language text is ``answer``."""
    return [
        item for item in state.matched_themes
        if item.answer_text(state.language).lower().strip() == answer.lower().strip()
    ]


def check_answer(
    raw_input: str,
    state: RoundState,
    *,
    shortcuts: ShortcutBook | None = None,
    enable_shortcut: bool = True,
) -> AnswerCheck:
    """Check a guess against the answers of a round not yet found.

    An answer is accepted when the guess equals it (ignoring spaces), when
    shortcuts are enabled and the guess is an alias targeting it, or when the
    guess is equivalent to its corpus entry in any language.

    Accepted answers are appended to ``state.found_answers``. Empty input and
    wrong guesses leave the state untouched and return an empty ``accepted``.

    Args:
        raw_input: The text typed by the player
        state: Round to check against (updated in-place on acceptance)
        shortcuts: Alias lookup, or None for no aliases
        enable_shortcut: Whether aliases are honoured for this guess

    Returns:
        AnswerCheck with the accepted answers and whether the round is complete
    """
    user_answer = raw_input.strip().lower()
    total = len(state.matched_answers)

    if not user_answer:
        return AnswerCheck(found=len(state.found_answers), total=total)

    aliases = (shortcuts.get(user_answer) if shortcuts is not None and enable_shortcut else None) or []
    if enable_shortcut and aliases:
        logger.debug(f"[shortcuts] '{user_answer}' -> {aliases}")

    accepted: list[str] = []
    for answer in state.remaining_answers():
        if (
            strip_spaces(answer) == strip_spaces(user_answer)
            or answer in aliases
            or any(is_work_theme(user_answer, item) for item in themes_for_answer(state, answer))
        ):
            accepted.append(answer)

    if accepted:
        state.found_answers.extend(accepted)

    return AnswerCheck(
        accepted=accepted,
        complete=bool(accepted) and state.is_complete,
        found=len(state.found_answers),
        total=total,
    )
