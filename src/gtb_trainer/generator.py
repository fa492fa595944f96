"""Hint generator: sample a theme, mask it, and find every answer the mask fits.

The generator draws a theme of the requested difficulty, reveals a few of its
letters, and collects every corpus answer consistent with the resulting mask.
Masks matched by too many answers are usually re-rolled, within a fixed
number of attempts. The revealer uncovers one more letter of a mask for a
single answer.
"""

from __future__ import annotations

import logging
import random

from .corpus.loader import ThemeCorpus
from .corpus.models import DEFAULT_LANGUAGE, HINT_LANGUAGES, TranslationItem
from .models import HintResult
from .normalize import hint_structure

logger = logging.getLogger("gtb-trainer")

# Masks matching more answers than this are candidates for regeneration
MAX_MATCHED_ANSWERS = 25

# Chance of re-rolling a mask with too many matches
REGENERATE_PROBABILITY = 0.75

# Hard bound on re-rolls, so generation always terminates
MAX_REGENERATIONS = 5

HIDDEN = "_"

DIFFICULTY_LABELS: dict[int, str] = {
    1: "Easy (<=5 letters)",
    2: "Medium (6-8 letters)",
    3: "Hard (>=9 letters)",
}


class HintGenerationError(Exception):
    """Raised when hint generation is called outside its input contract."""


def length_bucket(text: str) -> int:
    """Difficulty bucket (1-3) for an answer text, spaces included."""
    length = len(text)
    if length <= 5:
        return 1
    if length <= 8:
        return 2
    return 3


def build_hint(sample: str, reveal_count: int, rng: random.Random) -> str:
    """Mask a sample, revealing ``reveal_count`` random non-space characters.

    The reveal count is clamped so that at least one character stays hidden.
    The sample is lowercased and trimmed first, so the mask has the length of
    the normalized answer even when lowercasing changes it (Turkish "İ").
    Spaces are copied through.
    """
    sample = sample.lower().strip()
    available = [i for i, char in enumerate(sample) if char != " "]
    if reveal_count >= len(available):
        reveal_count = len(available) - 1

    revealed = set(rng.sample(available, max(reveal_count, 0)))

    hint = "".join(
        char if char == " " or i in revealed else HIDDEN
        for i, char in enumerate(sample)
    )
    return hint


def fits_hint(hint: str, answer: str) -> bool:
    """Whether a normalized answer is consistent with a hint mask.

    Revealed letters must match, spaces must line up exactly, and a
    placeholder never stands for a space.
    """
    if len(answer) != len(hint):
        return False

    for hint_char, answer_char in zip(hint, answer):
        if hint_char == HIDDEN:
            if answer_char == " ":
                return False
        elif hint_char != answer_char:
            return False
    return True


def match_answers(hint: str, answers: list[str]) -> list[str]:
    """Deduplicated, normalized answers consistent with the hint, in input order."""
    matched: dict[str, None] = {}
    for raw_answer in answers:
        answer = raw_answer.lower().strip()
        if fits_hint(hint, answer):
            matched.setdefault(answer, None)
    return list(matched)


def reveal_more(answer: str, hint: str, rng: random.Random) -> str:
    """Reveal one more hidden character of ``hint`` using ``answer``.

    Returns the hint unchanged when the lengths differ or when one or fewer
    placeholders remain, so the mask is never fully revealed this way.
    """
    if len(answer) != len(hint):
        return hint

    hidden = [i for i, char in enumerate(hint) if char == HIDDEN]
    if len(hidden) <= 1:
        return hint

    position = rng.choice(hidden)
    return hint[:position] + answer[position] + hint[position + 1:]


class HintGenerator:
    """Generate hint rounds from a theme corpus.

    Example:
        >>> generator = HintGenerator(corpus, rng=random.Random(7))
        >>> result = generator.generate(difficulty=3, reveal_count=2)
        >>> result.hint
        'j___y____'
        >>> result.matched_answers
        ['jellyfish']
    """

    def __init__(self, corpus: ThemeCorpus, rng: random.Random | None = None) -> None:
        self.corpus = corpus
        self.rng = rng or random.Random()

    def candidate_pool(self, difficulty: int, language: str = DEFAULT_LANGUAGE) -> list[tuple[TranslationItem, str]]:
        """Corpus entries paired with their answer text, filtered by difficulty.

        Raises:
            HintGenerationError: If the difficulty or language is unknown
        """
        if difficulty not in DIFFICULTY_LABELS:
            raise HintGenerationError(f"Difficulty must be 1, 2 or 3, got {difficulty}")
        if language not in HINT_LANGUAGES:
            raise HintGenerationError(f"'{language}' is not a hint language")

        pool = []
        for item in self.corpus:
            text = item.answer_text(language)
            if length_bucket(text) == difficulty:
                pool.append((item, text))
        return pool

    def generate(self, difficulty: int, reveal_count: int, language: str = DEFAULT_LANGUAGE) -> HintResult:
        """Generate a hint round.

        Args:
            difficulty: 1 (<=5 letters), 2 (6-8 letters) or 3 (>=9 letters)
            reveal_count: Characters to reveal up front (clamped below the
                          number of non-space characters)
            language: "default" for themes, or a translation language code

        Returns:
            HintResult with the mask, the acceptance set and the matching entries.

        Raises:
            HintGenerationError: If any argument is out of contract or the
                                 candidate pool is empty.
        """
        if reveal_count < 1:
            raise HintGenerationError(f"reveal_count must be at least 1, got {reveal_count}")

        pool = self.candidate_pool(difficulty, language)
        if not pool:
            raise HintGenerationError(
                f"No themes of difficulty {difficulty} for language '{language}'"
            )
        texts = [text for _, text in pool]

        attempts = 0
        while True:
            attempts += 1
            sample = self.rng.choice(texts)
            hint = build_hint(sample, reveal_count, self.rng)
            matched_answers = match_answers(hint, texts)

            if (
                len(matched_answers) > MAX_MATCHED_ANSWERS
                and self.rng.random() < REGENERATE_PROBABILITY
                and attempts <= MAX_REGENERATIONS
            ):
                logger.debug(
                    f"🔁 Hint '{hint}' matches {len(matched_answers)} answers, regenerating"
                )
                continue
            break

        accepted = set(matched_answers)
        matched_themes = [item for item, text in pool if text.lower().strip() in accepted]

        logger.info(
            f"🎯 Generated hint {hint_structure(hint)} (difficulty={difficulty}, "
            f"language={language}, answers={len(matched_answers)}, attempts={attempts})"
        )
        return HintResult(
            hint=hint,
            matched_answers=matched_answers,
            matched_themes=matched_themes,
            attempts=attempts,
        )
