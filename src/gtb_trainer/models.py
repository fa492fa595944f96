"""
Data models for hint rounds, answer checks and theme searches.
"""

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from .corpus.models import DEFAULT_LANGUAGE, LANGUAGE_CODES, TranslationItem
from .normalize import hint_structure


class HintResult(BaseModel):
    """Output of one hint generation.

    Attributes:
        hint: Lowercased mask with revealed letters and ``_`` placeholders
        matched_answers: Every normalized answer consistent with the mask
        matched_themes: Corpus entries whose answer text is in matched_answers
        attempts: Number of samples drawn, including regenerations
    """

    hint: str
    matched_answers: list[str]
    matched_themes: list[TranslationItem]
    attempts: int = 1


class RoundState(BaseModel):
    """State of a single hint round, owned by one session.

    Created from a HintResult when a round starts, updated by the answer
    matcher (found_answers) and the hint revealer (more_hints), and dropped
    on reset.
    """

    difficulty: int = Field(..., ge=1, le=3, description="Word-length bucket, also the points awarded")
    reveal_count: int = Field(..., ge=1, description="Characters revealed at round start")
    language: str = Field(default=DEFAULT_LANGUAGE, description="Language of the answer text")
    hint: str = Field(..., description="Shared hint mask")
    matched_answers: list[str] = Field(default_factory=list, description="Acceptance set")
    matched_themes: list[TranslationItem] = Field(default_factory=list)
    found_answers: list[str] = Field(default_factory=list, description="Accepted answers, in order")
    more_hints: dict[str, str] = Field(
        default_factory=dict,
        description="Per-answer progressive masks; absent key means no hint requested yet",
    )

    @classmethod
    def from_hint(cls, result: HintResult, difficulty: int, reveal_count: int, language: str) -> "RoundState":
        return cls(
            difficulty=difficulty,
            reveal_count=reveal_count,
            language=language,
            hint=result.hint,
            matched_answers=result.matched_answers,
            matched_themes=result.matched_themes,
        )

    @property
    def structure(self) -> str:
        return hint_structure(self.hint)

    @property
    def is_complete(self) -> bool:
        return set(self.matched_answers) <= set(self.found_answers)

    def remaining_answers(self) -> list[str]:
        """Answers not yet found, in acceptance-set order."""
        found = set(self.found_answers)
        return [answer for answer in self.matched_answers if answer not in found]

    def current_hint_for(self, answer: str) -> str:
        """The progressive mask for an answer, or the shared hint if none yet."""
        return self.more_hints.get(answer, self.hint)


class AnswerCheck(BaseModel):
    """Outcome of submitting a guess."""

    accepted: list[str] = Field(default_factory=list)
    complete: bool = False
    found: int = 0
    total: int = 0

    @property
    def rejected(self) -> bool:
        return not self.accepted

    @property
    def progress(self) -> str:
        return f"{self.found}/{self.total}"


class SearchCondition(BaseModel):
    """One per-language pattern condition for pattern search."""

    language: str = Field(default=DEFAULT_LANGUAGE, description="Language code or 'default'")
    pattern: str = Field(default="", description="Pattern with '_', digit runs, '-' and optional trailing '!'")

    @field_validator("language", mode="before")
    @classmethod
    def validate_language(cls, v: str | None) -> str:
        """Map empty languages to 'default' and reject unknown codes."""
        if not v:
            return DEFAULT_LANGUAGE
        if v != DEFAULT_LANGUAGE and v not in LANGUAGE_CODES:
            raise ValueError(f"Unknown language code: '{v}'")
        return v


class PatternSpan(BaseModel):
    """A run of text classified for highlighting a pattern match."""

    text: str
    kind: Literal["wildcard", "literal", "plain"]


class SearchPage(BaseModel):
    """One page of search results."""

    items: list[TranslationItem]
    page: int
    total_pages: int
    total_results: int
