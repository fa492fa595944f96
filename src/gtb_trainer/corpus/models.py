"""
Data models for the theme translation corpus.
"""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

DEFAULT_LANGUAGE = "default"

# Complement is a pseudo-language bucket, only searched by pattern
COMPLEMENT_LANGUAGE = "co"

LANGUAGE_CODES: tuple[str, ...] = (
    "cs", "da", "de", "en", "es", "fi", "fr", "hu", "it", "ja", "ko", "nl",
    "no", "pl", "pt", "ro", "ru", "sv", "tr", "uk", "zh_cn", "zh_tw",
    COMPLEMENT_LANGUAGE,
)

HINT_LANGUAGES: frozenset[str] = frozenset(
    {DEFAULT_LANGUAGE, *(code for code in LANGUAGE_CODES if code != COMPLEMENT_LANGUAGE)}
)


class Translation(BaseModel):
    """A single translated surface form of a theme."""

    model_config = {"frozen": True}

    translation: str = Field(..., description="Translated text")
    is_approved: bool = Field(default=False, description="Whether the translation was approved")
    approved_at: datetime | None = Field(default=None, description="Approval timestamp")


class Occurrence(BaseModel):
    """A theme referenced by a multiword grouping."""

    model_config = {"frozen": True}

    theme: str
    reference: str


class Multiword(BaseModel):
    """An alternate compound-word grouping. Informational only."""

    model_config = {"frozen": True}

    multiword: str
    occurrences: list[Occurrence] = Field(default_factory=list)


class TranslationItem(BaseModel):
    """A guessable theme with its translations, shortcut and multiwords.

    The theme and every translation are alternate surface forms of the same
    concept, so matching treats them as interchangeable.

    Attributes:
        id: Stable identifier from the dataset
        theme: Canonical (default language) form, e.g. "Jellyfish"
        shortcut: Optional short alias accepted as an answer
        multiwords: Compound-word groupings referencing other themes
        translations: Language code to Translation mapping; keys are optional
    """

    model_config = {"frozen": True}

    id: int | str = Field(..., description="Opaque stable identifier")
    theme: str = Field(..., description="Canonical theme text")
    shortcut: str | None = Field(default=None, description="Short alias")
    multiwords: list[Multiword] = Field(default_factory=list)
    translations: dict[str, Translation] = Field(default_factory=dict)

    @field_validator("translations")
    @classmethod
    def validate_language_codes(cls, v: dict[str, Translation]) -> dict[str, Translation]:
        """Ensure every translation key is a known language code."""
        unknown = sorted(set(v) - set(LANGUAGE_CODES))
        if unknown:
            raise ValueError(f"Unknown language code(s): {', '.join(unknown)}")
        return v

    def translation_for(self, language: str) -> str | None:
        """Translation text for a language, or None when absent."""
        translation = self.translations.get(language)
        return translation.translation if translation else None

    def answer_text(self, language: str = DEFAULT_LANGUAGE) -> str:
        """Text used as the answer for a language, falling back to the theme."""
        if language == DEFAULT_LANGUAGE:
            return self.theme
        return self.translation_for(language) or self.theme

    def surface_forms(self) -> list[str]:
        """The theme followed by every translation text."""
        return [self.theme, *(t.translation for t in self.translations.values())]
