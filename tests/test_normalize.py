"""
Unit tests for text normalization helpers.
"""

import pytest

from gtb_trainer.normalize import format_theme, hint_structure, remove_accents, strip_spaces


class TestRemoveAccents:
    """Test accent stripping."""

    @pytest.mark.parametrize("text,expected", [
        ("Château", "Chateau"),
        ("Murciélago", "Murcielago"),
        ("Schädel", "Schadel"),
        ("Kafatası", "Kafatasi"),
        ("Łódź", "lodz"),
        ("Muñeco de nieve", "Muneco de nieve"),
        ("plain", "plain"),
        ("", ""),
    ])
    def test_strips_diacritics(self, text: str, expected: str) -> None:
        """Test accented Latin letters are reduced to their base letters."""
        assert remove_accents(text) == expected

    def test_korean_left_unchanged(self) -> None:
        """Test strings with Hangul syllables are not decomposed."""
        assert remove_accents("케이크") == "케이크"

    def test_japanese_left_unchanged(self) -> None:
        """Test strings with Kana or Kanji are not decomposed, even with accents."""
        assert remove_accents("ハチ") == "ハチ"
        assert remove_accents("虹 é") == "虹 é"

    def test_cyrillic_is_processed(self) -> None:
        """Test non-CJK scripts still go through decomposition."""
        assert remove_accents("Ёж") == "Еж"

    @pytest.mark.parametrize("text", ["Château", "Łódź", "ﬁre", "ｱ", "Ǆ", "虹", "Ёж"])
    def test_idempotent(self, text: str) -> None:
        """Test applying remove_accents twice equals applying it once."""
        once = remove_accents(text)
        assert remove_accents(once) == once


class TestFormatTheme:
    """Test canonical theme keys."""

    def test_lowercases_trims_and_removes_spaces(self) -> None:
        """Test whitespace is removed everywhere, not only at the ends."""
        assert format_theme("  Ice  Cream\t") == "icecream"

    def test_removes_accents(self) -> None:
        """Test accents are stripped before comparison."""
        assert format_theme("Tableau Noir") == format_theme("tableau noir")
        assert format_theme("Château") == "chateau"

    @pytest.mark.parametrize("text", ["Ice Cream", "  Château ", "Bonhomme de neige"])
    def test_idempotent(self, text: str) -> None:
        """Test format_theme is idempotent."""
        assert format_theme(format_theme(text)) == format_theme(text)


class TestHelpers:
    """Test answer comparison helpers."""

    def test_strip_spaces(self) -> None:
        assert strip_spaces(" ice cream ") == "icecream"

    def test_hint_structure(self) -> None:
        """Test structure lists word lengths separated by dashes."""
        assert hint_structure("_____ ____") == "5-4"
        assert hint_structure("j___y____") == "9"
        assert hint_structure("") == ""
        assert hint_structure(None) == ""
