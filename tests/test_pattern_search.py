"""
Unit tests for per-language wildcard pattern search and match highlighting.
"""

import pytest
from pydantic import ValidationError

from gtb_trainer.corpus import ThemeCorpus
from gtb_trainer.models import SearchCondition
from gtb_trainer.search import expand_pattern, highlight_pattern, matches_pattern, pattern_search


def cond(pattern: str, language: str = "default") -> SearchCondition:
    return SearchCondition(language=language, pattern=pattern)


def themes(items) -> list[str]:
    return [item.theme for item in items]


class TestExpandPattern:
    """Test pattern normalization."""

    @pytest.mark.parametrize("pattern,expected", [
        ("3a4", ("___a____", False)),
        ("3", ("___", False)),
        ("12", ("_" * 12, False)),
        (" T_N_ ", ("t_n_", False)),
        ("3-4", ("___ ____", False)),
        ("3-4!", ("___ ____", True)),
        ("4 !", ("____", True)),
        ("100", ("_" * 10, False)),
    ])
    def test_expand(self, pattern: str, expected: tuple[str, bool]) -> None:
        assert expand_pattern(pattern) == expected

    def test_expanded_length(self) -> None:
        assert len(expand_pattern("3a4")[0]) == 8


class TestMatchesPattern:
    """Test position-wise matching."""

    @pytest.mark.parametrize("word,expected", [("tent", True), ("tune", True), ("tan", False), ("tint", True), ("sent", False)])
    def test_wildcards(self, word: str, expected: bool) -> None:
        assert matches_pattern(word, "t_n_") is expected

    def test_wildcard_and_spaces(self) -> None:
        assert not matches_pattern("ice cream", "_________")
        assert matches_pattern("ice cream", "_________", allow_space_wildcard=True)
        assert matches_pattern("ice cream", "___ _____")


class TestPatternSearch:
    """Test searching the corpus with conditions."""

    def test_single_condition(self, corpus: ThemeCorpus) -> None:
        assert themes(pattern_search(corpus, [cond("t_n_")])) == ["Tent"]

    def test_digit_wildcards_keep_corpus_order(self, corpus: ThemeCorpus) -> None:
        assert themes(pattern_search(corpus, [cond("4")])) == ["Tent", "Tuba"]

    def test_space_handling(self, corpus: ThemeCorpus) -> None:
        assert themes(pattern_search(corpus, [cond("3-5")])) == ["Ice Cream"]
        assert themes(pattern_search(corpus, [cond("9")])) == ["Jellyfish"]
        assert themes(pattern_search(corpus, [cond("9!")])) == ["Jellyfish", "Ice Cream"]

    def test_accents_removed_from_target(self, corpus: ThemeCorpus) -> None:
        assert themes(pattern_search(corpus, [cond("ch_teau")])) == ["Château"]

    def test_language_condition(self, corpus: ThemeCorpus) -> None:
        assert themes(pattern_search(corpus, [cond("6", "de")])) == ["Jellyfish"]

    def test_conditions_are_combined(self, corpus: ThemeCorpus) -> None:
        """Test every condition must hold."""
        assert themes(pattern_search(corpus, [cond("9"), cond("q5", "de")])) == ["Jellyfish"]
        assert pattern_search(corpus, [cond("9"), cond("e7", "de")]) == []

    def test_absent_language_fails_condition(self, corpus: ThemeCorpus) -> None:
        """Test items without the language are excluded, even if the theme would match."""
        assert pattern_search(corpus, [cond("4", "fr")]) == []

    def test_complement_language(self, corpus: ThemeCorpus) -> None:
        assert themes(pattern_search(corpus, [cond("bats", "co")])) == ["Bat"]

    def test_korean_target(self, corpus: ThemeCorpus) -> None:
        assert themes(pattern_search(corpus, [cond("1", "ko")])) == ["Château"]

    def test_empty_conditions(self, corpus: ThemeCorpus) -> None:
        assert pattern_search(corpus, []) == []
        assert pattern_search(corpus, [cond("  "), cond("", "de")]) == []

    def test_blank_condition_is_vacuous(self, corpus: ThemeCorpus) -> None:
        assert themes(pattern_search(corpus, [cond(""), cond("t_n_")])) == ["Tent"]


class TestSearchCondition:
    def test_empty_language_means_default(self) -> None:
        assert SearchCondition(language="", pattern="3").language == "default"

    def test_unknown_language(self) -> None:
        with pytest.raises(ValidationError):
            SearchCondition(language="klingon", pattern="3")


class TestHighlightPattern:
    """Test highlight span computation."""

    def test_alternating_spans(self) -> None:
        spans = highlight_pattern("Tent", cond("t_n_"))
        assert [(s.text, s.kind) for s in spans] == [
            ("T", "literal"), ("e", "wildcard"), ("n", "literal"), ("t", "wildcard"),
        ]

    def test_runs_are_merged(self) -> None:
        spans = highlight_pattern("Jellyfish", cond("3ly4"))
        assert [(s.text, s.kind) for s in spans] == [
            ("Jel", "wildcard"), ("ly", "literal"), ("fish", "wildcard"),
        ]

    def test_accented_text_keeps_original_characters(self) -> None:
        spans = highlight_pattern("Château", cond("ch_teau"))
        assert [(s.text, s.kind) for s in spans] == [
            ("Ch", "literal"), ("â", "wildcard"), ("teau", "literal"),
        ]

    def test_length_mismatch_is_plain(self) -> None:
        spans = highlight_pattern("Tent", cond("5"))
        assert [(s.text, s.kind) for s in spans] == [("Tent", "plain")]
