"""
Unit tests for shortcut parsing and lookup.
"""

from gtb_trainer.corpus import ThemeCorpus
from gtb_trainer.shortcuts import ShortcutBook, parse_shortcuts


SHORTCUT_TEXT = """
# Danish shortcuts
Tavle = Blackboard, Whiteboard
hd = Hot Dog,
no equals sign here
a = b = c

ic=Ice Cream
"""


class TestParseShortcuts:
    """Test the shortcut text format."""

    def test_parse(self) -> None:
        assert parse_shortcuts(SHORTCUT_TEXT) == {
            "tavle": ["blackboard", "whiteboard"],
            "hd": ["hot dog"],
            "ic": ["ice cream"],
        }

    def test_comments_and_blank_lines_ignored(self) -> None:
        assert parse_shortcuts("# x = y\n\n   \n") == {}

    def test_empty(self) -> None:
        assert parse_shortcuts("") == {}


class TestShortcutBook:
    """Test alias lookup."""

    def test_case_insensitive_lookup(self) -> None:
        book = ShortcutBook.from_text(SHORTCUT_TEXT)
        assert book.get("TAVLE") == ["blackboard", "whiteboard"]
        assert book.get("  hd ") == ["hot dog"]

    def test_unknown_alias(self) -> None:
        assert ShortcutBook.from_text(SHORTCUT_TEXT).get("zzz") is None

    def test_builtin_aliases_cover_all_surface_forms(self, corpus: ThemeCorpus) -> None:
        book = ShortcutBook.from_text("", corpus)
        assert book.get("chalk board") == ["blackboard", "tavle", "tableau noir"]

    def test_custom_targets_come_first(self, corpus: ThemeCorpus) -> None:
        book = ShortcutBook.from_text("chalk board = whiteboard", corpus)
        assert book.get("Chalk Board") == ["whiteboard", "blackboard", "tavle", "tableau noir"]

    def test_len(self, corpus: ThemeCorpus) -> None:
        assert len(ShortcutBook.from_text(SHORTCUT_TEXT, corpus)) == 4
