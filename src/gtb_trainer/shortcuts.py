"""
Shortcut aliases accepted as answers: user-defined text plus corpus shortcuts.
"""

import logging

from .corpus.loader import ThemeCorpus

logger = logging.getLogger("gtb-trainer")


def parse_shortcuts(raw: str) -> dict[str, list[str]]:
    """Parse a ``key = value1, value2`` shortcut blob.

    One mapping per line. The whole text is lowercased; blank lines, lines
    starting with ``#`` and lines without exactly one ``=`` are ignored.

    Example:
        >>> parse_shortcuts("# danish\\nTavle = Blackboard, Whiteboard")
        {'tavle': ['blackboard', 'whiteboard']}
    """
    shortcuts: dict[str, list[str]] = {}
    for line in raw.lower().split("\n"):
        stripped = line.strip()
        if not stripped or stripped.startswith("#") or "=" not in stripped:
            continue

        segments = [segment.strip() for segment in stripped.split("=")]
        if len(segments) != 2:
            logger.debug(f"Skipping malformed shortcut line: {line!r}")
            continue

        key, values = segments
        shortcuts[key] = [value.strip() for value in values.split(",") if value.strip()]
    return shortcuts


class ShortcutBook:
    """Case-insensitive alias lookup.

    Custom shortcuts come from the user's settings text; builtin shortcuts
    come from the ``shortcut`` field of corpus entries and point at every
    surface form of their entry, so they work whatever the round language.

    Example:
        >>> book = ShortcutBook.from_text("tavle = blackboard, whiteboard")
        >>> book.get("Tavle")
        ['blackboard', 'whiteboard']
        >>> book.get("unknown") is None
        True
    """

    def __init__(
        self,
        custom: dict[str, list[str]] | None = None,
        builtin: dict[str, list[str]] | None = None,
    ) -> None:
        self.custom = custom or {}
        self.builtin = builtin or {}

    @classmethod
    def from_text(cls, raw: str, corpus: ThemeCorpus | None = None) -> "ShortcutBook":
        return cls(
            custom=parse_shortcuts(raw),
            builtin=cls.builtin_from_corpus(corpus) if corpus is not None else None,
        )

    @staticmethod
    def builtin_from_corpus(corpus: ThemeCorpus) -> dict[str, list[str]]:
        builtin: dict[str, list[str]] = {}
        for item in corpus:
            if not item.shortcut or not item.shortcut.strip():
                continue
            targets = builtin.setdefault(item.shortcut.lower().strip(), [])
            for form in item.surface_forms():
                form = form.lower().strip()
                if form not in targets:
                    targets.append(form)
        return builtin

    def get(self, word: str) -> list[str] | None:
        """Targets registered for an alias, custom targets first; None if unknown."""
        key = word.lower().strip()
        if key not in self.custom and key not in self.builtin:
            return None

        targets = list(self.custom.get(key, []))
        targets.extend(t for t in self.builtin.get(key, []) if t not in targets)
        return targets

    def __len__(self) -> int:
        return len(self.custom.keys() | self.builtin.keys())
