"""
Pytest configuration and fixtures for gtb-trainer tests.
"""

import copy
import random
import sys
from pathlib import Path

import pytest

# Add src directory to Python path to allow importing gtb_trainer
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from gtb_trainer.corpus import ThemeCorpus


# Small corpus shared by the engine tests
TEST_THEMES = [
    {
        "id": 1,
        "theme": "Jellyfish",
        "translations": {
            "de": {"translation": "Qualle", "is_approved": True, "approved_at": "2024-03-02T10:00:00Z"},
            "es": {"translation": "Medusa", "is_approved": True},
        },
    },
    {
        "id": 2,
        "theme": "Blackboard",
        "shortcut": "Chalk board",
        "translations": {
            "da": {"translation": "Tavle", "is_approved": True},
            "fr": {"translation": "Tableau noir", "is_approved": True},
        },
    },
    {
        "id": 3,
        "theme": "Whiteboard",
        "translations": {
            "fr": {"translation": "Tableau blanc", "is_approved": True},
        },
    },
    {
        "id": 4,
        "theme": "Tent",
        "translations": {
            "fr": {"translation": "Tente", "is_approved": True},
        },
    },
    {
        "id": 5,
        "theme": "Tuba",
        "translations": {},
    },
    {
        "id": 6,
        "theme": "Bat",
        "translations": {
            "de": {"translation": "Fledermaus", "is_approved": True},
            "co": {"translation": "Bats", "is_approved": False},
        },
    },
    {
        "id": 7,
        "theme": "Ice Cream",
        "multiwords": [
            {"multiword": "Ice Cream Cone", "occurrences": [{"theme": "Ice Cream", "reference": "7"}]},
        ],
        "translations": {
            "de": {"translation": "Eiscreme", "is_approved": True},
            "es": {"translation": "Helado", "is_approved": True},
        },
    },
    {
        "id": 8,
        "theme": "Château",
        "translations": {
            "ko": {"translation": "성", "is_approved": True},
        },
    },
]


@pytest.fixture
def corpus() -> ThemeCorpus:
    """Corpus built from TEST_THEMES."""
    return ThemeCorpus.from_data({"last_updated": "2026-10-01", "themes": TEST_THEMES})


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for deterministic generation."""
    return random.Random(1234)


@pytest.fixture
def themes_data() -> list[dict]:
    """Raw theme entries, as they appear in a corpus file."""
    return copy.deepcopy(TEST_THEMES)


class TailRandom(random.Random):
    """Random source revealing the last positions and always choosing the first element."""

    def sample(self, population, k, **kwargs):
        population = list(population)
        return population[len(population) - k:]

    def choice(self, seq):
        return seq[0]


@pytest.fixture
def tail_rng() -> random.Random:
    return TailRandom(0)


@pytest.fixture
def board_corpus() -> ThemeCorpus:
    """Two ten-letter themes sharing the ending 'board', and a short one."""
    return ThemeCorpus.from_data([
        {
            "id": 1,
            "theme": "Blackboard",
            "shortcut": "Chalk board",
            "translations": {"fr": {"translation": "Tableau noir"}},
        },
        {"id": 2, "theme": "Whiteboard"},
        {"id": 3, "theme": "Tent"},
    ])
