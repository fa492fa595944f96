"""
Hint round session: start, answer, reveal, time out and reset.
"""

import logging
from typing import Literal

from shortuuid import random

from .generator import HintGenerator, reveal_more
from .matching import check_answer
from .models import AnswerCheck, RoundState
from .settings import KeyValueStore, TrainerSettings
from .shortcuts import ShortcutBook

logger = logging.getLogger("gtb-trainer")

# Seconds available to find every answer of a round
ROUND_SECONDS = 90

SessionStatus = Literal["start", "playing", "won", "timeout"]


class SessionError(Exception):
    """Raised when a round operation is called in the wrong session status."""


class GameSession:
    """A single player's hint-trainer session.

    Owns the current RoundState exclusively; the corpus behind the generator
    is shared and read-only. Settings are passed in and written back through
    the store when the player scores.

    Example:
        >>> session = GameSession(generator, TrainerSettings(), MemoryStore())
        >>> state = session.start(difficulty=3, reveal_count=2)
        >>> session.submit_answer("jellyfish").accepted
        ['jellyfish']
    """

    def __init__(
        self,
        generator: HintGenerator,
        settings: TrainerSettings,
        store: KeyValueStore,
        shortcuts: ShortcutBook | None = None,
    ) -> None:
        self.session_id = random(length=8)
        self.generator = generator
        self.settings = settings
        self.store = store
        if shortcuts is None:
            shortcuts = ShortcutBook.from_text(settings.custom_shortcuts, generator.corpus)
        self.shortcuts = shortcuts

        self.status: SessionStatus = "start"
        self.round: RoundState | None = None
        self.time_left = ROUND_SECONDS
        self.show_all_answers = False
        self.enable_shortcut = settings.enable_shortcut

    @property
    def score(self) -> int:
        return self.settings.score

    def _require_round(self) -> RoundState:
        if self.round is None:
            raise SessionError("No round has been started")
        return self.round

    def _require_playing(self) -> RoundState:
        state = self._require_round()
        if self.status != "playing":
            raise SessionError(f"Round is not in progress (status: {self.status})")
        return state

    def start(
        self,
        difficulty: int | None = None,
        reveal_count: int | None = None,
        language: str | None = None,
        enable_shortcut: bool | None = None,
    ) -> RoundState:
        """Start a new round, using settings for any argument left as None.

        Raises:
            HintGenerationError: If the generator rejects the arguments
        """
        difficulty = difficulty if difficulty is not None else self.settings.point
        reveal_count = reveal_count if reveal_count is not None else self.settings.hint_length
        language = language if language is not None else self.settings.language

        result = self.generator.generate(difficulty, reveal_count, language)

        self.round = RoundState.from_hint(result, difficulty, reveal_count, language)
        self.enable_shortcut = self.settings.enable_shortcut if enable_shortcut is None else enable_shortcut
        self.status = "playing"
        self.time_left = ROUND_SECONDS
        self.show_all_answers = False

        logger.debug(f"▶️ Session {self.session_id} started round '{self.round.hint}'")
        return self.round

    def submit_answer(self, raw_input: str) -> AnswerCheck:
        """Check a guess; completing the round awards the difficulty in points.

        Raises:
            SessionError: If no round is in progress
        """
        state = self._require_playing()
        result = check_answer(
            raw_input,
            state,
            shortcuts=self.shortcuts,
            enable_shortcut=self.enable_shortcut,
        )

        if result.complete:
            self.status = "won"
            self.settings = self.settings.update(self.store, score=self.settings.score + state.difficulty)
            logger.info(
                f"🏆 Session {self.session_id} won round worth {state.difficulty} "
                f"(score {self.settings.score})"
            )
        return result

    def request_hint(self, answer: str) -> str:
        """Reveal one more letter of a single remaining answer.

        Answers already found keep their current mask.

        Raises:
            SessionError: If no round is in progress or the answer is not
                          one of the round's answers
        """
        state = self._require_playing()
        if answer not in state.matched_answers:
            raise SessionError(f"'{answer}' is not an answer of this round")
        if answer in state.found_answers:
            return state.current_hint_for(answer)

        state.more_hints[answer] = reveal_more(answer, state.current_hint_for(answer), self.generator.rng)
        return state.more_hints[answer]

    def request_all_hints(self) -> dict[str, str]:
        """Reveal one more letter of every remaining answer.

        Raises:
            SessionError: If no round is in progress
        """
        state = self._require_playing()
        for answer in state.remaining_answers():
            state.more_hints[answer] = reveal_more(answer, state.current_hint_for(answer), self.generator.rng)
        return {answer: state.more_hints[answer] for answer in state.remaining_answers()}

    def tick(self) -> SessionStatus:
        """Advance the round timer by one second."""
        if self.status != "playing":
            return self.status

        if self.time_left <= 1:
            self.timeout()
        else:
            self.time_left -= 1
        return self.status

    def timeout(self) -> None:
        """End the round now and show every answer."""
        self._require_round()
        self.time_left = 0
        self.status = "timeout"
        self.show_all_answers = True
        logger.debug(f"⏰ Session {self.session_id} timed out")

    def show_answers(self) -> list[str]:
        """Mark the answers as shown and return the whole acceptance set."""
        state = self._require_round()
        self.show_all_answers = True
        return list(state.matched_answers)

    def reset(self) -> None:
        """Drop the current round and return to the start screen, keeping the score."""
        self.round = None
        self.status = "start"
        self.time_left = ROUND_SECONDS
        self.show_all_answers = False

    def update_settings(self, **changes) -> TrainerSettings:
        """Persist setting changes; custom shortcut edits take effect immediately."""
        self.settings = self.settings.update(self.store, **changes)
        if "enable_shortcut" in changes:
            self.enable_shortcut = self.settings.enable_shortcut
        if "custom_shortcuts" in changes:
            self.shortcuts = ShortcutBook.from_text(self.settings.custom_shortcuts, self.generator.corpus)
        return self.settings
