"""
Computer participant decision making.

A computer picks a dictionary word for the character the chain requires,
skipping words already played. Easy and normal players pick at random from
their tier; hard players avoid words ending on ん whenever they have a choice.
"""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

import structlog

from shiritori.logic.enums import Difficulty
from shiritori.logic.rules import DEFAULT_RULE_ENGINE
from shiritori.logic.validator import is_valid_word

if TYPE_CHECKING:
    from shiritori.logic.dictionary import WordDictionary
    from shiritori.logic.state import GameState

logger = structlog.get_logger()

OPENING_CHARACTER = "あ"  # asked for when the computer plays the first word


class ComputerPlayer:
    """Computer opponent backed by a word dictionary."""

    def __init__(
        self,
        difficulty: Difficulty,
        dictionary: WordDictionary,
        rng: random.Random | None = None,
    ) -> None:
        self.difficulty = difficulty
        self._dictionary = dictionary
        self._rng = rng or random.Random()  # noqa: S311

    def candidate_words(self, state: GameState) -> list[str]:
        """Unplayed, well-formed dictionary words that connect to the last word."""
        character = state.required_first_character or OPENING_CHARACTER
        used = set(state.used_words)
        return [
            word
            for word in self._dictionary.get_words(character, self.difficulty)
            if word not in used and is_valid_word(word)
        ]

    def select_word(self, state: GameState) -> str | None:
        """Choose the next word, or None when the dictionary has nothing left to say."""
        candidates = self.candidate_words(state)
        if self.difficulty == Difficulty.HARD:
            safe = [word for word in candidates if not DEFAULT_RULE_ENGINE.ends_with_terminal_sound(word)]
            candidates = safe or candidates
        if not candidates:
            logger.debug("computer has no word", difficulty=self.difficulty, last_word=state.last_word)
            return None
        return self._rng.choice(candidates)
