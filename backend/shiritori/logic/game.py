"""
Game initialization and the single-writer game object.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from shiritori.logic.enums import EliminationReason
from shiritori.logic.exceptions import UnknownParticipantError
from shiritori.logic.results import build_game_result
from shiritori.logic.rules import DEFAULT_RULE_ENGINE, RuleEngine
from shiritori.logic.state import GameState
from shiritori.logic.turn import process_end_game, process_skip_turn, process_submit_word

if TYPE_CHECKING:
    from shiritori.logic.types import (
        EliminationRecord,
        GameResult,
        Participant,
        SessionConfig,
        SubmitWordResult,
    )

logger = structlog.get_logger()


def init_game(config: SessionConfig) -> GameState:
    """Create the opening state: first participant in turn order to play, no words yet."""
    logger.info(
        "game initialized",
        participants=len(config.participants),
        turn_order=list(config.turn_order),
        time_limit_seconds=config.rules.time_limit_seconds,
        win_condition=config.rules.win_condition,
    )
    return GameState(config=config)


class ShiritoriGame:
    """
    Owner of the current GameState for one round.

    All play goes through submit_word, skip_turn and end_game, which swap in
    the state produced by turn.py. Calls must be made sequentially; wrap the
    object behind a lock when several tasks share it (see GameSession).
    """

    def __init__(self, config: SessionConfig, engine: RuleEngine | None = None) -> None:
        self._engine = engine or DEFAULT_RULE_ENGINE
        self._state = init_game(config)

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def config(self) -> SessionConfig:
        return self._state.config

    @property
    def active(self) -> bool:
        return self._state.active

    @property
    def winner(self) -> Participant | None:
        return self._state.winner_participant

    @property
    def turn_index(self) -> int:
        return self._state.turn_index

    @property
    def current_participant(self) -> Participant | None:
        return self._state.current_participant

    @property
    def used_words(self) -> tuple[str, ...]:
        return self._state.used_words

    @property
    def last_word(self) -> str | None:
        return self._state.last_word

    @property
    def eliminated(self) -> frozenset[str]:
        return self._state.eliminated

    @property
    def elimination_history(self) -> tuple[EliminationRecord, ...]:
        return self._state.elimination_history

    def submit_word(self, word: str, participant_id: str) -> SubmitWordResult:
        """Play a word for the participant holding the turn."""
        if self.config.get_participant(participant_id) is None:
            raise UnknownParticipantError(participant_id)
        self._state, result = process_submit_word(self._state, word, participant_id, self._engine)
        return result

    def skip_turn(self, reason: EliminationReason) -> SubmitWordResult:
        """Eliminate the participant holding the turn (timeout, no word found)."""
        self._state, result = process_skip_turn(self._state, reason)
        return result

    def end_game(self) -> None:
        """Stop the game without a winner. Safe to call more than once."""
        self._state = process_end_game(self._state)

    def result(self) -> GameResult:
        """Rankings and statistics once the game has ended."""
        return build_game_result(self._state)
