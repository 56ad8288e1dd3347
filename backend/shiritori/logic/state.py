"""
Immutable game state for one shiritori round.

GameState is a frozen Pydantic model: transitions in turn.py return new
instances via model_copy and never modify an existing one.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from shiritori.logic.normalizer import last_chain_character
from shiritori.logic.types import EliminationRecord, Participant, SessionConfig


class GameState(BaseModel):
    """
    Authoritative state of a game in progress or finished.

    While active, turn_order[turn_index] names a participant that has not been
    eliminated. Once active is False nothing changes any more.
    """

    model_config = ConfigDict(frozen=True)

    config: SessionConfig
    turn_index: int = 0
    used_words: tuple[str, ...] = ()
    word_authors: tuple[str, ...] = ()  # participant id for each entry of used_words
    eliminated: frozenset[str] = frozenset()
    elimination_history: tuple[EliminationRecord, ...] = ()
    active: bool = True
    winner: str | None = None
    turn_count: int = 0  # turns that changed the state (accepted words and eliminations)

    @property
    def turn_order(self) -> tuple[str, ...]:
        return self.config.turn_order

    @property
    def current_participant_id(self) -> str | None:
        """Participant holding the turn; the winner (or None) once the game is over."""
        if not self.active:
            return self.winner
        return self.turn_order[self.turn_index]

    @property
    def current_participant(self) -> Participant | None:
        participant_id = self.current_participant_id
        if participant_id is None:
            return None
        return self.config.get_participant(participant_id)

    @property
    def last_word(self) -> str | None:
        return self.used_words[-1] if self.used_words else None

    @property
    def required_first_character(self) -> str | None:
        """Character the next word has to start with, None for the opening word."""
        if self.last_word is None:
            return None
        return last_chain_character(self.last_word)

    @property
    def remaining_ids(self) -> tuple[str, ...]:
        """Participants still in the game, in turn order."""
        return tuple(pid for pid in self.turn_order if pid not in self.eliminated)

    @property
    def winner_participant(self) -> Participant | None:
        if self.winner is None:
            return None
        return self.config.get_participant(self.winner)
