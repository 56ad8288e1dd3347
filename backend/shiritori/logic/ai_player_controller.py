"""
Computer participant controller as a pure decision-maker.

Identifies computer participants and asks them for moves. Scheduling the
moves and submitting them is handled by the session layer.
"""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

from shiritori.logic.ai_player import ComputerPlayer

if TYPE_CHECKING:
    from shiritori.logic.dictionary import WordDictionary
    from shiritori.logic.state import GameState
    from shiritori.logic.types import SessionConfig


class ComputerPlayerController:
    """Decision-maker for the computer participants of one game."""

    def __init__(self, computer_players: dict[str, ComputerPlayer]) -> None:
        self._computer_players = computer_players

    @classmethod
    def from_config(
        cls,
        config: SessionConfig,
        dictionary: WordDictionary,
        seed: int | str | None = None,
    ) -> ComputerPlayerController:
        """Create a ComputerPlayer for every computer participant, sharing one seeded RNG."""
        rng = random.Random(seed)  # noqa: S311
        return cls(
            {
                p.id: ComputerPlayer(p.difficulty, dictionary, rng)
                for p in config.participants
                if p.is_computer and p.difficulty is not None
            },
        )

    def is_computer(self, participant_id: str | None) -> bool:
        return participant_id in self._computer_players

    @property
    def computer_ids(self) -> set[str]:
        return set(self._computer_players)

    def choose_word(self, state: GameState) -> str | None:
        """
        Ask the computer holding the turn for its word.

        Returns None when it has no word to play.

        Raises:
            ValueError: If the participant holding the turn is not a computer

        """
        participant_id = state.current_participant_id
        player = self._computer_players.get(participant_id) if participant_id is not None else None
        if player is None:
            raise ValueError(f"participant {participant_id} is not a computer")
        return player.select_word(state)
