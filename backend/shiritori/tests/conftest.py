from __future__ import annotations

from typing import TYPE_CHECKING

from shiritori.logic.dictionary import WordDictionary
from shiritori.logic.enums import Difficulty, WinCondition
from shiritori.logic.state import GameState
from shiritori.logic.types import GameRules, Participant, SessionConfig

if TYPE_CHECKING:
    from collections.abc import Sequence


# ============================================================================
# Test State Builder Helpers
# ============================================================================


def create_config(
    player_ids: Sequence[str] = ("p1", "p2"),
    *,
    computers: dict[str, Difficulty] | None = None,
    turn_order: Sequence[str] = (),
    time_limit_seconds: int | None = None,
    win_condition: WinCondition = WinCondition.LAST_PLAYER_STANDING,
) -> SessionConfig:
    """Create a SessionConfig of humans, turning the ids in ``computers`` into computer participants."""
    computers = computers or {}
    participants = tuple(
        Participant.computer(pid, pid.upper(), computers[pid]) if pid in computers else Participant.human(pid, pid.upper())
        for pid in player_ids
    )
    return SessionConfig(
        participants=participants,
        turn_order=tuple(turn_order),
        rules=GameRules(time_limit_seconds=time_limit_seconds, win_condition=win_condition),
    )


def create_game_state(
    player_ids: Sequence[str] = ("p1", "p2"),
    *,
    used_words: Sequence[str] = (),
    eliminated: Sequence[str] = (),
    turn_index: int = 0,
    active: bool = True,
    winner: str | None = None,
    **config_kwargs,
) -> GameState:
    """Create a GameState with sensible defaults for testing."""
    config = create_config(player_ids, **config_kwargs)
    order = config.turn_order
    return GameState(
        config=config,
        turn_index=turn_index,
        used_words=tuple(used_words),
        word_authors=tuple(order[i % len(order)] for i in range(len(used_words))),
        eliminated=frozenset(eliminated),
        active=active,
        winner=winner,
    )


def create_dictionary(words: dict[str, Sequence[str]], difficulty: Difficulty = Difficulty.NORMAL) -> WordDictionary:
    """Create a dictionary with one tier."""
    return WordDictionary({difficulty: words})
