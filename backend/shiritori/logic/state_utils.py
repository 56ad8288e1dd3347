"""
Immutable state update utilities using Pydantic model_copy.

These helpers never mutate the input state: they always return a new
GameState with the requested change applied. Ending the game and advancing
the turn are separate helpers so that no path can do both.
"""

from shiritori.logic.enums import EliminationReason
from shiritori.logic.state import GameState
from shiritori.logic.types import EliminationRecord


def next_remaining_index(state: GameState) -> int:
    """
    Return the turn index of the next non-eliminated participant after the current one.

    Wraps around the turn order. When the current participant is the only one
    left, their own index comes back.

    Raises:
        ValueError: If every participant has been eliminated

    """
    order = state.turn_order
    for step in range(1, len(order) + 1):
        index = (state.turn_index + step) % len(order)
        if order[index] not in state.eliminated:
            return index
    raise ValueError("no remaining participant to take the turn")


def advance_turn(state: GameState) -> GameState:
    """Return new state with the turn passed to the next remaining participant."""
    return state.model_copy(update={"turn_index": next_remaining_index(state)})


def finish_game(state: GameState, winner: str | None) -> GameState:
    """
    Return new state marked as ended with the given winner (None for no winner).

    turn_index is not part of the update: once the game is over
    the cursor stays where the last turn left it.
    """
    return state.model_copy(update={"active": False, "winner": winner})


def append_word(state: GameState, word: str, participant_id: str) -> GameState:
    """Return new state with an accepted word added to the history."""
    return state.model_copy(
        update={
            "used_words": (*state.used_words, word),
            "word_authors": (*state.word_authors, participant_id),
            "turn_count": state.turn_count + 1,
        },
    )


def add_elimination(
    state: GameState,
    participant_id: str,
    reason: EliminationReason,
    word: str | None = None,
) -> GameState:
    """Return new state with the participant eliminated and the elimination recorded."""
    record = EliminationRecord(
        participant_id=participant_id,
        reason=reason,
        order=len(state.elimination_history) + 1,
        word=word,
    )
    return state.model_copy(
        update={
            "eliminated": state.eliminated | {participant_id},
            "elimination_history": (*state.elimination_history, record),
            "turn_count": state.turn_count + 1,
        },
    )
