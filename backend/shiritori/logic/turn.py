"""
Turn processing for shiritori.

Every function takes a frozen GameState and returns a TurnResult holding the
new state and the typed outcome. A rejected word returns the input state
object itself; an elimination either ends the game or passes the turn, never
both.
"""

from typing import NamedTuple

import structlog

from shiritori.logic.enums import (
    ELIMINATION_MESSAGES,
    REJECTION_MESSAGES,
    EliminationReason,
    RejectionReason,
    SubmitOutcome,
    WinCondition,
)
from shiritori.logic.rules import DEFAULT_RULE_ENGINE, RuleEngine
from shiritori.logic.state import GameState
from shiritori.logic.state_utils import (
    add_elimination,
    advance_turn,
    append_word,
    finish_game,
)
from shiritori.logic.types import SubmitWordResult
from shiritori.logic.validator import is_valid_word

logger = structlog.get_logger()


class TurnResult(NamedTuple):
    """New state after a turn plus the outcome reported to the caller."""

    state: GameState
    result: SubmitWordResult


def _not_active(state: GameState, participant_id: str | None, word: str | None = None) -> TurnResult:
    logger.warning("submission to inactive game", participant_id=participant_id, word=word)
    return TurnResult(
        state,
        SubmitWordResult(outcome=SubmitOutcome.GAME_NOT_ACTIVE, participant_id=participant_id, word=word),
    )


def _reject(state: GameState, participant_id: str, word: str, reason: RejectionReason) -> TurnResult:
    logger.debug("word rejected", participant_id=participant_id, word=word, reason=reason)
    return TurnResult(
        state,
        SubmitWordResult(
            outcome=SubmitOutcome.REJECTED,
            reason=reason,
            message=REJECTION_MESSAGES[reason],
            participant_id=participant_id,
            word=word,
        ),
    )


def _check_word(
    state: GameState,
    word: str,
    engine: RuleEngine,
) -> RejectionReason | None:
    if not word:
        return RejectionReason.EMPTY_WORD
    if not is_valid_word(word):
        return RejectionReason.INVALID_WORD
    previous = state.last_word
    if previous is not None and not engine.can_word_follow(previous, word):
        return RejectionReason.INVALID_CONNECTION
    if engine.find_used_words(word, state.used_words):
        return RejectionReason.DUPLICATE_WORD
    return None


def _resolve_elimination(state: GameState) -> GameState:
    """
    Decide what follows an elimination: game over or the next turn.

    The game-over branches hand the state to finish_game, which leaves
    turn_index alone. Only the last branch moves the cursor.
    """
    remaining = state.remaining_ids
    if len(remaining) == 1:
        logger.info("game over: last participant standing", winner=remaining[0])
        return finish_game(state, remaining[0])
    if not remaining:
        logger.info("game over: no participant left")
        return finish_game(state, None)
    if state.config.rules.win_condition == WinCondition.FIRST_ELIMINATION:
        winner = remaining[0]
        logger.info("game over: first elimination", winner=winner)
        return finish_game(state, winner)
    return advance_turn(state)


def _eliminate(
    state: GameState,
    participant_id: str,
    reason: EliminationReason,
    word: str | None = None,
) -> TurnResult:
    new_state = _resolve_elimination(add_elimination(state, participant_id, reason, word))
    logger.info(
        "participant eliminated",
        participant_id=participant_id,
        reason=reason,
        word=word,
        remaining=len(new_state.remaining_ids),
        active=new_state.active,
    )
    return TurnResult(
        new_state,
        SubmitWordResult(
            outcome=SubmitOutcome.ELIMINATED,
            reason=reason,
            message=ELIMINATION_MESSAGES[reason],
            participant_id=participant_id,
            word=word,
        ),
    )


def process_submit_word(
    state: GameState,
    word: str,
    participant_id: str,
    engine: RuleEngine = DEFAULT_RULE_ENGINE,
) -> TurnResult:
    """
    Process a word played by the participant holding the turn.

    Checking that participant_id actually holds the turn is the caller's job.
    Structural, connection and duplicate failures are rejections that leave
    the state untouched. A word ending on ん eliminates the player and is kept
    out of used_words (it is stored on the elimination record). Anything else
    is accepted and the turn passes on.
    """
    if not state.active:
        return _not_active(state, participant_id, word)

    word = word.strip()
    rejection = _check_word(state, word, engine)
    if rejection is not None:
        return _reject(state, participant_id, word, rejection)

    if engine.ends_with_terminal_sound(word):
        return _eliminate(state, participant_id, EliminationReason.ENDS_WITH_N, word)

    new_state = advance_turn(append_word(state, word, participant_id))
    logger.info(
        "word accepted",
        participant_id=participant_id,
        word=word,
        next_participant_id=new_state.current_participant_id,
    )
    return TurnResult(
        new_state,
        SubmitWordResult(outcome=SubmitOutcome.ACCEPTED, participant_id=participant_id, word=word),
    )


def process_skip_turn(state: GameState, reason: EliminationReason) -> TurnResult:
    """Eliminate the participant holding the turn without a word (timeout, nothing to say)."""
    if not state.active:
        return _not_active(state, None)
    participant_id = state.turn_order[state.turn_index]
    return _eliminate(state, participant_id, reason)


def process_end_game(state: GameState) -> GameState:
    """End the game without a winner. Ending an ended game returns it unchanged."""
    if not state.active:
        return state
    logger.info("game ended without result", turn_count=state.turn_count)
    return finish_game(state, None)
