"""Session event models.

Events describe what happened in a game in terms a presentation layer can
render directly. convert_turn() maps one processed turn (state before,
state after, typed outcome) into the events to publish, in order.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Literal

from pydantic import BaseModel, ConfigDict, Field

from shiritori.logic.enums import EliminationReason, GameStatus, RejectionReason, SubmitOutcome
from shiritori.logic.results import build_game_result

if TYPE_CHECKING:
    from shiritori.logic.state import GameState
    from shiritori.logic.types import SubmitWordResult


class EventType(StrEnum):
    """Types of session events."""

    WORD_ACCEPTED = "word_accepted"
    WORD_REJECTED = "word_rejected"
    PLAYER_ELIMINATED = "player_eliminated"
    TURN_CHANGED = "turn_changed"
    GAME_ENDED = "game_ended"


class GameEvent(BaseModel):
    """Base class for all session events."""

    model_config = ConfigDict(frozen=True)

    type: EventType


class WordAcceptedEvent(GameEvent):
    """A word joined the chain."""

    type: Literal[EventType.WORD_ACCEPTED] = EventType.WORD_ACCEPTED
    participant_id: str
    word: str
    next_character: str


class WordRejectedEvent(GameEvent):
    """A word was refused; the same participant keeps the turn."""

    type: Literal[EventType.WORD_REJECTED] = EventType.WORD_REJECTED
    participant_id: str
    word: str
    reason: RejectionReason
    message: str


class PlayerEliminatedEvent(GameEvent):
    """A participant was knocked out."""

    type: Literal[EventType.PLAYER_ELIMINATED] = EventType.PLAYER_ELIMINATED
    participant_id: str
    reason: EliminationReason
    message: str
    word: str | None = None
    remaining: list[str] = Field(default_factory=list)


class TurnChangedEvent(GameEvent):
    """A participant now holds the turn."""

    type: Literal[EventType.TURN_CHANGED] = EventType.TURN_CHANGED
    participant_id: str
    turn_index: int
    required_character: str | None = None
    time_limit_seconds: int | None = None


class GameEndedEvent(GameEvent):
    """The game is over and its result is final."""

    type: Literal[EventType.GAME_ENDED] = EventType.GAME_ENDED
    status: GameStatus
    winner_id: str | None = None
    used_words: list[str] = Field(default_factory=list)


def turn_changed(state: GameState) -> TurnChangedEvent:
    participant_id = state.current_participant_id
    if not state.active or participant_id is None:
        raise ValueError("no participant holds the turn in a finished game")
    rules = state.config.rules
    return TurnChangedEvent(
        participant_id=participant_id,
        turn_index=state.turn_index,
        required_character=state.required_first_character,
        time_limit_seconds=rules.time_limit_seconds if rules.has_time_limit else None,
    )


def game_ended(state: GameState) -> GameEndedEvent:
    result = build_game_result(state)
    return GameEndedEvent(
        status=result.status,
        winner_id=state.winner,
        used_words=result.used_words,
    )


def convert_turn(before: GameState, after: GameState, result: SubmitWordResult) -> list[GameEvent]:
    """
    Build the events for one processed turn.

    An accepted word or an elimination is followed by either a turn change
    or the end of the game. A rejection produces a single event, and a
    submission to a finished game produces none.
    """
    events: list[GameEvent] = []
    if result.outcome == SubmitOutcome.GAME_NOT_ACTIVE or result.participant_id is None:
        return events

    if result.outcome == SubmitOutcome.REJECTED:
        events.append(
            WordRejectedEvent(
                participant_id=result.participant_id,
                word=result.word or "",
                reason=RejectionReason(result.reason),
                message=result.message or "",
            ),
        )
        return events

    if result.outcome == SubmitOutcome.ACCEPTED:
        events.append(
            WordAcceptedEvent(
                participant_id=result.participant_id,
                word=result.word or "",
                next_character=after.required_first_character or "",
            ),
        )
    else:
        events.append(
            PlayerEliminatedEvent(
                participant_id=result.participant_id,
                reason=EliminationReason(result.reason),
                message=result.message or "",
                word=result.word,
                remaining=list(after.remaining_ids),
            ),
        )

    if after.active:
        events.append(turn_changed(after))
    elif before.active:
        events.append(game_ended(after))
    return events
