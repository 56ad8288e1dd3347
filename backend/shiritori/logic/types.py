"""
Pydantic models for shiritori data structures.

Contains session configuration, turn results, chain validation results and
end-of-game rankings that cross component boundaries.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from shiritori.logic.enums import (
    ChainErrorType,
    Difficulty,
    EliminationReason,
    GameStatus,
    ParticipantKind,
    RejectionReason,
    SubmitOutcome,
    WinCondition,
)

DEFAULT_TIME_LIMIT_SECONDS = 60
DEFAULT_MAX_PLAYERS = 5


class Participant(BaseModel):
    """A seat in the game: a human or a computer with a difficulty level."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    name: str
    kind: ParticipantKind = ParticipantKind.HUMAN
    difficulty: Difficulty | None = None

    @model_validator(mode="after")
    def _check_difficulty(self) -> Participant:
        if self.kind == ParticipantKind.COMPUTER and self.difficulty is None:
            raise ValueError(f"computer participant {self.id!r} needs a difficulty")
        if self.kind == ParticipantKind.HUMAN and self.difficulty is not None:
            raise ValueError(f"human participant {self.id!r} cannot have a difficulty")
        return self

    @property
    def is_computer(self) -> bool:
        return self.kind == ParticipantKind.COMPUTER

    @classmethod
    def human(cls, participant_id: str, name: str) -> Participant:
        return cls(id=participant_id, name=name)

    @classmethod
    def computer(cls, participant_id: str, name: str, difficulty: Difficulty = Difficulty.NORMAL) -> Participant:
        return cls(id=participant_id, name=name, kind=ParticipantKind.COMPUTER, difficulty=difficulty)


class GameRules(BaseModel):
    """Rule options fixed at game setup."""

    model_config = ConfigDict(frozen=True)

    time_limit_seconds: int | None = Field(default=DEFAULT_TIME_LIMIT_SECONDS, ge=0)  # None or 0: no limit
    max_players: int = Field(default=DEFAULT_MAX_PLAYERS, ge=1)
    win_condition: WinCondition = WinCondition.LAST_PLAYER_STANDING

    @property
    def has_time_limit(self) -> bool:
        return bool(self.time_limit_seconds)


class SessionConfig(BaseModel):
    """
    Participants, their play order and the rules of one game.

    turn_order defaults to participant order. It must name every participant
    exactly once.
    """

    model_config = ConfigDict(frozen=True)

    participants: tuple[Participant, ...]
    turn_order: tuple[str, ...] = ()
    rules: GameRules = Field(default_factory=GameRules)

    @model_validator(mode="after")
    def _check_participants(self) -> SessionConfig:
        if not self.participants:
            raise ValueError("a game needs at least one participant")
        ids = [p.id for p in self.participants]
        if len(set(ids)) != len(ids):
            raise ValueError(f"participant ids must be unique: {ids}")
        if len(ids) > self.rules.max_players:
            raise ValueError(f"{len(ids)} participants exceed max_players={self.rules.max_players}")
        if not self.turn_order:
            # frozen model, so set the default in place
            object.__setattr__(self, "turn_order", tuple(ids))
        elif sorted(self.turn_order) != sorted(ids):
            raise ValueError(f"turn_order {list(self.turn_order)} is not a permutation of {ids}")
        return self

    def get_participant(self, participant_id: str) -> Participant | None:
        return next((p for p in self.participants if p.id == participant_id), None)


class EliminationRecord(BaseModel):
    """One participant leaving the game, in the order it happened."""

    model_config = ConfigDict(frozen=True)

    participant_id: str
    reason: EliminationReason
    order: int  # 1 for the first participant knocked out
    word: str | None = None  # the disqualifying word, when a word caused it


class SubmitWordResult(BaseModel):
    """
    Outcome of one turn.

    REJECTED never changes the game. ELIMINATED and ACCEPTED always do.
    GAME_NOT_ACTIVE is returned for every call once the game is over.
    """

    model_config = ConfigDict(frozen=True)

    outcome: SubmitOutcome
    reason: RejectionReason | EliminationReason | None = None
    message: str | None = None
    participant_id: str | None = None
    word: str | None = None

    @property
    def is_accepted(self) -> bool:
        return self.outcome == SubmitOutcome.ACCEPTED

    @property
    def is_rejected(self) -> bool:
        return self.outcome == SubmitOutcome.REJECTED

    @property
    def is_eliminated(self) -> bool:
        return self.outcome == SubmitOutcome.ELIMINATED


class ChainValidationResult(BaseModel):
    """Result of validating an ordered list of words as one chain."""

    model_config = ConfigDict(frozen=True)

    is_valid: bool
    error_type: ChainErrorType | None = None
    error_message: str | None = None


class PlayerRanking(BaseModel):
    """Final placement of one participant."""

    participant: Participant
    rank: int
    words_contributed: int
    elimination_order: int | None = None  # None if never eliminated
    elimination_reason: EliminationReason | None = None
    is_winner: bool = False


class GameStats(BaseModel):
    """Summary numbers for a finished game."""

    total_words: int
    total_turns: int
    longest_word: str | None = None
    unique_starting_characters: int = 0


class GameResult(BaseModel):
    """Everything the results screen needs about a finished game."""

    status: GameStatus
    winner: Participant | None = None
    rankings: list[PlayerRanking]
    stats: GameStats
    used_words: list[str]
