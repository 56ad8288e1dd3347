"""
String enum definitions for shiritori game concepts.
"""

from enum import Enum


class ParticipantKind(str, Enum):
    """Who is playing a seat."""

    HUMAN = "human"
    COMPUTER = "computer"


class Difficulty(str, Enum):
    """Vocabulary tier used by computer participants."""

    EASY = "easy"  # よわい
    NORMAL = "normal"  # ふつう
    HARD = "hard"  # つよい


class WinCondition(str, Enum):
    """Policy deciding when a game is over."""

    LAST_PLAYER_STANDING = "last_player_standing"
    FIRST_ELIMINATION = "first_elimination"


class SubmitOutcome(str, Enum):
    """Top-level classification of a turn result."""

    ACCEPTED = "accepted"
    REJECTED = "rejected"
    ELIMINATED = "eliminated"
    GAME_NOT_ACTIVE = "game_not_active"


class RejectionReason(str, Enum):
    """Why a submitted word was refused. The player keeps the turn."""

    EMPTY_WORD = "empty_word"
    INVALID_WORD = "invalid_word"
    INVALID_CONNECTION = "invalid_connection"
    DUPLICATE_WORD = "duplicate_word"


class EliminationReason(str, Enum):
    """Why a participant was knocked out."""

    ENDS_WITH_N = "ends_with_n"
    TIMEOUT = "timeout"
    NO_WORD_FOUND = "no_word_found"


class ChainErrorType(str, Enum):
    """Errors reported when validating a whole chain, in priority order."""

    DUPLICATE_WORD = "duplicate_word"
    INVALID_CONNECTION = "invalid_connection"
    ENDS_WITH_N = "ends_with_n"
    INVALID_WORD = "invalid_word"


class GameStatus(str, Enum):
    """How a finished game ended."""

    COMPLETED = "completed"  # a winner was decided
    DRAW = "draw"  # nobody left standing
    ABANDONED = "abandoned"  # ended from outside before a result


# player-facing messages, keyed by reason
REJECTION_MESSAGES: dict[RejectionReason, str] = {
    RejectionReason.EMPTY_WORD: "単語を入力してください",
    RejectionReason.INVALID_WORD: "使えない単語です",
    RejectionReason.INVALID_CONNECTION: "つながらない単語です",
    RejectionReason.DUPLICATE_WORD: "その単語はもう使われています",
}

ELIMINATION_MESSAGES: dict[EliminationReason, str] = {
    EliminationReason.ENDS_WITH_N: "「ん」で終わる単語は負けです",
    EliminationReason.TIMEOUT: "時間切れ",
    EliminationReason.NO_WORD_FOUND: "単語が見つからない",
}
