"""Typed domain exceptions for shiritori.

Gameplay outcomes (rejected words, eliminations, submissions after the game
ended) are never exceptions: they are SubmitWordResult values. Exceptions are
reserved for callers misusing the engine, e.g. submitting out of turn or
naming a participant that is not in the session.
"""


class ShiritoriError(Exception):
    """Base exception for misuse of the shiritori engine."""


class UnknownParticipantError(ShiritoriError):
    """Participant id is not part of the session."""

    def __init__(self, participant_id: str) -> None:
        self.participant_id = participant_id
        super().__init__(f"unknown participant: {participant_id}")


class GameNotStartedError(ShiritoriError):
    """Session operation requires a started game."""


class NotYourTurnError(ShiritoriError):
    """Raised when a participant submits while another participant holds the turn.

    Attributes:
        participant_id: The participant who tried to play.
        expected_id: The participant whose turn it is (None once the game is over).

    """

    def __init__(self, *, participant_id: str, expected_id: str | None) -> None:
        self.participant_id = participant_id
        self.expected_id = expected_id
        super().__init__(f"not {participant_id}'s turn (current: {expected_id})")


class ComputerParticipantError(ShiritoriError):
    """Outside input named a participant that the session plays itself."""

    def __init__(self, participant_id: str) -> None:
        self.participant_id = participant_id
        super().__init__(f"participant {participant_id} is played by the computer")


class GamePausedError(ShiritoriError):
    """Session is paused; resume() before submitting."""
