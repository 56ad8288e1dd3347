"""
Async session wrapper around ShiritoriGame.

GameSession serializes every state change on one asyncio.Lock, converts raw
player input into canonical script, runs the per-turn timer and plays the
computer participants after a short delay. Each processed turn is published
to an optional listener as session events.

The listener is awaited while the session lock is held, so it must not call
back into the session.

get_session() is the entry point for a process hosting games: it reads
SessionSettings from the environment and sets up logging before building the
session.
"""

from __future__ import annotations

import asyncio
import contextlib
from typing import TYPE_CHECKING, Any

import structlog

from shared.logging import setup_logging
from shiritori.logic.ai_player_controller import ComputerPlayerController
from shiritori.logic.dictionary import WordDictionary
from shiritori.logic.enums import EliminationReason
from shiritori.logic.exceptions import (
    ComputerParticipantError,
    GameNotStartedError,
    GamePausedError,
    NotYourTurnError,
    ShiritoriError,
    UnknownParticipantError,
)
from shiritori.logic.game import ShiritoriGame
from shiritori.logic.kana import to_canonical_script
from shiritori.logic.validator import sanitize_input
from shiritori.session.events import convert_turn, game_ended, turn_changed
from shiritori.session.settings import SessionSettings
from shiritori.session.timer import TurnTimer

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from shiritori.logic.rules import RuleEngine
    from shiritori.logic.state import GameState
    from shiritori.logic.types import GameResult, Participant, SessionConfig, SubmitWordResult
    from shiritori.session.events import GameEvent

    EventListener = Callable[[GameEvent], Awaitable[None]]

logger = structlog.get_logger()


class GameSession:
    """One shiritori game driven by human input, computer moves and the turn timer."""

    def __init__(  # noqa: PLR0913
        self,
        config: SessionConfig,
        *,
        settings: SessionSettings | None = None,
        dictionary: WordDictionary | None = None,
        listener: EventListener | None = None,
        engine: RuleEngine | None = None,
        seed: int | str | None = None,
    ) -> None:
        self._settings = settings or SessionSettings()
        if "rules" not in config.model_fields_set:
            config = config.model_copy(update={"rules": self._settings.default_rules()})
        self._config = config
        self._dictionary = dictionary
        self._listener = listener
        self._engine = engine
        self._seed = seed
        self._lock = asyncio.Lock()
        self._timer = TurnTimer()
        self._game: ShiritoriGame | None = None
        self._controller: ComputerPlayerController | None = None
        self._computer_task: asyncio.Task[None] | None = None
        self._paused = False

    # --- Read-only views ---

    @property
    def started(self) -> bool:
        return self._game is not None

    @property
    def active(self) -> bool:
        return self._game is not None and self._game.active

    @property
    def paused(self) -> bool:
        return self._paused

    @property
    def config(self) -> SessionConfig:
        return self._config

    @property
    def state(self) -> GameState:
        return self._require_game().state

    @property
    def current_participant(self) -> Participant | None:
        return self._require_game().current_participant

    @property
    def used_words(self) -> tuple[str, ...]:
        return self._require_game().used_words

    @property
    def last_word(self) -> str | None:
        return self._require_game().last_word

    @property
    def winner(self) -> Participant | None:
        return self._require_game().winner

    @property
    def timer(self) -> TurnTimer:
        return self._timer

    def result(self) -> GameResult:
        """Rankings and statistics of the finished game."""
        return self._require_game().result()

    # --- Lifecycle ---

    async def start(self) -> None:
        """
        Create the game and hand the first turn out.

        Raises:
            ShiritoriError: If the session was already started

        """
        async with self._lock:
            if self._game is not None:
                raise ShiritoriError("session already started")
            self._game = ShiritoriGame(self._config, self._engine)
            if any(p.is_computer for p in self._config.participants):
                dictionary = self._dictionary or WordDictionary.from_file()
                self._controller = ComputerPlayerController.from_config(self._config, dictionary, self._seed)
            logger.info("session started", participants=[p.id for p in self._config.participants])
            await self._emit([turn_changed(self._game.state)])
            self._begin_turn()

    async def end_game(self) -> None:
        """Stop the game from outside. Ending a finished session does nothing."""
        async with self._lock:
            game = self._require_game()
            if not game.active:
                return
            game.end_game()
            self._paused = False
            self._stop_turn()
            await self._emit([game_ended(game.state)])

    async def pause(self) -> None:
        """
        Hold the game: the turn timer keeps its remaining seconds and a
        pending computer move is dropped until resume().
        """
        async with self._lock:
            game = self._require_game()
            if not game.active or self._paused:
                return
            self._paused = True
            self._timer.pause()
            self._cancel_computer_task()
            logger.info("session paused", remaining_seconds=self._timer.remaining_seconds)

    async def resume(self) -> None:
        """Continue a paused game. Resuming a session that is not paused does nothing."""
        async with self._lock:
            game = self._require_game()
            if not self._paused:
                return
            self._paused = False
            if not game.active:
                return
            self._timer.resume()
            self._schedule_computer_move()
            logger.info("session resumed", participant_id=game.state.current_participant_id)

    async def close(self) -> None:
        """Cancel the timer and any pending computer move, waiting for both tasks to finish."""
        await self._timer.stop()
        async with self._lock:
            self._timer.cancel()
            task = self._cancel_computer_task()
        if task is not None:
            with contextlib.suppress(asyncio.CancelledError):
                await task
        logger.debug("session closed")

    # --- Play ---

    async def submit_word(self, participant_id: str, text: str) -> SubmitWordResult:
        """
        Play recognized or typed text for a human participant.

        The text is converted to canonical script and stripped of characters
        that can never appear in a word before it is checked. Rule violations
        come back as a typed result.

        Raises:
            GameNotStartedError: If start() has not been awaited
            UnknownParticipantError: If the participant is not in the session
            ComputerParticipantError: If the participant is played by the computer
            NotYourTurnError: If another participant holds the turn
            GamePausedError: If the session is paused

        """
        async with self._lock:
            game = self._require_game()
            participant = game.config.get_participant(participant_id)
            if participant is None:
                raise UnknownParticipantError(participant_id)
            if participant.is_computer:
                logger.warning("submission for computer participant", participant_id=participant_id)
                raise ComputerParticipantError(participant_id)
            expected_id = game.state.current_participant_id
            if game.active and participant_id != expected_id:
                logger.warning("submission out of turn", participant_id=participant_id, expected_id=expected_id)
                raise NotYourTurnError(participant_id=participant_id, expected_id=expected_id)
            if self._paused:
                raise GamePausedError("session is paused")

            word = sanitize_input(to_canonical_script(text.strip()))
            before = game.state
            result = game.submit_word(word, participant_id)
            await self._after_turn(before, result)
            return result

    # --- Internals ---

    def _require_game(self) -> ShiritoriGame:
        if self._game is None:
            raise GameNotStartedError("session has not been started")
        return self._game

    async def _emit(self, events: list[GameEvent]) -> None:
        if self._listener is None:
            return
        for event in events:
            await self._listener(event)

    async def _after_turn(self, before: GameState, result: SubmitWordResult) -> None:
        game = self._require_game()
        await self._emit(convert_turn(before, game.state, result))
        if game.state.turn_count == before.turn_count:
            # rejected or ignored: the same participant keeps the running timer
            return
        if game.active:
            self._begin_turn()
        else:
            self._stop_turn()
            logger.info("session finished", winner=game.state.winner)

    def _begin_turn(self) -> None:
        """Restart the timer for the participant now holding the turn and schedule computer moves."""
        game = self._require_game()
        state = game.state
        participant_id = state.current_participant_id
        if not state.active or participant_id is None:
            return
        turn_count = state.turn_count

        rules = state.config.rules
        if rules.has_time_limit and rules.time_limit_seconds is not None:
            self._timer.start(
                rules.time_limit_seconds,
                lambda: self._handle_timeout(participant_id, turn_count),
            )
        else:
            self._timer.cancel()
        self._schedule_computer_move()

    def _schedule_computer_move(self) -> None:
        state = self._require_game().state
        participant_id = state.current_participant_id
        if participant_id is None or self._controller is None or not self._controller.is_computer(participant_id):
            return
        delay = (
            self._settings.computer_first_turn_delay_seconds
            if state.last_word is None
            else self._settings.computer_turn_delay_seconds
        )
        self._computer_task = asyncio.create_task(self._computer_turn(participant_id, state.turn_count, delay))

    def _cancel_computer_task(self) -> asyncio.Task[None] | None:
        """Cancel the pending computer move; returns its task unless it is the caller."""
        task = self._computer_task
        self._computer_task = None
        if task is None or task is asyncio.current_task():
            return None
        if not task.done():
            task.cancel()
        return task

    def _stop_turn(self) -> None:
        self._timer.cancel()
        self._cancel_computer_task()

    def _is_current_turn(self, participant_id: str, turn_count: int) -> bool:
        state = self._require_game().state
        return (
            not self._paused
            and state.active
            and state.turn_count == turn_count
            and state.current_participant_id == participant_id
        )

    async def _handle_timeout(self, participant_id: str, turn_count: int) -> None:
        async with self._lock:
            if not self._is_current_turn(participant_id, turn_count):
                return
            logger.info("turn timed out", participant_id=participant_id)
            game = self._require_game()
            before = game.state
            result = game.skip_turn(EliminationReason.TIMEOUT)
            await self._after_turn(before, result)

    async def _computer_turn(self, participant_id: str, turn_count: int, delay: float) -> None:
        try:
            await asyncio.sleep(delay)
            async with self._lock:
                if not self._is_current_turn(participant_id, turn_count) or self._controller is None:
                    return
                await self._play_computer_move(participant_id)
        except asyncio.CancelledError:
            pass
        except (RuntimeError, ValueError, ShiritoriError):  # fmt: skip
            logger.exception("computer move failed", participant_id=participant_id)

    async def _play_computer_move(self, participant_id: str) -> None:
        game = self._require_game()
        controller = self._controller
        if controller is None:
            return

        word = controller.choose_word(game.state)
        if word is not None:
            before = game.state
            result = game.submit_word(word, participant_id)
            await self._after_turn(before, result)
            if not result.is_rejected:
                return
            logger.warning("computer word rejected", participant_id=participant_id, word=word, reason=result.reason)

        before = game.state
        result = game.skip_turn(EliminationReason.NO_WORD_FOUND)
        await self._after_turn(before, result)


def get_session(config: SessionConfig, **kwargs: Any) -> GameSession:
    """Build a session from SHIRITORI_* environment settings with logging set up. Call once per process."""
    settings = SessionSettings()
    setup_logging(log_dir=settings.log_dir)
    return GameSession(config, settings=settings, **kwargs)
