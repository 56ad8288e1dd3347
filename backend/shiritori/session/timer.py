"""
Server-side turn timer.

Each turn gets a fixed time limit that restarts whenever the turn passes.
On timeout the callback eliminates the participant who ran out of time.
A paused countdown keeps its remaining seconds until resumed.
"""

from __future__ import annotations

import asyncio
import contextlib
import time
from typing import TYPE_CHECKING

import structlog

from shiritori.logic.exceptions import ShiritoriError

logger = structlog.get_logger()

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    TimeoutCallback = Callable[[], Awaitable[None]]


class TurnTimer:
    """Single active countdown for the participant holding the turn."""

    def __init__(self) -> None:
        self._active_task: asyncio.Task[None] | None = None
        self._deadline: float | None = None
        self._on_timeout: TimeoutCallback | None = None
        self._paused: tuple[float, TimeoutCallback] | None = None

    @property
    def running(self) -> bool:
        return self._active_task is not None and not self._active_task.done()

    @property
    def paused(self) -> bool:
        return self._paused is not None

    @property
    def remaining_seconds(self) -> float | None:
        """Seconds left on the running or paused countdown, None when idle."""
        if self._paused is not None:
            return self._paused[0]
        if not self.running or self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def start(self, seconds: float, on_timeout: TimeoutCallback) -> None:
        """Start a countdown, replacing any countdown still running or paused."""
        self.cancel()
        self._deadline = time.monotonic() + seconds
        self._on_timeout = on_timeout
        self._active_task = asyncio.create_task(self._run_timer(seconds, on_timeout))

    def cancel(self) -> None:
        """
        Cancel the active countdown and forget a paused one.

        A timeout callback that restarts or stops the timer runs inside the
        timer task itself, so that task is left to finish on its own.
        """
        task = self._active_task
        if task is not None and not task.done() and task is not asyncio.current_task():
            task.cancel()
        self._active_task = None
        self._deadline = None
        self._on_timeout = None
        self._paused = None

    async def stop(self) -> None:
        """Cancel the countdown and wait until its task has finished."""
        task = self._active_task
        self.cancel()
        if task is not None and task is not asyncio.current_task():
            with contextlib.suppress(asyncio.CancelledError):
                await task

    def pause(self) -> None:
        """Stop the running countdown, keeping its remaining seconds for resume()."""
        remaining = self.remaining_seconds
        on_timeout = self._on_timeout
        if not self.running or remaining is None or on_timeout is None:
            return
        self.cancel()
        self._paused = (remaining, on_timeout)
        logger.debug("timer paused", remaining_seconds=round(remaining, 3))

    def resume(self) -> bool:
        """Restart a paused countdown with the seconds it had left. Returns False if nothing was paused."""
        if self._paused is None:
            return False
        remaining, on_timeout = self._paused
        self.start(remaining, on_timeout)
        return True

    async def _run_timer(self, seconds: float, on_timeout: TimeoutCallback) -> None:
        try:
            await asyncio.sleep(seconds)
            await on_timeout()
        except asyncio.CancelledError:
            pass
        except (RuntimeError, ValueError, ShiritoriError):  # fmt: skip
            logger.exception("timer callback failed")
