import asyncio

from shiritori.session.timer import TurnTimer


async def _noop() -> None:
    pass


class TestTurnTimer:
    async def test_callback_fires_on_timeout(self):
        timer = TurnTimer()
        callback_called = asyncio.Event()

        async def on_timeout():
            callback_called.set()

        timer.start(0.05, on_timeout)
        await asyncio.wait_for(callback_called.wait(), timeout=1.0)
        assert callback_called.is_set()

    async def test_cancel_prevents_callback(self):
        timer = TurnTimer()
        callback_called = False

        async def on_timeout():
            nonlocal callback_called
            callback_called = True

        timer.start(0.01, on_timeout)
        timer.cancel()

        await asyncio.sleep(0.05)
        assert callback_called is False
        assert not timer.running

    async def test_starting_new_timer_cancels_previous(self):
        timer = TurnTimer()
        first_called = False

        async def first_callback():
            nonlocal first_called
            first_called = True

        timer.start(0.02, first_callback)
        timer.start(10, _noop)

        await asyncio.sleep(0.05)
        timer.cancel()
        assert first_called is False

    async def test_remaining_seconds(self):
        timer = TurnTimer()
        assert timer.remaining_seconds is None

        timer.start(10, _noop)
        remaining = timer.remaining_seconds
        assert remaining is not None
        assert 9.0 < remaining <= 10.0

        timer.cancel()
        assert timer.remaining_seconds is None

    async def test_callback_can_restart_timer(self):
        timer = TurnTimer()
        fired = asyncio.Event()

        async def second():
            fired.set()

        async def first():
            timer.start(0.01, second)

        timer.start(0.01, first)
        await asyncio.wait_for(fired.wait(), timeout=1.0)


class TestPauseResume:
    async def test_pause_keeps_remaining_seconds(self):
        timer = TurnTimer()
        timer.start(10, _noop)

        timer.pause()

        assert timer.paused
        assert not timer.running
        remaining = timer.remaining_seconds
        assert remaining is not None
        assert 9.0 < remaining <= 10.0

    async def test_paused_timer_does_not_fire(self):
        timer = TurnTimer()
        fired = asyncio.Event()

        async def on_timeout():
            fired.set()

        timer.start(0.05, on_timeout)
        timer.pause()
        await asyncio.sleep(0.1)

        assert not fired.is_set()
        assert timer.paused

    async def test_resume_fires_with_remaining_time(self):
        timer = TurnTimer()
        fired = asyncio.Event()

        async def on_timeout():
            fired.set()

        timer.start(0.05, on_timeout)
        timer.pause()

        assert timer.resume()
        assert timer.running
        assert not timer.paused
        await asyncio.wait_for(fired.wait(), timeout=1.0)

    async def test_resume_without_pause(self):
        timer = TurnTimer()
        assert not timer.resume()
        timer.pause()
        assert not timer.paused

    async def test_cancel_forgets_paused_countdown(self):
        timer = TurnTimer()
        timer.start(10, _noop)
        timer.pause()

        timer.cancel()

        assert not timer.paused
        assert timer.remaining_seconds is None
        assert not timer.resume()


class TestStop:
    async def test_stop_awaits_cancelled_task(self):
        timer = TurnTimer()
        timer.start(10, _noop)
        task = timer._active_task

        await timer.stop()

        assert task is not None
        assert task.done()
        assert not timer.running

    async def test_stop_when_idle(self):
        timer = TurnTimer()
        await timer.stop()
        assert not timer.running


class TestTimerCallbackException:
    async def test_timer_callback_exception_is_caught(self):
        """Timer catches exceptions from callback without re-raising."""
        timer = TurnTimer()

        async def failing_callback():
            raise RuntimeError("callback failed")

        timer.start(0.01, failing_callback)
        await asyncio.sleep(0.05)
        assert timer._active_task is not None
        assert timer._active_task.done()
        assert not timer.running
