import asyncio
import sqlite3

from task_quest.logic.tick_logic import DecayTicker


def test_ticker_calls_back_until_stopped():
    calls = []

    def on_tick():
        calls.append(len(calls))
        if len(calls) == 3:
            ticker.stop()

    ticker = DecayTicker(interval=0.01, on_tick=on_tick)
    asyncio.run(asyncio.wait_for(ticker.run(), timeout=5))

    assert calls == [0, 1, 2]
    assert ticker.tick_count == 3
    assert not ticker.is_running


def test_stop_before_first_interval_skips_tick():
    calls = []
    ticker = DecayTicker(interval=0.05, on_tick=lambda: calls.append(1))

    async def scenario():
        task = asyncio.ensure_future(ticker.run())
        await asyncio.sleep(0.01)
        ticker.stop()
        await task

    asyncio.run(scenario())
    assert calls == []
    assert ticker.tick_count == 0


def test_failing_tick_does_not_stop_ticker():
    calls = []

    def on_tick():
        calls.append(len(calls))
        if len(calls) == 1:
            raise sqlite3.OperationalError("database is locked")
        if len(calls) == 3:
            ticker.stop()

    ticker = DecayTicker(interval=0.01, on_tick=on_tick)
    asyncio.run(asyncio.wait_for(ticker.run(), timeout=5))

    assert calls == [0, 1, 2]
    assert ticker.tick_count == 3
    assert not ticker.is_running
