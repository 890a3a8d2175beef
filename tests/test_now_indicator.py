import asyncio
from datetime import datetime

import pytest

from app.domain.scheduling.geometry import TimeWindow
from app.domain.scheduling.now_indicator import NowIndicator


class FakeClock:
    def __init__(self, *readings):
        self.readings = list(readings)

    def __call__(self):
        if len(self.readings) > 1:
            return self.readings.pop(0)
        return self.readings[0]


def test_position_inside_window():
    indicator = NowIndicator(TimeWindow(), clock=lambda: datetime(2025, 10, 13, 11, 0))
    assert indicator.compute() == 320
    assert indicator.visible


def test_hidden_outside_window():
    indicator = NowIndicator(TimeWindow(), clock=lambda: datetime(2025, 10, 13, 21, 0))
    assert indicator.compute() is None
    assert not indicator.visible


def test_interval_must_be_positive():
    with pytest.raises(ValueError):
        NowIndicator(TimeWindow(), interval=0)


def test_on_change_only_fires_for_new_positions():
    seen = []
    clock = FakeClock(datetime(2025, 10, 13, 8, 0), datetime(2025, 10, 13, 8, 0), datetime(2025, 10, 13, 20, 0))
    indicator = NowIndicator(TimeWindow(), clock=clock, on_change=seen.append)

    indicator.compute()
    indicator.compute()
    indicator.compute()

    assert seen == [80, None]


def test_periodic_refresh_and_teardown():
    async def scenario():
        clock = FakeClock(
            datetime(2025, 10, 13, 9, 0),
            datetime(2025, 10, 13, 9, 30),
            datetime(2025, 10, 13, 10, 0),
        )
        indicator = NowIndicator(TimeWindow(), clock=clock, interval=0.01)
        async with indicator:
            assert indicator.running
            assert indicator.position == 160
            await asyncio.sleep(0.05)
            assert indicator.position == 240
        assert not indicator.running

    asyncio.run(scenario())


def test_stop_cancels_refresh():
    async def scenario():
        indicator = NowIndicator(TimeWindow(), clock=lambda: datetime(2025, 10, 13, 12, 0), interval=0.01)
        indicator.start()
        assert indicator.running
        indicator.stop()
        assert not indicator.running
        # a second stop is harmless
        indicator.stop()
        await indicator.aclose()

    asyncio.run(scenario())


def test_start_needs_a_running_loop():
    indicator = NowIndicator(TimeWindow(), clock=lambda: datetime(2025, 10, 13, 12, 0))
    with pytest.raises(RuntimeError):
        indicator.start()


def test_refresh_survives_a_failing_clock():
    readings = [datetime(2025, 10, 13, 9, 0), None, datetime(2025, 10, 13, 10, 0)]

    def clock():
        reading = readings.pop(0) if len(readings) > 1 else readings[0]
        if reading is None:
            raise RuntimeError("clock unavailable")
        return reading

    async def scenario():
        indicator = NowIndicator(TimeWindow(), clock=clock, interval=0.01)
        indicator.start()
        assert indicator.position == 160
        await asyncio.sleep(0.05)
        assert indicator.running
        assert indicator.position == 240
        indicator.stop()

    asyncio.run(scenario())
