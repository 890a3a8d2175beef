import random
from datetime import date, datetime, time, timedelta

import pytest

from app.domain.scheduling.geometry import (
    InvalidWindowError,
    TimeWindow,
    format_hour,
    hour_labels,
    hour_of_day,
    in_window,
    length_of,
    position_of,
    scroll_offset,
    slot_labels,
)

DAY = date(2025, 10, 13)


def at(hour, minute=0, day=DAY):
    return datetime(day.year, day.month, day.day, hour, minute)


@pytest.fixture
def window():
    return TimeWindow(start_hour=7, end_hour=19, scale_per_hour=80)


def test_default_window_is_seven_to_seven():
    window = TimeWindow()
    assert window.start_hour == 7
    assert window.end_hour == 19
    assert window.total_hours == 12
    assert window.total_length == 960


@pytest.mark.parametrize(
    "start,end,scale",
    [
        (19, 7, 80),
        (9, 9, 80),
        (-1, 10, 80),
        (7, 25, 80),
        (7, 19, 0),
        (7, 19, -5),
        (float("nan"), 19, 80),
        (7, float("nan"), 80),
        (7, 19, float("nan")),
        (7, 19, float("inf")),
    ],
)
def test_bad_windows_are_rejected(start, end, scale):
    with pytest.raises(InvalidWindowError):
        TimeWindow(start_hour=start, end_hour=end, scale_per_hour=scale)


def test_invalid_window_error_is_a_value_error():
    assert issubclass(InvalidWindowError, ValueError)


def test_position_of_half_hours(window):
    assert position_of(time(7, 0), window) == 0
    assert position_of(time(8, 30), window) == 120
    assert position_of(time(19, 0), window) == 960


def test_position_clamps_outside_window(window):
    assert position_of(time(5, 0), window) == 0
    assert position_of(time(21, 0), window) == 960


def test_clamping_is_idempotent(window):
    rng = random.Random(2025)
    midnight = datetime.combine(DAY, time.min)
    for _ in range(500):
        t = midnight + timedelta(minutes=rng.randrange(24 * 60))
        hours = hour_of_day(t)
        clamped = midnight + timedelta(hours=max(window.start_hour, min(window.end_hour, hours)))
        assert position_of(clamped, window) == position_of(t, window)
        assert 0 <= position_of(t, window) <= window.total_length

    before, inside, after = at(5), at(12, 15), at(22)
    assert position_of(at(7), window) == position_of(before, window) == 0
    assert position_of(inside, window) == 420
    assert position_of(at(19), window) == position_of(after, window) == 960


def test_position_of_next_day_clamps_to_end(window):
    next_morning = datetime(2025, 10, 14, 2, 0)
    assert hour_of_day(next_morning, DAY) == 26
    assert position_of(next_morning, window, DAY) == 960


def test_length_of_regular_job(window):
    # 10:30-13:00 is 2.5h
    assert length_of(at(10, 30), at(13), window) == 200


def test_length_of_short_job_is_floored(window):
    assert length_of(at(9), at(9, 10), window) == 24
    assert length_of(at(9), at(9, 10), window, min_length=0) == pytest.approx(80 / 6)


def test_length_of_job_entirely_outside_window_keeps_minimum(window):
    assert length_of(at(20), at(22), window) == 24


def test_length_of_job_running_past_midnight_stops_at_window_end(window):
    assert length_of(at(18), datetime(2025, 10, 14, 1, 0), window) == 80


def test_in_window_is_inclusive(window):
    assert in_window(time(7, 0), window)
    assert in_window(time(19, 0), window)
    assert not in_window(time(6, 59), window)
    assert not in_window(time(19, 1), window)


def test_hour_labels(window):
    labels = hour_labels(window)
    assert labels[0] == "07:00"
    assert labels[-1] == "19:00"
    assert len(labels) == 13


def test_hour_labels_skip_partial_hours():
    assert hour_labels(TimeWindow(start_hour=7.5, end_hour=9.5)) == ["08:00", "09:00"]


def test_slot_labels(window):
    slots = slot_labels(window)
    assert len(slots) == 24
    assert slots[:3] == ["07:00", "07:30", "08:00"]
    assert slots[-1] == "18:30"
    assert len(slot_labels(window, 60)) == 12


@pytest.mark.parametrize(
    "hour,label",
    [(0, "12 am"), (7, "7 am"), (11, "11 am"), (12, "12 pm"), (13, "1 pm"), (19, "7 pm")],
)
def test_format_hour(hour, label):
    assert format_hour(hour) == label


def test_scroll_offset_leads_now_by_an_hour():
    window = TimeWindow(scale_per_hour=160)
    assert scroll_offset(time(11, 0), window) == 480
    assert scroll_offset(time(7, 30), window) == 0
    assert scroll_offset(time(23, 0), window) == window.total_length
