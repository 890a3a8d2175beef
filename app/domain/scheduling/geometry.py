"""Time geometry - maps clock times onto a bounded display axis"""

import math
from datetime import date, datetime, time, timedelta
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict

from ...config import MIN_EVENT_LENGTH, SCHEDULE_END_HOUR, SCHEDULE_START_HOUR, SLOT_MINUTES

TimeLike = Union[datetime, time]


class InvalidWindowError(ValueError):
    """Raised when a display window is empty or inverted"""


class TimeWindow(BaseModel):
    """
    Visible time range of a schedule grid.

    start_hour/end_hour are hours of the day (fractions allowed, 7.5 == 07:30).
    scale_per_hour is the number of units (usually px) one hour occupies.
    """

    model_config = ConfigDict(frozen=True)

    start_hour: float = SCHEDULE_START_HOUR
    end_hour: float = SCHEDULE_END_HOUR
    scale_per_hour: float = 80.0

    def __init__(self, **data):
        super().__init__(**data)
        # Raised after validation so it is not wrapped in a ValidationError
        if not all(math.isfinite(v) for v in (self.start_hour, self.end_hour, self.scale_per_hour)):
            raise InvalidWindowError("Window hours and scale must be finite numbers")
        if self.end_hour <= self.start_hour:
            raise InvalidWindowError(
                f"Window end ({self.end_hour}) must be after window start ({self.start_hour})"
            )
        if self.start_hour < 0 or self.end_hour > 24:
            raise InvalidWindowError("Window hours must fall within 0-24")
        if self.scale_per_hour <= 0:
            raise InvalidWindowError("scale_per_hour must be positive")

    @property
    def total_hours(self) -> float:
        return self.end_hour - self.start_hour

    @property
    def total_length(self) -> float:
        return self.total_hours * self.scale_per_hour


def hour_of_day(value: TimeLike, day: Optional[date] = None) -> float:
    """
    Fractional hours since midnight.

    When `day` is given the result is measured from that day's midnight, so
    a datetime on the following day yields a value above 24 and one on the
    previous day a negative value. Both clamp to the window edges.
    """
    if isinstance(value, datetime):
        if day is None:
            day = value.date()
        midnight = datetime.combine(day, time.min, tzinfo=value.tzinfo)
        return (value - midnight) / timedelta(hours=1)
    return value.hour + value.minute / 60 + value.second / 3600 + value.microsecond / 3_600_000_000


def position_of(value: TimeLike, window: TimeWindow, day: Optional[date] = None) -> float:
    """Offset of `value` along the window axis, clamped to [0, total_length]"""
    hours = hour_of_day(value, day)
    clamped = max(window.start_hour, min(window.end_hour, hours))
    return (clamped - window.start_hour) * window.scale_per_hour


def length_of(
    start: TimeLike,
    end: TimeLike,
    window: TimeWindow,
    min_length: float = MIN_EVENT_LENGTH,
    day: Optional[date] = None,
) -> float:
    """Axis length between two times, never shorter than `min_length`"""
    if day is None and isinstance(start, datetime):
        day = start.date()
    return max(position_of(end, window, day) - position_of(start, window, day), min_length)


def in_window(value: TimeLike, window: TimeWindow) -> bool:
    hours = hour_of_day(value)
    return window.start_hour <= hours <= window.end_hour


def _clock_label(total_minutes: int) -> str:
    h, m = divmod(total_minutes, 60)
    return f"{h:02d}:{m:02d}"


def hour_labels(window: TimeWindow) -> list[str]:
    """Gutter labels, one per whole hour including the closing hour"""
    first = math.ceil(window.start_hour)
    return [_clock_label(h * 60) for h in range(first, math.floor(window.end_hour) + 1)]


def slot_labels(window: TimeWindow, slot_minutes: int = SLOT_MINUTES) -> list[str]:
    """Dispatch header labels, one per slot (24 half-hour slots for 07:00-19:00)"""
    start = round(window.start_hour * 60)
    total_slots = int(round(window.total_hours * 60) // slot_minutes)
    return [_clock_label(start + i * slot_minutes) for i in range(total_slots)]


def format_hour(hour: int) -> str:
    """12-hour label used by the week grid gutter ("7 am", "12 pm")"""
    if hour == 0:
        return "12 am"
    if hour < 12:
        return f"{hour} am"
    if hour == 12:
        return "12 pm"
    return f"{hour - 12} pm"


def scroll_offset(now: TimeLike, window: TimeWindow, lead_minutes: int = 60) -> float:
    """Where to scroll a horizontal board so `now` sits just right of the left edge"""
    hours = hour_of_day(now) - lead_minutes / 60
    clamped = max(window.start_hour, min(window.end_hour, hours))
    return (clamped - window.start_hour) * window.scale_per_hour
