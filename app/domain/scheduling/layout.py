"""
Layout projector

Turns events into render rectangles for every schedule view. The day view
and the dispatch board share one clustering/column engine and differ only in
axis orientation and in how events are grouped before clustering:

- day view: one pass across every visible event (vertical axis)
- dispatch board: one pass per staff row (horizontal axis), since rows are
  already separated and cross-row overlap must not split columns
- week / 2-week views: one day-view pass per day column
- month view: no geometry, just the first few jobs per calendar cell
"""

from collections import defaultdict
from datetime import date, timedelta
from typing import Iterable, Optional, Sequence

from ...config import MIN_EVENT_LENGTH
from .clustering import cluster_events
from .columns import assign_columns, max_overlap
from .geometry import TimeWindow, length_of, position_of
from .schemas import (
    DayColumn,
    Event,
    InvalidEvent,
    LayoutResult,
    MonthCell,
    RenderRect,
)

DEFAULT_GAP = 4.0  # px between side-by-side cards

VIEW_MODES = ("day", "week", "2week", "month")
VIEW_STEP_DAYS = {"day": 1, "week": 7, "2week": 14, "month": 30}
MONTH_GRID_DAYS = 35


def partition_valid(events: Iterable[Event]) -> tuple[list[Event], list[InvalidEvent]]:
    """Split off events whose end is not after their start"""
    valid: list[Event] = []
    errors: list[InvalidEvent] = []
    for event in events:
        if event.end <= event.start:
            errors.append(
                InvalidEvent(event_id=event.id, reason="end time must be after start time")
            )
        else:
            valid.append(event)
    return valid, errors


def _project(
    events: Sequence[Event],
    window: TimeWindow,
    row: int,
    gap: float,
    min_length: float,
    day: Optional[date] = None,
) -> list[RenderRect]:
    rects = []
    for cluster in cluster_events(events):
        for placed in assign_columns(cluster):
            event = placed.event
            axis_day = day or event.start.date()
            rects.append(
                RenderRect(
                    event_id=event.id,
                    resource_id=event.resource_id,
                    offset=position_of(event.start, window, axis_day),
                    length=length_of(event.start, event.end, window, min_length, axis_day),
                    row=row,
                    column=placed.column,
                    total_columns=placed.total_columns,
                    cross_position=placed.column / placed.total_columns,
                    cross_span=1 / placed.total_columns,
                    gap=gap,
                )
            )
    return rects


def layout_day_view(
    events: Iterable[Event],
    window: TimeWindow,
    gap: float = DEFAULT_GAP,
    min_length: float = MIN_EVENT_LENGTH,
    day: Optional[date] = None,
) -> LayoutResult:
    """
    Vertical single-lane layout, clustered across all given events.

    Positions are measured from midnight of `day` when given, otherwise from
    each event's own start date.
    """
    valid, errors = partition_valid(events)
    rects = _project(valid, window, row=0, gap=gap, min_length=min_length, day=day)
    rects.sort(key=lambda r: (r.offset, r.column))
    return LayoutResult(
        axis="vertical",
        total_length=window.total_length,
        rows=1,
        max_overlap=max_overlap(valid),
        rects=rects,
        errors=errors,
    )


def layout_dispatch_view(
    events: Iterable[Event],
    resources: Sequence[str],
    window: TimeWindow,
    gap: float = 0.0,
    min_length: float = MIN_EVENT_LENGTH,
    day: Optional[date] = None,
) -> LayoutResult:
    """
    Horizontal board with one row per resource, in the order given.

    Each row is clustered on its own. Events for a resource that has no row
    are reported as invalid rather than painted somewhere arbitrary.
    """
    valid, errors = partition_valid(events)
    row_of = {resource_id: i for i, resource_id in enumerate(resources)}

    by_resource: dict[str, list[Event]] = defaultdict(list)
    for event in valid:
        if event.resource_id not in row_of:
            errors.append(
                InvalidEvent(
                    event_id=event.id, reason=f"unknown resource '{event.resource_id}'"
                )
            )
            continue
        by_resource[event.resource_id].append(event)

    rects: list[RenderRect] = []
    for resource_id, resource_events in by_resource.items():
        rects.extend(_project(resource_events, window, row_of[resource_id], gap, min_length, day))

    rects.sort(key=lambda r: (r.row, r.offset, r.column))
    return LayoutResult(
        axis="horizontal",
        total_length=window.total_length,
        rows=len(resources),
        max_overlap=max((max_overlap(group) for group in by_resource.values()), default=0),
        rects=rects,
        errors=errors,
    )


# ============================================================================
# MULTI-DAY VIEWS
# ============================================================================


def start_of_week(day: date) -> date:
    """Monday on or before `day`"""
    return day - timedelta(days=day.weekday())


def view_days(view_mode: str, anchor: date) -> list[date]:
    """Dates visible for a view mode around the anchor date"""
    if view_mode == "day":
        return [anchor]
    if view_mode == "week":
        first, count = start_of_week(anchor), 7
    elif view_mode == "2week":
        first, count = start_of_week(anchor), 14
    elif view_mode == "month":
        first, count = start_of_week(anchor.replace(day=1)), MONTH_GRID_DAYS
    else:
        raise ValueError(f"Unknown view mode: {view_mode}")
    return [first + timedelta(days=i) for i in range(count)]


def navigate(anchor: date, view_mode: str, direction: int) -> date:
    """Step the anchor date back (-1) or forward (1) by one view"""
    if view_mode not in VIEW_MODES:
        raise ValueError(f"Unknown view mode: {view_mode}")
    if direction not in (-1, 1):
        raise ValueError("direction must be -1 or 1")
    return anchor + timedelta(days=direction * VIEW_STEP_DAYS[view_mode])


def view_label(view_mode: str, anchor: date) -> str:
    if view_mode == "day":
        return f"{anchor:%A} {anchor.day} {anchor:%B %Y}"
    if view_mode == "month":
        return f"{anchor:%B %Y}"
    days = view_days(view_mode, anchor)
    first, last = days[0], days[-1]
    return f"{first.day} {first:%b} – {last.day} {last:%b %Y}"


def _events_by_day(events: Iterable[Event]) -> dict[date, list[Event]]:
    """Each event under every date it touches, a job ending at midnight excluded from the next day"""
    grouped: dict[date, list[Event]] = defaultdict(list)
    for event in events:
        day = event.start.date()
        last = max(day, (event.end - timedelta(microseconds=1)).date())
        while day <= last:
            grouped[day].append(event)
            day += timedelta(days=1)
    return grouped


def layout_week_view(
    events: Iterable[Event],
    days: Sequence[date],
    window: TimeWindow,
    today: Optional[date] = None,
    gap: float = DEFAULT_GAP,
    min_length: float = MIN_EVENT_LENGTH,
) -> list[DayColumn]:
    """One independent day-view layout per visible day column"""
    by_day = _events_by_day(events)
    columns = []
    for day in days:
        columns.append(
            DayColumn(
                date=day,
                is_today=day == today,
                is_weekend=day.weekday() >= 5,
                layout=layout_day_view(by_day.get(day, []), window, gap, min_length, day),
            )
        )
    return columns


def month_grid(
    events: Iterable[Event],
    anchor: date,
    today: Optional[date] = None,
    max_per_day: int = 3,
) -> list[MonthCell]:
    """Monday-first 5-week grid with the earliest jobs of each day and an overflow count"""
    by_day = _events_by_day(events)
    cells = []
    for day in view_days("month", anchor):
        day_events = sorted(by_day.get(day, []), key=lambda e: (e.start, e.id))
        cells.append(
            MonthCell(
                date=day,
                in_month=day.month == anchor.month,
                is_today=day == today,
                is_weekend=day.weekday() >= 5,
                job_ids=[e.id for e in day_events[:max_per_day]],
                overflow=max(len(day_events) - max_per_day, 0),
            )
        )
    return cells
