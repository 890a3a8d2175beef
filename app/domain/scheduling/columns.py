"""Column assignment - first-fit lanes for the events of one cluster"""

from typing import Iterable

from .clustering import sort_events
from .schemas import ColumnAssignment, Event


def assign_columns(cluster: Iterable[Event]) -> list[ColumnAssignment]:
    """
    Greedy interval colouring.

    Each event takes the first column whose previous occupant has already
    finished (column end <= event start); if none is free a new column is
    opened. Every event of the cluster is stamped with the final column count
    so the whole cluster renders at a uniform 1/total_columns width.
    """
    ordered = sort_events(cluster)
    column_ends = []
    placed: list[tuple[Event, int]] = []

    for event in ordered:
        column = next((i for i, end in enumerate(column_ends) if end <= event.start), None)
        if column is None:
            column = len(column_ends)
            column_ends.append(event.end)
        else:
            column_ends[column] = event.end
        placed.append((event, column))

    total_columns = len(column_ends)
    return [
        ColumnAssignment(event=event, column=column, total_columns=total_columns)
        for event, column in placed
    ]


def max_overlap(events: Iterable[Event]) -> int:
    """Largest number of events running at the same instant"""
    points = []
    for event in events:
        points.append((event.start, 1))
        points.append((event.end, -1))

    # Ends sort before starts at the same instant, back-to-back jobs do not overlap
    points.sort(key=lambda p: (p[0], p[1]))
    current = peak = 0
    for _, delta in points:
        current += delta
        peak = max(peak, current)
    return peak
