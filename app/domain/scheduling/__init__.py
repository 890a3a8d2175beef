"""
Scheduling domain - overlap-aware layout for the schedule board.

Jobs overlapping in time are grouped into clusters, each cluster gets the
fewest columns that keep its jobs from colliding, and the result is projected
onto a time window as pixel rectangles. The same engine drives the vertical
day/week grids and the horizontal per-staff dispatch board.
"""

from .geometry import InvalidWindowError, TimeWindow, length_of, position_of
from .layout import layout_day_view, layout_dispatch_view, layout_week_view, month_grid
from .schemas import Event, LayoutResult, RenderRect

__all__ = [
    "Event",
    "InvalidWindowError",
    "LayoutResult",
    "RenderRect",
    "TimeWindow",
    "layout_day_view",
    "layout_dispatch_view",
    "layout_week_view",
    "length_of",
    "month_grid",
    "position_of",
]
