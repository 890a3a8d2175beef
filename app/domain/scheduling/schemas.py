"""Scheduling domain schemas - layout engine values and API payloads"""

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class Event(BaseModel):
    """
    A time-ranged job as seen by the layout engine.

    start < end is the caller's promise, not checked here. The layout
    projector rejects events that break it.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    resource_id: str = ""
    start: datetime
    end: datetime

    @property
    def duration_seconds(self) -> float:
        return (self.end - self.start).total_seconds()

    def overlaps(self, other: "Event") -> bool:
        return self.start < other.end and other.start < self.end


class ColumnAssignment(BaseModel):
    model_config = ConfigDict(frozen=True)

    event: Event
    column: int
    total_columns: int


class RenderRect(BaseModel):
    """
    Final geometry for one event.

    offset/length run along the time axis (top/height in the day view,
    left/width on the dispatch board). cross_position/cross_span are
    fractions of the lane the event sits in; `row` is the resource row on the
    dispatch board and 0 in the day view. `gap` is the px spacing the painter
    subtracts from the span (half of it added to the position when column > 0).
    """

    model_config = ConfigDict(frozen=True)

    event_id: str
    resource_id: str = ""
    offset: float
    length: float
    row: int = 0
    column: int
    total_columns: int
    cross_position: float
    cross_span: float
    gap: float = 0.0


class InvalidEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    event_id: str
    reason: str


class LayoutResult(BaseModel):
    axis: Literal["vertical", "horizontal"]
    total_length: float
    rows: int = 1
    max_overlap: int = 0
    rects: list[RenderRect] = Field(default_factory=list)
    errors: list[InvalidEvent] = Field(default_factory=list)

    def rect_for(self, event_id: str) -> Optional[RenderRect]:
        return next((r for r in self.rects if r.event_id == event_id), None)


class DayColumn(BaseModel):
    date: date
    is_today: bool = False
    is_weekend: bool = False
    layout: LayoutResult


class MonthCell(BaseModel):
    date: date
    in_month: bool
    is_today: bool = False
    is_weekend: bool = False
    job_ids: list[str] = Field(default_factory=list)
    overflow: int = 0


# ============================================================================
# API PAYLOADS
# ============================================================================


class StaffRow(BaseModel):
    """One resource row on the dispatch board"""

    id: str
    name: str
    role: str
    avatarInitials: str
    color: str
    row: int
    jobCount: int


class ScheduleJobResponse(BaseModel):
    id: str
    title: str
    jobType: str
    customerName: str
    staffId: str
    startTime: datetime
    endTime: datetime
    status: str
    location: str


class StatusCounts(BaseModel):
    completed: int = 0
    in_progress: int = 0
    upcoming: int = 0
    cancelled: int = 0


class WindowResponse(BaseModel):
    startHour: float
    endHour: float
    scalePerHour: float
    totalLength: float


class ScheduleLayoutResponse(BaseModel):
    date: date
    view: str
    demo: bool
    label: str
    previous: date
    next: date
    window: WindowResponse
    layout: LayoutResult
    jobs: list[ScheduleJobResponse]
    staff: list[StaffRow] = Field(default_factory=list)
    counts: StatusCounts
    nowPosition: Optional[float] = None
    scrollOffset: Optional[float] = None


class WeekLayoutResponse(BaseModel):
    view: str
    demo: bool
    label: str
    previous: date
    next: date
    window: WindowResponse
    days: list[DayColumn]
    jobs: list[ScheduleJobResponse]
    counts: StatusCounts


class MonthLayoutResponse(BaseModel):
    view: str
    demo: bool
    label: str
    previous: date
    next: date
    cells: list[MonthCell]
    jobs: list[ScheduleJobResponse]
    counts: StatusCounts


class NowResponse(BaseModel):
    time: datetime
    visible: bool
    position: Optional[float] = None


class LabelsResponse(BaseModel):
    hours: list[str]
    slots: list[str]
    gutter: list[str]
    statuses: dict[str, str]
