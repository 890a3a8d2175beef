"""Schedule router - layout endpoints for the day, dispatch, week and month boards"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import SessionClaims, get_optional_session
from ...config import (
    HOUR_HEIGHT,
    HOUR_WIDTH,
    SCHEDULE_END_HOUR,
    SCHEDULE_START_HOUR,
    SLOT_MINUTES,
)
from ...database import get_db
from .geometry import TimeWindow
from .schemas import (
    LabelsResponse,
    MonthLayoutResponse,
    NowResponse,
    ScheduleLayoutResponse,
    WeekLayoutResponse,
)
from .service import ScheduleService

router = APIRouter(prefix="/schedule", tags=["Schedule"])


def get_schedule_service(db: Session = Depends(get_db)) -> ScheduleService:
    """Dependency injection for ScheduleService"""
    return ScheduleService(db)


class WindowParams:
    """Optional overrides for the visible window, shared by every board"""

    def __init__(
        self,
        start_hour: Optional[float] = Query(None, alias="startHour", description="Default 7"),
        end_hour: Optional[float] = Query(None, alias="endHour", description="Default 19"),
        scale: Optional[float] = Query(None, description="px per hour"),
    ):
        self.start_hour = SCHEDULE_START_HOUR if start_hour is None else start_hour
        self.end_hour = SCHEDULE_END_HOUR if end_hour is None else end_hour
        self.scale = scale

    def window(self, default_scale: float) -> TimeWindow:
        return TimeWindow(
            start_hour=self.start_hour,
            end_hour=self.end_hour,
            scale_per_hour=default_scale if self.scale is None else self.scale,
        )


class BoardParams:
    """Date, staff filter, search and demo toggle"""

    def __init__(
        self,
        day: Optional[date] = Query(None, alias="date"),
        staff: Optional[list[str]] = Query(None, description="Only these staff ids"),
        search: Optional[str] = Query(None, description="Match job title or location"),
        demo: bool = Query(False, description="Serve the demo schedule"),
    ):
        self.day = day
        self.staff = staff
        self.search = search
        self.demo = demo

    def anchor(self, service: ScheduleService) -> date:
        return self.day or service.clock().date()


# ============================================================================
# BOARDS
# ============================================================================


@router.get("/day", response_model=ScheduleLayoutResponse)
async def get_day_view(
    board: BoardParams = Depends(),
    window: WindowParams = Depends(),
    session: Optional[SessionClaims] = Depends(get_optional_session),
    service: ScheduleService = Depends(get_schedule_service),
):
    """Vertical day grid, overlapping jobs side by side"""
    return service.day_view(
        board.anchor(service),
        window.window(HOUR_HEIGHT),
        session,
        board.demo,
        board.staff,
        board.search,
    )


@router.get("/dispatch", response_model=ScheduleLayoutResponse)
async def get_dispatch_view(
    board: BoardParams = Depends(),
    window: WindowParams = Depends(),
    session: Optional[SessionClaims] = Depends(get_optional_session),
    service: ScheduleService = Depends(get_schedule_service),
):
    """Horizontal dispatch board, one row per staff member"""
    return service.dispatch_view(
        board.anchor(service),
        window.window(HOUR_WIDTH),
        session,
        board.demo,
        board.staff,
        board.search,
    )


@router.get("/week", response_model=WeekLayoutResponse)
async def get_week_view(
    view: str = Query("week", description="week or 2week"),
    board: BoardParams = Depends(),
    window: WindowParams = Depends(),
    session: Optional[SessionClaims] = Depends(get_optional_session),
    service: ScheduleService = Depends(get_schedule_service),
):
    return service.week_view(
        board.anchor(service),
        view,
        window.window(HOUR_HEIGHT),
        session,
        board.demo,
        board.staff,
        board.search,
    )


@router.get("/month", response_model=MonthLayoutResponse)
async def get_month_view(
    board: BoardParams = Depends(),
    max_per_day: int = Query(3, alias="maxPerDay", ge=1, le=10),
    session: Optional[SessionClaims] = Depends(get_optional_session),
    service: ScheduleService = Depends(get_schedule_service),
):
    return service.month_view(
        board.anchor(service),
        session,
        board.demo,
        board.staff,
        board.search,
        max_per_day,
    )


# ============================================================================
# AXIS HELPERS
# ============================================================================


@router.get("/now", response_model=NowResponse)
async def get_now(
    view: str = Query("day", description="day (vertical) or dispatch (horizontal)"),
    window: WindowParams = Depends(),
    service: ScheduleService = Depends(get_schedule_service),
):
    """Current time line position, null while outside the window"""
    return service.now(window.window(HOUR_WIDTH if view == "dispatch" else HOUR_HEIGHT))


@router.get("/labels", response_model=LabelsResponse)
async def get_labels(
    slot_minutes: int = Query(SLOT_MINUTES, alias="slotMinutes"),
    window: WindowParams = Depends(),
    service: ScheduleService = Depends(get_schedule_service),
):
    """Axis labels for the board headers and gutter"""
    return service.labels(window.window(HOUR_HEIGHT), slot_minutes)
