"""Schedule service - feeds jobs and staff through the layout engine"""

import logging
from collections import Counter
from datetime import date, datetime
from typing import Callable, Optional, Sequence

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...auth import SessionClaims
from ...config import is_enabled
from ...demo_data import DEMO_STAFF, demo_jobs
from ...models import JOB_STATUS_LABELS, JOB_STATUSES, Job
from ...roles import role_label
from ...shared.validators import customer_name, job_type
from .geometry import (
    TimeWindow,
    format_hour,
    hour_labels,
    in_window,
    position_of,
    scroll_offset,
    slot_labels,
)
from .layout import (
    layout_day_view,
    layout_dispatch_view,
    layout_week_view,
    month_grid,
    navigate,
    view_days,
    view_label,
)
from .repository import ScheduleRepository
from .schemas import (
    Event,
    LabelsResponse,
    LayoutResult,
    MonthLayoutResponse,
    NowResponse,
    ScheduleJobResponse,
    ScheduleLayoutResponse,
    StaffRow,
    StatusCounts,
    WeekLayoutResponse,
    WindowResponse,
)

logger = logging.getLogger(__name__)


def window_response(window: TimeWindow) -> WindowResponse:
    return WindowResponse(
        startHour=window.start_hour,
        endHour=window.end_hour,
        scalePerHour=window.scale_per_hour,
        totalLength=window.total_length,
    )


def status_counts(jobs: Sequence[ScheduleJobResponse]) -> StatusCounts:
    counts = Counter(job.status for job in jobs)
    return StatusCounts(**{status: counts.get(status, 0) for status in JOB_STATUSES})


def matches_search(job: ScheduleJobResponse, search: Optional[str]) -> bool:
    """Case-insensitive match on title and location"""
    if not search:
        return True
    term = search.strip().lower()
    return term in job.title.lower() or term in job.location.lower()


def to_events(jobs: Sequence[ScheduleJobResponse]) -> list[Event]:
    return [
        Event(id=job.id, resource_id=job.staffId, start=job.startTime, end=job.endTime)
        for job in jobs
    ]


class ScheduleService:
    """
    Builds schedule board payloads.

    Jobs come from the database, or from the demo set when the caller asks for
    it or the database integration is off. Anonymous callers only get demo data.
    """

    def __init__(self, db: Session, clock: Callable[[], datetime] = datetime.now):
        self.db = db
        self.repo = ScheduleRepository()
        self.clock = clock

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    @staticmethod
    def use_demo(demo: bool) -> bool:
        return demo or not is_enabled("database")

    def _scope(self, session: Optional[SessionClaims]) -> Optional[str]:
        if session is None:
            raise HTTPException(status_code=401, detail="Not authenticated")
        if session.can("viewAllJobs"):
            return None
        if session.can("viewOwnJobs"):
            return session.user_id
        raise HTTPException(status_code=403, detail="You do not have permission to view the schedule")

    def load_jobs(
        self,
        first: date,
        last: date,
        session: Optional[SessionClaims],
        demo: bool,
        staff_ids: Optional[Sequence[str]] = None,
        demo_day: Optional[date] = None,
    ) -> list[ScheduleJobResponse]:
        """
        Jobs touching `first`..`last`, filtered to `staff_ids` when given.

        Demo jobs are placed on `demo_day` (today by default) and only
        returned when that day is in range.
        """
        if self.use_demo(demo):
            day = demo_day or self.clock().date()
            if not first <= day <= last:
                return []
            rows = demo_jobs(day)
            jobs = [
                ScheduleJobResponse(
                    id=row["id"],
                    title=row["title"],
                    jobType=job_type(row["title"]),
                    customerName=customer_name(row["title"]),
                    staffId=row["staff_id"],
                    startTime=row["start_time"],
                    endTime=row["end_time"],
                    status=row["status"],
                    location=row["location"],
                )
                for row in rows
            ]
        else:
            own = self._scope(session)
            filter_ids = [own] if own else staff_ids
            if own and staff_ids and own not in staff_ids:
                return []
            jobs = [self._job_response(job) for job in self.repo.get_jobs_between(self.db, first, last, filter_ids)]

        if staff_ids:
            wanted = set(staff_ids)
            jobs = [job for job in jobs if job.staffId in wanted]
        return jobs

    def load_staff(
        self,
        session: Optional[SessionClaims],
        demo: bool,
        staff_ids: Optional[Sequence[str]] = None,
    ) -> list[dict]:
        """Dispatch rows, in board order"""
        if self.use_demo(demo):
            staff = [dict(member) for member in DEMO_STAFF]
        else:
            own = self._scope(session)
            users = self.repo.get_active_staff(self.db, [own] if own else None)
            staff = [
                {
                    "id": user.id,
                    "name": user.full_name,
                    "role": role_label(user.role),
                    "avatarInitials": user.initials,
                    "color": user.color or "slate",
                }
                for user in users
            ]

        if staff_ids:
            wanted = set(staff_ids)
            staff = [member for member in staff if member["id"] in wanted]
        return staff

    @staticmethod
    def _job_response(job: Job) -> ScheduleJobResponse:
        return ScheduleJobResponse(
            id=job.id,
            title=job.title,
            jobType=job_type(job.title),
            customerName=customer_name(job.title),
            staffId=job.staff_id or "",
            startTime=job.start_time,
            endTime=job.end_time,
            status=job.status,
            location=job.location or "",
        )

    @staticmethod
    def _report_rejected(layout: LayoutResult, view: str) -> None:
        if layout.errors:
            rejected = ", ".join(f"{e.event_id} ({e.reason})" for e in layout.errors)
            logger.warning(f"⚠️ {len(layout.errors)} job(s) left off the {view} view: {rejected}")

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def day_view(
        self,
        day: date,
        window: TimeWindow,
        session: Optional[SessionClaims],
        demo: bool = False,
        staff_ids: Optional[Sequence[str]] = None,
        search: Optional[str] = None,
    ) -> ScheduleLayoutResponse:
        jobs = self.load_jobs(day, day, session, demo, staff_ids, demo_day=day)
        layout = layout_day_view(to_events(jobs), window, day=day)
        self._report_rejected(layout, "day")

        now = self.clock()
        now_position = None
        if now.date() == day and in_window(now, window):
            now_position = position_of(now, window)

        return ScheduleLayoutResponse(
            date=day,
            view="day",
            demo=self.use_demo(demo),
            label=view_label("day", day),
            previous=navigate(day, "day", -1),
            next=navigate(day, "day", 1),
            window=window_response(window),
            layout=layout,
            jobs=[job for job in jobs if matches_search(job, search)],
            counts=status_counts(jobs),
            nowPosition=now_position,
        )

    def dispatch_view(
        self,
        day: date,
        window: TimeWindow,
        session: Optional[SessionClaims],
        demo: bool = False,
        staff_ids: Optional[Sequence[str]] = None,
        search: Optional[str] = None,
    ) -> ScheduleLayoutResponse:
        """One row per staff member, jobs laid out horizontally"""
        staff = self.load_staff(session, demo, staff_ids)
        jobs = self.load_jobs(day, day, session, demo, staff_ids, demo_day=day)

        layout = layout_dispatch_view(
            to_events(jobs), [member["id"] for member in staff], window, day=day
        )
        self._report_rejected(layout, "dispatch")

        job_counts = Counter(job.staffId for job in jobs)
        rows = [
            StaffRow(**member, row=i, jobCount=job_counts.get(member["id"], 0))
            for i, member in enumerate(staff)
        ]

        now = self.clock()
        now_position = None
        if now.date() == day and in_window(now, window):
            now_position = position_of(now, window)

        return ScheduleLayoutResponse(
            date=day,
            view="dispatch",
            demo=self.use_demo(demo),
            label=view_label("day", day),
            previous=navigate(day, "day", -1),
            next=navigate(day, "day", 1),
            window=window_response(window),
            layout=layout,
            jobs=[job for job in jobs if matches_search(job, search)],
            staff=rows,
            counts=status_counts(jobs),
            nowPosition=now_position,
            scrollOffset=scroll_offset(now, window) if now.date() == day else 0.0,
        )

    def week_view(
        self,
        anchor: date,
        view_mode: str,
        window: TimeWindow,
        session: Optional[SessionClaims],
        demo: bool = False,
        staff_ids: Optional[Sequence[str]] = None,
        search: Optional[str] = None,
    ) -> WeekLayoutResponse:
        """Week or two-week grid, one day layout per column"""
        if view_mode not in ("week", "2week"):
            raise HTTPException(status_code=422, detail="view must be 'week' or '2week'")

        days = view_days(view_mode, anchor)
        jobs = self.load_jobs(days[0], days[-1], session, demo, staff_ids)
        columns = layout_week_view(to_events(jobs), days, window, today=self.clock().date())
        for column in columns:
            self._report_rejected(column.layout, view_mode)

        return WeekLayoutResponse(
            view=view_mode,
            demo=self.use_demo(demo),
            label=view_label(view_mode, anchor),
            previous=navigate(anchor, view_mode, -1),
            next=navigate(anchor, view_mode, 1),
            window=window_response(window),
            days=columns,
            jobs=[job for job in jobs if matches_search(job, search)],
            counts=status_counts(jobs),
        )

    def month_view(
        self,
        anchor: date,
        session: Optional[SessionClaims],
        demo: bool = False,
        staff_ids: Optional[Sequence[str]] = None,
        search: Optional[str] = None,
        max_per_day: int = 3,
    ) -> MonthLayoutResponse:
        days = view_days("month", anchor)
        jobs = self.load_jobs(days[0], days[-1], session, demo, staff_ids)
        valid = [job for job in jobs if job.endTime > job.startTime]
        cells = month_grid(to_events(valid), anchor, today=self.clock().date(), max_per_day=max_per_day)

        return MonthLayoutResponse(
            view="month",
            demo=self.use_demo(demo),
            label=view_label("month", anchor),
            previous=navigate(anchor, "month", -1),
            next=navigate(anchor, "month", 1),
            cells=cells,
            jobs=[job for job in jobs if matches_search(job, search)],
            counts=status_counts(jobs),
        )

    def now(self, window: TimeWindow) -> NowResponse:
        now = self.clock()
        visible = in_window(now, window)
        return NowResponse(
            time=now,
            visible=visible,
            position=position_of(now, window) if visible else None,
        )

    @staticmethod
    def labels(window: TimeWindow, slot_minutes: int) -> LabelsResponse:
        if slot_minutes <= 0 or 60 % slot_minutes:
            raise HTTPException(status_code=422, detail="slot minutes must divide an hour")
        hours = range(int(window.start_hour), int(window.end_hour) + 1)
        return LabelsResponse(
            hours=hour_labels(window),
            slots=slot_labels(window, slot_minutes),
            gutter=[format_hour(h % 24) for h in hours],
            statuses=JOB_STATUS_LABELS,
        )
