"""
Dashboard summary - job counts for the overview cards
"""

import logging
from datetime import datetime, timedelta

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from ..auth import SessionClaims, require_permission
from ..database import get_db, require_database
from ..domain.customers.repository import CustomerRepository
from ..domain.jobs.repository import JobRepository
from ..domain.scheduling.layout import start_of_week
from ..domain.scheduling.repository import day_bounds
from ..models import JOB_STATUSES

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dashboard", tags=["Dashboard"], dependencies=[Depends(require_database)])


class DashboardStats(BaseModel):
    byStatus: dict[str, int]
    today: int
    thisWeek: int
    total: int
    customers: int


@router.get("/stats", response_model=DashboardStats)
async def get_dashboard_stats(
    session: SessionClaims = Depends(require_permission("viewAllJobs", "viewOwnJobs")),
    db: Session = Depends(get_db),
):
    """Job counts for the caller - only their own jobs unless they can see every job"""
    staff_id = None if session.can("viewAllJobs") else session.user_id
    today = datetime.now().date()

    by_status = JobRepository.count_by_status(db, staff_id)
    today_start, today_end = day_bounds(today, today)
    week_first = start_of_week(today)
    week_start, week_end = day_bounds(week_first, week_first + timedelta(days=6))

    today_counts = JobRepository.count_by_status(db, staff_id, today_start, today_end)
    week_counts = JobRepository.count_by_status(db, staff_id, week_start, week_end)

    customers = 0
    if session.can("viewAllClients"):
        customers = CustomerRepository.count_customers(db)

    logger.debug(f"📊 Dashboard stats for {session.email}: {by_status}")
    return DashboardStats(
        byStatus={status: by_status.get(status, 0) for status in JOB_STATUSES},
        today=sum(today_counts.values()),
        thisWeek=sum(week_counts.values()),
        total=sum(by_status.values()),
        customers=customers,
    )
