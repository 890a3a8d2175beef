"""Schedule repository - reads jobs and staff for the board"""

from datetime import date, datetime, time, timedelta
from typing import Optional, Sequence

from sqlalchemy.orm import Session

from ...models import Job, User


def day_bounds(first: date, last: date) -> tuple[datetime, datetime]:
    """Half-open datetime range covering `first` through `last` inclusive"""
    return datetime.combine(first, time.min), datetime.combine(last + timedelta(days=1), time.min)


class ScheduleRepository:
    """Repository for schedule board queries"""

    @staticmethod
    def get_jobs_between(
        db: Session,
        first: date,
        last: date,
        staff_ids: Optional[Sequence[str]] = None,
    ) -> list[Job]:
        """Jobs intersecting the given days, optionally for some staff only"""
        start, end = day_bounds(first, last)
        query = db.query(Job).filter(Job.end_time > start, Job.start_time < end)
        if staff_ids:
            query = query.filter(Job.staff_id.in_(staff_ids))
        return query.order_by(Job.start_time.asc(), Job.id.asc()).all()

    @staticmethod
    def get_active_staff(db: Session, staff_ids: Optional[Sequence[str]] = None) -> list[User]:
        """Users that get a row on the dispatch board"""
        query = db.query(User).filter(User.status == "active")
        if staff_ids:
            query = query.filter(User.id.in_(staff_ids))
        return query.order_by(User.created_at.asc(), User.first_name.asc()).all()
