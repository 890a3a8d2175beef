"""Job repository - Database operations for jobs"""

from datetime import datetime
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from ...models import Job


class JobRepository:
    """Repository for job database operations"""

    @staticmethod
    def get_jobs(
        db: Session,
        staff_id: Optional[str] = None,
        status: Optional[str] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> list[Job]:
        """
        Get jobs ordered by start time.

        `start`/`end` select jobs that intersect the half-open range, so a job
        running over midnight is returned for both days.
        """
        query = db.query(Job).options(joinedload(Job.staff))

        if staff_id:
            query = query.filter(Job.staff_id == staff_id)
        if status:
            query = query.filter(Job.status == status)
        if start is not None:
            query = query.filter(Job.end_time > start)
        if end is not None:
            query = query.filter(Job.start_time < end)

        return query.order_by(Job.start_time.asc(), Job.id.asc()).all()

    @staticmethod
    def get_job_by_id(db: Session, job_id: str) -> Optional[Job]:
        return db.query(Job).filter(Job.id == job_id).first()

    @staticmethod
    def count_by_status(
        db: Session,
        staff_id: Optional[str] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> dict[str, int]:
        query = db.query(Job.status, func.count(Job.id))
        if staff_id:
            query = query.filter(Job.staff_id == staff_id)
        if start is not None:
            query = query.filter(Job.end_time > start)
        if end is not None:
            query = query.filter(Job.start_time < end)
        return dict(query.group_by(Job.status).all())

    @staticmethod
    def create_job(db: Session, **job_data) -> Job:
        job = Job(**job_data)
        db.add(job)
        db.commit()
        db.refresh(job)
        return job

    @staticmethod
    def update_job(db: Session, job: Job, **updates) -> Job:
        """Update a job with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(job, key):
                setattr(job, key, value)

        db.commit()
        db.refresh(job)
        return job

    @staticmethod
    def delete_job(db: Session, job: Job) -> None:
        db.delete(job)
        db.commit()
