"""Job service - Business logic for job operations"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...auth import SessionClaims
from ...models import Customer, Job, User
from ...shared.validators import customer_name, job_type, to_naive_utc
from .repository import JobRepository
from .schemas import JobCreate, JobResponse, JobUpdate

logger = logging.getLogger(__name__)


class JobService:
    """Service layer for job business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = JobRepository()

    def scope_for(self, session: SessionClaims) -> Optional[str]:
        """Staff id the caller is limited to, None when they may see every job"""
        if session.can("viewAllJobs"):
            return None
        if session.can("viewOwnJobs"):
            return session.user_id
        raise HTTPException(status_code=403, detail="You do not have permission to view jobs")

    def get_jobs(
        self,
        session: SessionClaims,
        status: Optional[str] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> list[Job]:
        return self.repo.get_jobs(
            self.db, self.scope_for(session), status, to_naive_utc(start), to_naive_utc(end)
        )

    def get_job(self, job_id: str, session: SessionClaims) -> Job:
        job = self.repo.get_job_by_id(self.db, job_id)
        if not job:
            raise HTTPException(status_code=404, detail="Job not found")

        staff_id = self.scope_for(session)
        if staff_id and job.staff_id != staff_id:
            raise HTTPException(status_code=404, detail="Job not found")
        return job

    def _check_references(self, staff_id: Optional[str], customer_id: Optional[int]) -> None:
        if staff_id and not self.db.query(User.id).filter(User.id == staff_id).first():
            raise HTTPException(status_code=422, detail=f"Unknown staff member '{staff_id}'")
        if customer_id and not self.db.query(Customer.id).filter(Customer.id == customer_id).first():
            raise HTTPException(status_code=422, detail=f"Unknown customer '{customer_id}'")

    def create_job(self, data: JobCreate, session: SessionClaims) -> Job:
        staff_id = data.staffId
        if self.scope_for(session) and staff_id != session.user_id:
            # Callers limited to their own jobs can only book themselves
            staff_id = session.user_id

        self._check_references(staff_id, data.customerId)

        job = self.repo.create_job(
            self.db,
            title=data.title,
            customer_id=data.customerId,
            staff_id=staff_id,
            start_time=data.startTime,
            end_time=data.endTime,
            status=data.status,
            location=data.location,
            notes=data.notes,
        )
        logger.info(f"✅ Job {job.id} booked by {session.email} for staff {staff_id}")
        return job

    def update_job(self, job_id: str, data: JobUpdate, session: SessionClaims) -> Job:
        job = self.get_job(job_id, session)

        start = data.startTime or job.start_time
        end = data.endTime or job.end_time
        if end <= start:
            raise HTTPException(status_code=422, detail="endTime must be after startTime")

        staff_id = data.staffId
        if staff_id and self.scope_for(session) and staff_id != session.user_id:
            raise HTTPException(status_code=403, detail="You can only assign jobs to yourself")
        self._check_references(staff_id, data.customerId)

        updates = {
            "title": data.title,
            "customer_id": data.customerId,
            "staff_id": staff_id,
            "start_time": data.startTime,
            "end_time": data.endTime,
            "status": data.status,
            "location": data.location,
            "notes": data.notes,
        }
        job = self.repo.update_job(self.db, job, **updates)
        logger.info(f"📝 Job {job.id} updated by {session.email}")
        return job

    def delete_job(self, job_id: str, session: SessionClaims) -> None:
        job = self.get_job(job_id, session)
        self.repo.delete_job(self.db, job)
        logger.info(f"🗑️ Job {job_id} deleted by {session.email}")

    @staticmethod
    def to_response(job: Job) -> JobResponse:
        return JobResponse(
            id=job.id,
            title=job.title,
            jobType=job_type(job.title),
            customerName=customer_name(job.title),
            customerId=job.customer_id,
            staffId=job.staff_id,
            staffName=job.staff.full_name if job.staff else None,
            startTime=job.start_time,
            endTime=job.end_time,
            status=job.status,
            location=job.location or "",
            notes=job.notes,
        )
