"""Job router - FastAPI endpoints for job operations"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import SessionClaims, require_permission
from ...database import get_db, require_database
from .schemas import JobCreate, JobResponse, JobUpdate
from .service import JobService

router = APIRouter(
    prefix="/jobs",
    tags=["Jobs"],
    dependencies=[Depends(require_database)],
)


def get_job_service(db: Session = Depends(get_db)) -> JobService:
    """Dependency injection for JobService"""
    return JobService(db)


# ============================================================================
# READ
# ============================================================================


@router.get("", response_model=list[JobResponse])
async def get_jobs(
    status: Optional[str] = Query(None),
    start: Optional[datetime] = Query(None, description="Only jobs ending after this instant"),
    end: Optional[datetime] = Query(None, description="Only jobs starting before this instant"),
    session: SessionClaims = Depends(require_permission("viewAllJobs", "viewOwnJobs")),
    service: JobService = Depends(get_job_service),
):
    """List jobs visible to the caller"""
    jobs = service.get_jobs(session, status, start, end)
    return [service.to_response(job) for job in jobs]


@router.get("/{job_id}", response_model=JobResponse)
async def get_job(
    job_id: str,
    session: SessionClaims = Depends(require_permission("viewAllJobs", "viewOwnJobs")),
    service: JobService = Depends(get_job_service),
):
    return service.to_response(service.get_job(job_id, session))


# ============================================================================
# WRITE
# ============================================================================


@router.post("", response_model=JobResponse, status_code=201)
async def create_job(
    data: JobCreate,
    session: SessionClaims = Depends(require_permission("createJobs")),
    service: JobService = Depends(get_job_service),
):
    return service.to_response(service.create_job(data, session))


@router.patch("/{job_id}", response_model=JobResponse)
async def update_job(
    job_id: str,
    data: JobUpdate,
    session: SessionClaims = Depends(require_permission("editJobs")),
    service: JobService = Depends(get_job_service),
):
    return service.to_response(service.update_job(job_id, data, session))


@router.delete("/{job_id}", status_code=204)
async def delete_job(
    job_id: str,
    session: SessionClaims = Depends(require_permission("deleteJobs")),
    service: JobService = Depends(get_job_service),
):
    service.delete_job(job_id, session)
