"""Job domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator, model_validator

from ...shared.validators import to_naive_utc, validate_job_status


class JobCreate(BaseModel):
    """Schema for booking a new job"""

    title: str
    customerId: Optional[int] = None
    staffId: Optional[str] = None
    startTime: datetime
    endTime: datetime
    status: str = "upcoming"
    location: str = ""
    notes: Optional[str] = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v):
        if not v or not v.strip():
            raise ValueError("Job title is required")
        return v.strip()

    @field_validator("status")
    @classmethod
    def validate_status(cls, v):
        return validate_job_status(v)

    @field_validator("startTime", "endTime")
    @classmethod
    def normalize_times(cls, v):
        return to_naive_utc(v)

    @model_validator(mode="after")
    def check_times(self):
        if self.endTime <= self.startTime:
            raise ValueError("endTime must be after startTime")
        return self


class JobUpdate(BaseModel):
    """Schema for updating a job - times are re-checked against the stored ones"""

    title: Optional[str] = None
    customerId: Optional[int] = None
    staffId: Optional[str] = None
    startTime: Optional[datetime] = None
    endTime: Optional[datetime] = None
    status: Optional[str] = None
    location: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v):
        if v is not None and not v.strip():
            raise ValueError("Job title cannot be blank")
        return v.strip() if v else v

    @field_validator("status")
    @classmethod
    def validate_status(cls, v):
        return validate_job_status(v)

    @field_validator("startTime", "endTime")
    @classmethod
    def normalize_times(cls, v):
        return to_naive_utc(v)


class JobResponse(BaseModel):
    id: str
    title: str
    jobType: str
    customerName: str
    customerId: Optional[int]
    staffId: Optional[str]
    staffName: Optional[str] = None
    startTime: datetime
    endTime: datetime
    status: str
    location: str
    notes: Optional[str] = None

    class Config:
        from_attributes = True
