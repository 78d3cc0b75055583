from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from ..models.models import JobLocation, JobPriority, JobStatus, Specialty
from .base import RequestModel, reject_null


class JobCreate(RequestModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    type: Specialty
    priority: JobPriority = "normal"
    status: JobStatus = "pending"
    location: JobLocation
    assigned_to: Optional[int] = None
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    estimated_duration: Optional[int] = None
    actual_duration: Optional[float] = None
    scheduled_at: Optional[datetime] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None


class JobUpdate(RequestModel):
    title: Optional[str] = None
    description: Optional[str] = None
    type: Optional[Specialty] = None
    priority: Optional[JobPriority] = None
    status: Optional[JobStatus] = None
    location: Optional[JobLocation] = None
    assigned_to: Optional[int] = None
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    estimated_duration: Optional[int] = None
    actual_duration: Optional[float] = None
    scheduled_at: Optional[datetime] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    @field_validator('title', 'type', 'priority', 'status', 'location', mode='before')
    @classmethod
    def not_null(cls, v):
        return reject_null(v)
