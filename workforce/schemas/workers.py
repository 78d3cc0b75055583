from typing import Optional

from pydantic import field_validator

from ..models.models import GeoPoint, Specialty, WorkerStatus
from .base import RequestModel, reject_null


class WorkerCreate(RequestModel):
    user_id: int
    specialty: Specialty
    status: WorkerStatus = "available"
    location: Optional[GeoPoint] = None
    completed_jobs: int = 0
    rating: str = "0.00"
    is_active: bool = True


class WorkerUpdate(RequestModel):
    specialty: Optional[Specialty] = None
    status: Optional[WorkerStatus] = None
    location: Optional[GeoPoint] = None
    completed_jobs: Optional[int] = None
    rating: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator('specialty', 'status', 'completed_jobs', 'rating', 'is_active', mode='before')
    @classmethod
    def not_null(cls, v):
        return reject_null(v)
