from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel


UserRole = Literal["admin", "hr", "worker"]
Specialty = Literal["plumbing", "electrical", "drilling", "hvac"]
WorkerStatus = Literal["available", "working", "offline"]
JobPriority = Literal["normal", "high", "urgent"]
JobStatus = Literal["pending", "assigned", "in_progress", "completed", "cancelled"]
ReportStatus = Literal["submitted", "approved", "rejected"]


def utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


class Record(BaseModel):
    """Base for stored entities: camelCase on the wire, snake_case in Python."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int = 0

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


class GeoPoint(BaseModel):
    lat: float
    lng: float


class JobLocation(BaseModel):
    address: str
    lat: float
    lng: float


class User(Record):
    username: str
    password_hash: str = Field(default="", exclude=True)
    role: UserRole
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    created_at: Optional[datetime] = None


class Worker(Record):
    user_id: int
    specialty: Specialty
    status: WorkerStatus = "available"
    location: Optional[GeoPoint] = None
    completed_jobs: int = 0
    rating: str = "0.00"
    is_active: bool = True


class Job(Record):
    title: str
    description: Optional[str] = None
    type: Specialty
    priority: JobPriority = "normal"
    status: JobStatus = "pending"
    location: JobLocation
    assigned_to: Optional[int] = None
    created_by: Optional[int] = None
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    estimated_duration: Optional[int] = None
    actual_duration: Optional[float] = None
    scheduled_at: Optional[datetime] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None


class JobReport(Record):
    job_id: int
    worker_id: int
    description: str
    time_spent: Optional[float] = None
    photos: List[str] = Field(default_factory=list)
    status: ReportStatus = "submitted"
    submitted_at: Optional[datetime] = None


# Activity subjects. The id's meaning depends on the kind, so it is never
# stored bare.
class JobRef(BaseModel):
    kind: Literal["job"] = "job"
    id: int


class WorkerRef(BaseModel):
    kind: Literal["worker"] = "worker"
    id: int


class NoSubject(BaseModel):
    kind: Literal["none"] = "none"


Subject = Union[JobRef, WorkerRef, NoSubject]


class Activity(Record):
    type: str
    description: str
    user_id: Optional[int] = None
    subject: Subject = Field(default_factory=NoSubject, discriminator="kind")
    metadata: Dict[str, Any] = Field(default_factory=dict)
    created_at: Optional[datetime] = None

    @computed_field(alias="entityType")
    @property
    def entity_type(self) -> str:
        return self.subject.kind

    @computed_field(alias="entityId")
    @property
    def entity_id(self) -> Optional[int]:
        return getattr(self.subject, "id", None)


class TimeTracking(Record):
    worker_id: int
    clock_in_time: Optional[datetime] = None
    clock_out_time: Optional[datetime] = None
    job_id: Optional[int] = None
    location: Optional[Dict[str, Any]] = None
    date: Optional[datetime] = None
