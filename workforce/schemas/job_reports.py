from typing import List, Optional

from pydantic import Field

from .base import RequestModel


class JobReportCreate(RequestModel):
    job_id: int
    description: str = Field(min_length=1)
    time_spent: Optional[float] = None
    photos: List[str] = Field(default_factory=list)
