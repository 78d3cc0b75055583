from typing import Any, Dict, Optional

from .base import RequestModel


class ClockInRequest(RequestModel):
    location: Optional[Dict[str, Any]] = None
    job_id: Optional[int] = None


class ClockOutRequest(RequestModel):
    location: Optional[Dict[str, Any]] = None
