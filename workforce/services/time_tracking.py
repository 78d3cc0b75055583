"""
Time tracking service.
Clock-in/out drive the worker status between available and working.
At most one open (clock_out_time is None) record per worker.
"""
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Optional

import structlog

from ..models.models import TimeTracking, WorkerRef, utcnow
from ..storage.provider import StorageProvider
from .audit import record_activity


logger = structlog.get_logger(__name__)

REJECTION_MESSAGES = {
    "worker_not_found": "Worker profile not found",
    "already_clocked_in": "Already clocked in",
    "not_clocked_in": "Not clocked in",
}


@dataclass
class ClockOutcome:
    record: Optional[TimeTracking] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def message(self) -> Optional[str]:
        return REJECTION_MESSAGES.get(self.error) if self.error else None


def clock_in(
    store: StorageProvider,
    user_id: int,
    actor_name: str,
    location: Optional[Dict[str, Any]] = None,
    job_id: Optional[int] = None,
) -> ClockOutcome:
    with store.transaction():
        worker = store.get_worker_by_user_id(user_id)
        if worker is None:
            return ClockOutcome(error="worker_not_found")
        if store.get_current_time_tracking(worker.id) is not None:
            logger.info("clock_in_rejected", worker_id=worker.id, reason="already_clocked_in")
            return ClockOutcome(error="already_clocked_in")

        record = store.create_time_tracking(TimeTracking(
            worker_id=worker.id,
            clock_in_time=utcnow(),
            location=location,
            job_id=job_id,
        ))
        store.update_worker(worker.id, {"status": "working"})
        record_activity(
            store,
            "worker_clocked_in",
            f"{actor_name} clocked in",
            actor_id=user_id,
            subject=WorkerRef(id=worker.id),
            metadata={"location": location},
        )
    logger.info("clocked_in", worker_id=worker.id, record_id=record.id)
    return ClockOutcome(record=record)


def clock_out(
    store: StorageProvider,
    user_id: int,
    actor_name: str,
    location: Optional[Dict[str, Any]] = None,
) -> ClockOutcome:
    with store.transaction():
        worker = store.get_worker_by_user_id(user_id)
        if worker is None:
            return ClockOutcome(error="worker_not_found")
        current = store.get_current_time_tracking(worker.id)
        if current is None:
            logger.info("clock_out_rejected", worker_id=worker.id, reason="not_clocked_in")
            return ClockOutcome(error="not_clocked_in")

        updates: Dict[str, Any] = {"clock_out_time": utcnow()}
        if location is not None:
            updates["location"] = location
        record = store.update_time_tracking(current.id, updates)
        store.update_worker(worker.id, {"status": "available"})
        record_activity(
            store,
            "worker_clocked_out",
            f"{actor_name} clocked out",
            actor_id=user_id,
            subject=WorkerRef(id=worker.id),
            metadata={"location": location},
        )
    logger.info("clocked_out", worker_id=worker.id, record_id=record.id)
    return ClockOutcome(record=record)


def worked_hours(record: TimeTracking) -> Optional[float]:
    if record.clock_in_time is None or record.clock_out_time is None:
        return None
    return round(max((record.clock_out_time - record.clock_in_time).total_seconds(), 0) / 3600, 2)


def records_for_worker(store: StorageProvider, worker_id: int, on_date: Optional[date] = None) -> List[TimeTracking]:
    return store.get_time_tracking_by_worker(worker_id, on_date)
