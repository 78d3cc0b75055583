"""
In-memory storage provider.
Six keyed collections sharing one id counter; every query is a linear scan.
"""
import itertools
import threading
import time
from datetime import date
from typing import Callable, Dict, List, Optional, TypeVar

from ..models.models import Activity, Job, JobReport, Record, TimeTracking, User, Worker, utcnow
from ..services.time_rules import is_same_local_day
from .provider import StorageProvider


R = TypeVar("R", bound=Record)


class MemStorage(StorageProvider):
    """Process-local store. Not durable; state resets with the process."""

    def __init__(self):
        self.users: Dict[int, User] = {}
        self.workers: Dict[int, Worker] = {}
        self.jobs: Dict[int, Job] = {}
        self.job_reports: Dict[int, JobReport] = {}
        self.activities: Dict[int, Activity] = {}
        self.time_tracking: Dict[int, TimeTracking] = {}
        self.revoked_sessions: Dict[str, int] = {}
        self._ids = itertools.count(1)
        # Re-entrant so domain services can hold it across several store calls
        self._lock = threading.RLock()

    def transaction(self) -> threading.RLock:
        return self._lock

    def next_id(self) -> int:
        with self._lock:
            return next(self._ids)

    # Generic primitives

    def _create(self, collection: Dict[int, R], record: R, stamp: Optional[str] = None) -> R:
        with self._lock:
            updates = {"id": next(self._ids)}
            if stamp and getattr(record, stamp) is None:
                updates[stamp] = utcnow()
            stored = record.model_copy(update=updates)
            collection[stored.id] = stored
            return stored

    def _get(self, collection: Dict[int, R], record_id: int) -> Optional[R]:
        return collection.get(record_id)

    def _update(self, collection: Dict[int, R], record_id: int, updates: dict) -> Optional[R]:
        with self._lock:
            current = collection.get(record_id)
            if current is None:
                return None
            fields = {k: v for k, v in updates.items() if k != "id"}
            merged = current.model_copy(update=fields)
            collection[record_id] = merged
            return merged

    def _filter(self, collection: Dict[int, R], predicate: Callable[[R], bool]) -> List[R]:
        with self._lock:
            return [r for r in collection.values() if predicate(r)]

    # Users

    def get_user(self, user_id: int) -> Optional[User]:
        return self._get(self.users, user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        return next(iter(self._filter(self.users, lambda u: u.username == username)), None)

    def list_users(self) -> List[User]:
        return self._filter(self.users, lambda u: True)

    def list_users_by_role(self, role: str) -> List[User]:
        return self._filter(self.users, lambda u: u.role == role)

    def create_user(self, user: User) -> User:
        return self._create(self.users, user, stamp="created_at")

    # Workers

    def get_worker(self, worker_id: int) -> Optional[Worker]:
        return self._get(self.workers, worker_id)

    def get_worker_by_user_id(self, user_id: int) -> Optional[Worker]:
        return next(iter(self._filter(self.workers, lambda w: w.user_id == user_id)), None)

    def get_all_workers(self) -> List[Worker]:
        return self._filter(self.workers, lambda w: True)

    def create_worker(self, worker: Worker) -> Worker:
        return self._create(self.workers, worker)

    def update_worker(self, worker_id: int, updates: dict) -> Optional[Worker]:
        return self._update(self.workers, worker_id, updates)

    # Jobs

    def get_job(self, job_id: int) -> Optional[Job]:
        return self._get(self.jobs, job_id)

    def get_all_jobs(self) -> List[Job]:
        return self._filter(self.jobs, lambda j: True)

    def get_jobs_by_worker(self, worker_id: int) -> List[Job]:
        return self._filter(self.jobs, lambda j: j.assigned_to == worker_id)

    def get_jobs_by_status(self, status: str) -> List[Job]:
        return self._filter(self.jobs, lambda j: j.status == status)

    def create_job(self, job: Job) -> Job:
        return self._create(self.jobs, job, stamp="created_at")

    def update_job(self, job_id: int, updates: dict) -> Optional[Job]:
        return self._update(self.jobs, job_id, updates)

    # Job reports

    def get_job_report(self, report_id: int) -> Optional[JobReport]:
        return self._get(self.job_reports, report_id)

    def get_all_job_reports(self) -> List[JobReport]:
        return self._filter(self.job_reports, lambda r: True)

    def get_job_reports_by_job(self, job_id: int) -> List[JobReport]:
        return self._filter(self.job_reports, lambda r: r.job_id == job_id)

    def get_job_reports_by_worker(self, worker_id: int) -> List[JobReport]:
        return self._filter(self.job_reports, lambda r: r.worker_id == worker_id)

    def create_job_report(self, report: JobReport) -> JobReport:
        return self._create(self.job_reports, report, stamp="submitted_at")

    # Activities

    def get_all_activities(self) -> List[Activity]:
        rows = self._filter(self.activities, lambda a: True)
        return sorted(rows, key=lambda a: (a.created_at, a.id), reverse=True)

    def get_recent_activities(self, limit: int) -> List[Activity]:
        return self.get_all_activities()[:max(limit, 0)]

    def create_activity(self, activity: Activity) -> Activity:
        return self._create(self.activities, activity, stamp="created_at")

    # Time tracking

    def get_time_tracking_by_worker(self, worker_id: int, on_date: Optional[date] = None) -> List[TimeTracking]:
        rows = self._filter(self.time_tracking, lambda t: t.worker_id == worker_id)
        if on_date is not None:
            rows = [t for t in rows if is_same_local_day(t.date, on_date)]
        return sorted(rows, key=lambda t: (t.date, t.id), reverse=True)

    def get_current_time_tracking(self, worker_id: int) -> Optional[TimeTracking]:
        open_rows = self._filter(
            self.time_tracking,
            lambda t: t.worker_id == worker_id and t.clock_out_time is None,
        )
        open_rows.sort(key=lambda t: (t.date, t.id), reverse=True)
        return open_rows[0] if open_rows else None

    def create_time_tracking(self, record: TimeTracking) -> TimeTracking:
        return self._create(self.time_tracking, record, stamp="date")

    def update_time_tracking(self, record_id: int, updates: dict) -> Optional[TimeTracking]:
        return self._update(self.time_tracking, record_id, updates)

    # Sessions
    def revoke_session(self, jti: str, expires_at: int) -> None:
        with self._lock:
            now = int(time.time())
            # Expired tokens fail signature checks anyway
            for stale in [k for k, exp in self.revoked_sessions.items() if exp <= now]:
                del self.revoked_sessions[stale]
            self.revoked_sessions[jti] = expires_at

    def is_session_revoked(self, jti: str) -> bool:
        with self._lock:
            return jti in self.revoked_sessions
