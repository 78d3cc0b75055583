from contextlib import AbstractContextManager
from datetime import date
from typing import List, Optional

from ..models.models import Activity, Job, JobReport, TimeTracking, User, Worker


class StorageProvider:
    """Entity store interface. Lookups return ``None`` for unknown ids, never raise."""

    def transaction(self) -> AbstractContextManager:
        raise NotImplementedError

    # Users
    def get_user(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_user_by_username(self, username: str) -> Optional[User]:
        raise NotImplementedError

    def list_users(self) -> List[User]:
        raise NotImplementedError

    def list_users_by_role(self, role: str) -> List[User]:
        raise NotImplementedError

    def create_user(self, user: User) -> User:
        raise NotImplementedError

    # Workers
    def get_worker(self, worker_id: int) -> Optional[Worker]:
        raise NotImplementedError

    def get_worker_by_user_id(self, user_id: int) -> Optional[Worker]:
        raise NotImplementedError

    def get_all_workers(self) -> List[Worker]:
        raise NotImplementedError

    def create_worker(self, worker: Worker) -> Worker:
        raise NotImplementedError

    def update_worker(self, worker_id: int, updates: dict) -> Optional[Worker]:
        raise NotImplementedError

    # Jobs
    def get_job(self, job_id: int) -> Optional[Job]:
        raise NotImplementedError

    def get_all_jobs(self) -> List[Job]:
        raise NotImplementedError

    def get_jobs_by_worker(self, worker_id: int) -> List[Job]:
        raise NotImplementedError

    def get_jobs_by_status(self, status: str) -> List[Job]:
        raise NotImplementedError

    def create_job(self, job: Job) -> Job:
        raise NotImplementedError

    def update_job(self, job_id: int, updates: dict) -> Optional[Job]:
        raise NotImplementedError

    # Job reports
    def get_job_report(self, report_id: int) -> Optional[JobReport]:
        raise NotImplementedError

    def get_all_job_reports(self) -> List[JobReport]:
        raise NotImplementedError

    def get_job_reports_by_job(self, job_id: int) -> List[JobReport]:
        raise NotImplementedError

    def get_job_reports_by_worker(self, worker_id: int) -> List[JobReport]:
        raise NotImplementedError

    def create_job_report(self, report: JobReport) -> JobReport:
        raise NotImplementedError

    # Activities
    def get_all_activities(self) -> List[Activity]:
        raise NotImplementedError

    def get_recent_activities(self, limit: int) -> List[Activity]:
        raise NotImplementedError

    def create_activity(self, activity: Activity) -> Activity:
        raise NotImplementedError

    # Time tracking
    def get_time_tracking_by_worker(self, worker_id: int, on_date: Optional[date] = None) -> List[TimeTracking]:
        raise NotImplementedError

    def get_current_time_tracking(self, worker_id: int) -> Optional[TimeTracking]:
        raise NotImplementedError

    def create_time_tracking(self, record: TimeTracking) -> TimeTracking:
        raise NotImplementedError

    def update_time_tracking(self, record_id: int, updates: dict) -> Optional[TimeTracking]:
        raise NotImplementedError

    # Sessions
    def revoke_session(self, jti: str, expires_at: int) -> None:
        raise NotImplementedError

    def is_session_revoked(self, jti: str) -> bool:
        raise NotImplementedError
