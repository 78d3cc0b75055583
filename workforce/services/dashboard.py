"""
Dashboard aggregates computed from the store on each request.
"""
import calendar
from typing import Dict, List

from ..storage.provider import StorageProvider
from .time_rules import is_same_local_day, local_date, local_today, trailing_months


def get_metrics(store: StorageProvider) -> Dict[str, int]:
    jobs = store.get_all_jobs()
    workers = store.get_all_workers()
    today = local_today()

    pending = sum(1 for j in jobs if j.status == "pending")
    return {
        "totalHRs": len(store.list_users_by_role("hr")),
        "totalWorkers": len(workers),
        "jobsAssigned": sum(1 for j in jobs if j.status == "assigned"),
        "jobsPending": pending,
        "activeJobs": sum(1 for j in jobs if j.status == "in_progress"),
        "completedToday": sum(1 for j in jobs if is_same_local_day(j.completed_at, today)),
        "availableWorkers": sum(1 for w in workers if w.status == "available"),
        "pendingAssignment": pending,
    }


def job_completion_series(store: StorageProvider, months: int = 6) -> Dict[str, List]:
    """Completed jobs grouped by the local month of completed_at, oldest month first."""
    buckets = trailing_months(months)
    counts = {bucket: 0 for bucket in buckets}
    for job in store.get_jobs_by_status("completed"):
        if job.completed_at is None:
            continue
        day = local_date(job.completed_at)
        key = (day.year, day.month)
        if key in counts:
            counts[key] += 1
    return {
        "labels": [calendar.month_abbr[month] for _, month in buckets],
        "data": [counts[bucket] for bucket in buckets],
    }
