from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import ValidationError

from ..auth.security import SessionUser, get_current_user, require_roles
from ..db import get_store
from ..models.models import JobRef, JobReport
from ..schemas.job_reports import JobReportCreate
from ..services.audit import record_activity
from ..storage.provider import StorageProvider
from .workers import get_own_worker


router = APIRouter(prefix="/api/job-reports", tags=["job-reports"])


@router.get("")
def list_job_reports(
    job_id: Optional[int] = Query(None, alias="jobId"),
    worker_id: Optional[int] = Query(None, alias="workerId"),
    store: StorageProvider = Depends(get_store),
    _=Depends(get_current_user),
):
    if job_id is not None:
        reports = store.get_job_reports_by_job(job_id)
    elif worker_id is not None:
        reports = store.get_job_reports_by_worker(worker_id)
    else:
        reports = store.get_all_job_reports()
    return [r.to_dict() for r in reports]


@router.get("/{report_id}")
def get_job_report(report_id: int, store: StorageProvider = Depends(get_store), _=Depends(get_current_user)):
    report = store.get_job_report(report_id)
    if not report:
        raise HTTPException(status_code=404, detail="Report not found")
    return report.to_dict()


@router.post("")
def submit_job_report(
    payload: dict,
    store: StorageProvider = Depends(get_store),
    user: SessionUser = Depends(require_roles("worker")),
):
    worker = get_own_worker(store, user)
    try:
        data = JobReportCreate.model_validate(payload)
    except ValidationError:
        raise HTTPException(status_code=400, detail="Invalid report data")
    if store.get_job(data.job_id) is None:
        raise HTTPException(status_code=404, detail="Job not found")

    with store.transaction():
        report = store.create_job_report(JobReport(**dict(data), worker_id=worker.id))
        record_activity(
            store,
            "report_submitted",
            f"{user.name} submitted job report",
            actor_id=user.id,
            subject=JobRef(id=report.job_id),
            metadata={"reportId": report.id},
        )
    return report.to_dict()
