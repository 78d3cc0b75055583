"""
Job routes.
Creation and updates go through the job lifecycle service, which guards
status transitions and writes the activity log.
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import ValidationError

from ..auth.security import SessionUser, get_current_user, require_roles
from ..db import get_store
from ..models.models import Job
from ..schemas.jobs import JobCreate, JobUpdate
from ..services import job_lifecycle
from ..storage.provider import StorageProvider
from .workers import get_own_worker


router = APIRouter(prefix="/api/jobs", tags=["jobs"])


def _job_to_dict(job: Job, store: StorageProvider) -> dict:
    d = job.to_dict()
    worker = store.get_worker(job.assigned_to) if job.assigned_to is not None else None
    if worker:
        worker_user = store.get_user(worker.user_id)
        d["worker"] = {**worker.to_dict(), "user": worker_user.to_dict() if worker_user else None}
    else:
        d["worker"] = None
    creator = store.get_user(job.created_by) if job.created_by is not None else None
    d["creator"] = creator.to_dict() if creator else None
    return d


def _raise_for(outcome: job_lifecycle.JobOutcome) -> None:
    if outcome.error == "not_found":
        raise HTTPException(status_code=404, detail=outcome.message)
    raise HTTPException(status_code=400, detail=outcome.message)


@router.get("")
def list_jobs(
    status: Optional[str] = None,
    worker_id: Optional[int] = Query(None, alias="workerId"),
    store: StorageProvider = Depends(get_store),
    _=Depends(get_current_user),
):
    # status takes precedence over workerId
    if status:
        jobs = store.get_jobs_by_status(status)
    elif worker_id is not None:
        jobs = store.get_jobs_by_worker(worker_id)
    else:
        jobs = store.get_all_jobs()
    return [_job_to_dict(j, store) for j in jobs]


@router.get("/my")
def my_jobs(
    store: StorageProvider = Depends(get_store),
    user: SessionUser = Depends(require_roles("worker")),
):
    worker = get_own_worker(store, user)
    return [j.to_dict() for j in store.get_jobs_by_worker(worker.id)]


@router.get("/{job_id}")
def get_job(job_id: int, store: StorageProvider = Depends(get_store), _=Depends(get_current_user)):
    job = store.get_job(job_id)
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    return _job_to_dict(job, store)


@router.post("")
def create_job(
    payload: dict,
    store: StorageProvider = Depends(get_store),
    user: SessionUser = Depends(require_roles("admin", "hr")),
):
    try:
        data = JobCreate.model_validate(payload)
    except ValidationError:
        raise HTTPException(status_code=400, detail="Invalid job data")

    outcome = job_lifecycle.create_job(store, Job(**dict(data)), user.id, user.name)
    if not outcome.ok:
        _raise_for(outcome)
    return outcome.job.to_dict()


@router.patch("/{job_id}")
def update_job(
    job_id: int,
    payload: dict,
    store: StorageProvider = Depends(get_store),
    user: SessionUser = Depends(get_current_user),
):
    try:
        updates = JobUpdate.model_validate(payload).changed_fields()
    except ValidationError:
        raise HTTPException(status_code=400, detail="Invalid update data")

    outcome = job_lifecycle.update_job(store, job_id, updates, user.id, user.name)
    if not outcome.ok:
        _raise_for(outcome)
    return outcome.job.to_dict()
