"""
Time tracking routes for the signed-in worker.
"""
from datetime import date
from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from pydantic import ValidationError

from ..auth.security import SessionUser, require_roles
from ..db import get_store
from ..models.models import TimeTracking
from ..schemas.time_tracking import ClockInRequest, ClockOutRequest
from ..services import time_tracking
from ..storage.provider import StorageProvider
from .workers import get_own_worker


router = APIRouter(prefix="/api/time-tracking", tags=["time-tracking"])


def _record_to_dict(record: TimeTracking) -> dict:
    d = record.to_dict()
    d["hoursWorked"] = time_tracking.worked_hours(record)
    return d


def _raise_for(outcome: time_tracking.ClockOutcome) -> None:
    status_code = 404 if outcome.error == "worker_not_found" else 400
    raise HTTPException(status_code=status_code, detail=outcome.message)


@router.get("/my")
def my_time_tracking(
    on_date: Optional[date] = Query(None, alias="date"),
    store: StorageProvider = Depends(get_store),
    user: SessionUser = Depends(require_roles("worker")),
):
    worker = get_own_worker(store, user)
    return [_record_to_dict(r) for r in time_tracking.records_for_worker(store, worker.id, on_date)]


@router.get("/current")
def current_time_tracking(
    store: StorageProvider = Depends(get_store),
    user: SessionUser = Depends(require_roles("worker")),
):
    worker = get_own_worker(store, user)
    current = store.get_current_time_tracking(worker.id)
    return _record_to_dict(current) if current else None


@router.post("/clock-in")
def clock_in(
    payload: Optional[dict] = Body(None),
    store: StorageProvider = Depends(get_store),
    user: SessionUser = Depends(require_roles("worker")),
):
    try:
        req = ClockInRequest.model_validate(payload or {})
    except ValidationError:
        raise HTTPException(status_code=400, detail="Clock in failed")

    outcome = time_tracking.clock_in(store, user.id, user.name, location=req.location, job_id=req.job_id)
    if not outcome.ok:
        _raise_for(outcome)
    return _record_to_dict(outcome.record)


@router.post("/clock-out")
def clock_out(
    payload: Optional[dict] = Body(None),
    store: StorageProvider = Depends(get_store),
    user: SessionUser = Depends(require_roles("worker")),
):
    try:
        req = ClockOutRequest.model_validate(payload or {})
    except ValidationError:
        raise HTTPException(status_code=400, detail="Clock out failed")

    outcome = time_tracking.clock_out(store, user.id, user.name, location=req.location)
    if not outcome.ok:
        _raise_for(outcome)
    return _record_to_dict(outcome.record)
