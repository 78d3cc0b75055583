from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..auth.security import get_current_user
from ..config import settings
from ..db import get_store
from ..services.dashboard import get_metrics, job_completion_series
from ..storage.provider import StorageProvider


router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("/metrics")
def dashboard_metrics(store: StorageProvider = Depends(get_store), _=Depends(get_current_user)):
    return get_metrics(store)


@router.get("/job-completion-chart")
def job_completion_chart(
    months: Optional[int] = Query(None, ge=1, le=24),
    store: StorageProvider = Depends(get_store),
    _=Depends(get_current_user),
):
    return job_completion_series(store, months or settings.chart_months_default)
