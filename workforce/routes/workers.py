from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError

from ..auth.security import SessionUser, get_current_user, require_roles
from ..db import get_store
from ..models.models import Worker
from ..schemas.workers import WorkerCreate, WorkerUpdate
from ..storage.provider import StorageProvider


router = APIRouter(prefix="/api/workers", tags=["workers"])


def _worker_to_dict(w: Worker, store: StorageProvider, with_user: bool = True) -> dict:
    d = w.to_dict()
    if with_user:
        user = store.get_user(w.user_id)
        d["user"] = user.to_dict() if user else None
    return d


def get_own_worker(store: StorageProvider, user: SessionUser) -> Worker:
    worker = store.get_worker_by_user_id(user.id)
    if not worker:
        raise HTTPException(status_code=404, detail="Worker profile not found")
    return worker


@router.get("")
def list_workers(store: StorageProvider = Depends(get_store), _=Depends(get_current_user)):
    return [_worker_to_dict(w, store) for w in store.get_all_workers()]


@router.get("/me")
def my_worker_profile(
    store: StorageProvider = Depends(get_store),
    user: SessionUser = Depends(require_roles("worker")),
):
    return get_own_worker(store, user).to_dict()


@router.post("")
def create_worker(
    payload: dict,
    store: StorageProvider = Depends(get_store),
    _=Depends(require_roles("admin")),
):
    try:
        data = WorkerCreate.model_validate(payload)
    except ValidationError:
        raise HTTPException(status_code=400, detail="Invalid worker data")
    with store.transaction():
        # One profile per worker-role user
        owner = store.get_user(data.user_id)
        if owner is None or owner.role != "worker" or store.get_worker_by_user_id(owner.id) is not None:
            raise HTTPException(status_code=400, detail="Invalid worker data")
        worker = store.create_worker(Worker(**dict(data)))
    return worker.to_dict()


@router.patch("/{worker_id}")
def update_worker(
    worker_id: int,
    payload: dict,
    store: StorageProvider = Depends(get_store),
    _=Depends(get_current_user),
):
    try:
        updates = WorkerUpdate.model_validate(payload).changed_fields()
    except ValidationError:
        raise HTTPException(status_code=400, detail="Invalid update data")
    worker = store.update_worker(worker_id, updates)
    if not worker:
        raise HTTPException(status_code=404, detail="Worker not found")
    return worker.to_dict()
