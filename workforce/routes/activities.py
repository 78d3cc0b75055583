from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..auth.security import get_current_user
from ..config import settings
from ..db import get_store
from ..services.audit import get_activities
from ..storage.provider import StorageProvider


router = APIRouter(prefix="/api/activities", tags=["activities"])


@router.get("")
def list_activities(
    limit: Optional[int] = Query(None, ge=0),
    store: StorageProvider = Depends(get_store),
    _=Depends(get_current_user),
):
    rows = get_activities(store, limit if limit is not None else settings.activity_feed_limit)
    items = []
    for a in rows:
        d = a.to_dict()
        user = store.get_user(a.user_id) if a.user_id is not None else None
        d["user"] = user.to_dict() if user else None
        items.append(d)
    return items
