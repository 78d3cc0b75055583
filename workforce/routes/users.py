import structlog
from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError

from ..auth.security import SessionUser, get_password_hash, require_roles
from ..db import get_store
from ..models.models import User
from ..schemas.users import UserCreate
from ..storage.provider import StorageProvider


router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("")
def list_users(store: StorageProvider = Depends(get_store), _=Depends(require_roles("admin"))):
    # password_hash is excluded from serialization
    return [u.to_dict() for u in store.list_users()]


@router.post("")
def create_user(
    payload: dict,
    store: StorageProvider = Depends(get_store),
    admin: SessionUser = Depends(require_roles("admin")),
):
    try:
        data = UserCreate.model_validate(payload)
    except ValidationError:
        raise HTTPException(status_code=400, detail="Invalid user data")

    password_hash = get_password_hash(data.password)
    with store.transaction():
        if store.get_user_by_username(data.username) is not None:
            raise HTTPException(status_code=400, detail="Username already exists")
        user = store.create_user(User(
            username=data.username,
            password_hash=password_hash,
            role=data.role,
            name=data.name,
            email=data.email,
            phone=data.phone,
        ))
    structlog.get_logger().info("user_created", user_id=user.id, role=user.role, actor_id=admin.id)
    return user.to_dict()
