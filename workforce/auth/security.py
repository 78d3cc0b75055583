import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from passlib.context import CryptContext
from pydantic import BaseModel

from ..config import settings
from ..db import get_store
from ..models.models import User
from ..storage.provider import StorageProvider


pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")
http_bearer = HTTPBearer(auto_error=False)


class SessionUser(BaseModel):
    """What a session binds: enough to narrate and gate without a store lookup."""
    id: int
    username: str
    role: str
    name: str


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    if not hashed:
        return False
    try:
        return pwd_context.verify(plain, hashed)
    except ValueError:
        return False


def create_session_token(user: User) -> str:
    now = datetime.now(tz=timezone.utc)
    payload = {
        "sub": str(user.id),
        "username": user.username,
        "role": user.role,
        "name": user.name,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(seconds=settings.session_ttl_seconds)).timestamp()),
        "jti": str(uuid.uuid4()),
    }
    return jwt.encode(payload, settings.session_secret, algorithm=settings.session_algorithm)


def decode_token(token: str) -> dict:
    try:
        return jwt.decode(token, settings.session_secret, algorithms=[settings.session_algorithm])
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Session expired")
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")


def authenticate(store: StorageProvider, username: str, password: str, role: str) -> Optional[User]:
    """Exact username match, password check, and the declared role must equal the stored one."""
    user = store.get_user_by_username(username)
    if user is None or not verify_password(password, user.password_hash) or user.role != role:
        return None
    return user


def get_session_token(
    request: Request,
    creds: Optional[HTTPAuthorizationCredentials] = Depends(http_bearer),
) -> Optional[str]:
    """Bearer header first, then the session cookie."""
    return creds.credentials if creds else request.cookies.get(settings.session_cookie_name)


def get_current_user(
    token: Optional[str] = Depends(get_session_token),
    store: StorageProvider = Depends(get_store),
) -> SessionUser:
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    payload = decode_token(token)
    if store.is_session_revoked(payload.get("jti", "")):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Session expired")
    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    if store.get_user(user_id) is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return SessionUser(
        id=user_id,
        username=payload.get("username", ""),
        role=payload.get("role", ""),
        name=payload.get("name", ""),
    )


def require_roles(*allowed_roles: str):
    """Allow the request when the session role is any of ``allowed_roles``."""
    def _dep(user: SessionUser = Depends(get_current_user)) -> SessionUser:
        if user.role not in allowed_roles:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
        return user

    return _dep
