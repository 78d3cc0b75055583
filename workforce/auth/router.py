from typing import Optional

import structlog
from fastapi import APIRouter, Body, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from ..config import settings
from ..db import get_store
from ..schemas.auth import LoginRequest
from ..storage.provider import StorageProvider
from .security import (
    SessionUser,
    authenticate,
    create_session_token,
    decode_token,
    get_current_user,
    get_session_token,
)


router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login")
def login(payload: dict = Body(...), store: StorageProvider = Depends(get_store)):
    try:
        req = LoginRequest.model_validate(payload)
    except ValidationError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid request data")

    user = authenticate(store, req.username, req.password, req.role)
    if user is None:
        structlog.get_logger().info("login_failed", username=req.username, role=req.role)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    session_user = SessionUser(id=user.id, username=user.username, role=user.role, name=user.name)
    response = JSONResponse({"user": session_user.model_dump()})
    response.set_cookie(
        key=settings.session_cookie_name,
        value=create_session_token(user),
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
        max_age=settings.session_ttl_seconds,
        path="/",
    )
    structlog.get_logger().info("login_succeeded", user_id=user.id, role=user.role)
    return response


@router.post("/logout")
def logout(
    token: Optional[str] = Depends(get_session_token),
    store: StorageProvider = Depends(get_store),
):
    if token:
        try:
            payload = decode_token(token)
        except HTTPException:
            # already unusable, nothing to revoke
            payload = None
        if payload and payload.get("jti"):
            store.revoke_session(payload["jti"], int(payload.get("exp", 0)))
            structlog.get_logger().info("logout", user_id=payload.get("sub"))
    response = JSONResponse({"message": "Logged out successfully"})
    response.delete_cookie(settings.session_cookie_name, path="/")
    return response


@router.get("/me")
def me(user: SessionUser = Depends(get_current_user)):
    return {"user": user.model_dump()}
