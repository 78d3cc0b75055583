from typing import Optional

from pydantic import Field, field_validator

from ..models.models import UserRole
from .base import RequestModel


class UserCreate(RequestModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)
    role: UserRole
    name: str = Field(min_length=1)
    email: Optional[str] = None
    phone: Optional[str] = None

    @field_validator('email', 'phone', mode='before')
    @classmethod
    def empty_to_none(cls, v):
        if v is None:
            return None
        v = str(v).strip()
        return v or None
