from __future__ import annotations

from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional
from enum import Enum
from datetime import datetime

# ──────────────────────────────────────────────────────────────────────────────
# Enums
# ──────────────────────────────────────────────────────────────────────────────

class UserRole(str, Enum):
    ADMIN = "admin"
    SUPERVISOR = "supervisor"
    WORKER = "worker"
    CLIENT = "client"


# ──────────────────────────────────────────────────────────────────────────────
# Stored records
# ──────────────────────────────────────────────────────────────────────────────

class User(BaseModel):
    """
    Collection: "dwoms_users"
    email is unique, compared case-insensitively.
    """
    id: str
    name: str
    email: str
    role: UserRole
    created_by: Optional[str] = None
    created_at: datetime


class Session(BaseModel):
    """
    The authenticated identity. Created at login/signup, removed at logout.
    Stored under "dwoms_current_user".
    """
    token: str
    user: User
    created_at: datetime


# ──────────────────────────────────────────────────────────────────────────────
# Request payloads
# ──────────────────────────────────────────────────────────────────────────────

def _non_blank(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("name must not be blank")
    return v


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class SignupRequest(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=1)
    role: UserRole = UserRole.WORKER

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return _non_blank(v)


class UserCreate(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    role: UserRole = UserRole.WORKER

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return _non_blank(v)


class UserRoleUpdate(BaseModel):
    role: UserRole


class SessionResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    user: User
