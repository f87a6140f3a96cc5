# siteadmin/schemas/auth.py
from __future__ import annotations
from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict


class LoginIn(BaseModel):
    username: str
    password: str


class TokenOut(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class RefreshIn(BaseModel):
    refresh_token: str


class MeOut(BaseModel):
    id: int
    username: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    role: str
    last_login_at: Optional[datetime] = None
    last_login_ip: Optional[str] = None


class AdminUserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    role: str
    is_active: bool
    created_at: Optional[datetime] = None


class AdminUserCreateIn(BaseModel):
    username: str
    password: str
    role: Literal["admin", "superadmin"] = "admin"


class PasswordResetIn(BaseModel):
    password: str


class ActiveIn(BaseModel):
    active: bool


class RenameIn(BaseModel):
    new_username: str
