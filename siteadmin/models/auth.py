# siteadmin/models/auth.py
from __future__ import annotations
from datetime import datetime
from enum import Enum

from sqlalchemy import Boolean, DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from siteadmin.db.base import Base


class AdminRole(str, Enum):
    admin = "admin"
    superadmin = "superadmin"


def coerce_role(value: object) -> AdminRole:
    """Unknown or missing roles fall back to plain admin."""
    if isinstance(value, AdminRole):
        return value
    if isinstance(value, str) and value.strip().lower() == AdminRole.superadmin.value:
        return AdminRole.superadmin
    return AdminRole.admin


class AdminUser(Base):
    __tablename__ = "admin_users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    username: Mapped[str] = mapped_column(String(80), unique=True, index=True)
    email: Mapped[str | None] = mapped_column(String(160), default=None)
    display_name: Mapped[str | None] = mapped_column(String(160), default=None)
    hashed_password: Mapped[str] = mapped_column(String(255))
    role: Mapped[str] = mapped_column(String(32), default=AdminRole.admin.value)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    @property
    def admin_role(self) -> AdminRole:
        return coerce_role(self.role)

    @property
    def is_superadmin(self) -> bool:
        return self.admin_role is AdminRole.superadmin


class AdminLoginActivity(Base):
    __tablename__ = "admin_login_activity"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    username: Mapped[str] = mapped_column(String(80), index=True)
    ip_address: Mapped[str | None] = mapped_column(String(64), default=None)
    user_agent: Mapped[str | None] = mapped_column(String(512), default=None)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
