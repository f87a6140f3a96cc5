# siteadmin/services/auth_service.py
from __future__ import annotations

import logging
from typing import Optional

from fastapi import Request
from sqlalchemy import select, update
from sqlalchemy.orm import Session

from siteadmin.core.errors import NotFoundError, ValidationError
from siteadmin.models.auth import AdminLoginActivity, AdminRole, AdminUser, coerce_role
from siteadmin.services.passwords import hash_password, verify_password

logger = logging.getLogger(__name__)

USERNAME_LENGTH = (3, 50)
PASSWORD_LENGTH = (6, 100)


def get_admin_by_username(db: Session, username: str) -> Optional[AdminUser]:
    return db.scalar(select(AdminUser).where(AdminUser.username == username.strip()))


def authenticate_admin(db: Session, username: str, password: str) -> Optional[AdminUser]:
    admin = get_admin_by_username(db, username or "")
    if admin is None or not verify_password(password or "", admin.hashed_password or ""):
        logger.info("failed admin login for %r", username)
        return None
    return admin


def validate_username(username: Optional[str]) -> str:
    value = (username or "").strip()
    low, high = USERNAME_LENGTH
    if not low <= len(value) <= high:
        raise ValidationError(f"Username must be {low}-{high} characters long")
    return value


def validate_password(password: Optional[str]) -> str:
    value = password or ""
    low, high = PASSWORD_LENGTH
    if not low <= len(value) <= high:
        raise ValidationError(f"Password must be {low}-{high} characters long")
    return value


def create_admin_user(
    db: Session,
    *,
    username: str,
    password: str,
    role: str | AdminRole = AdminRole.admin,
    email: Optional[str] = None,
    display_name: Optional[str] = None,
) -> AdminUser:
    username = validate_username(username)
    validate_password(password)
    if get_admin_by_username(db, username) is not None:
        raise ValidationError(f"Admin user already exists: {username}")
    admin = AdminUser(
        username=username,
        email=email,
        display_name=display_name,
        hashed_password=hash_password(password),
        role=coerce_role(role).value,
        is_active=True,
    )
    db.add(admin)
    db.flush()
    return admin


def _extract_client(request: Optional[Request]) -> tuple[Optional[str], Optional[str]]:
    if not request:
        return None, None
    ip = request.client.host if request.client else None
    ua = request.headers.get("user-agent")
    return ip, ua


def record_login_activity(db: Session, *, username: str, request: Optional[Request] = None) -> AdminLoginActivity:
    ip, ua = _extract_client(request)
    activity = AdminLoginActivity(username=username, ip_address=ip, user_agent=ua[:512] if ua else None)
    db.add(activity)
    db.flush()
    return activity


def get_last_login(db: Session, username: str) -> Optional[AdminLoginActivity]:
    return db.scalar(
        select(AdminLoginActivity)
        .where(AdminLoginActivity.username == username)
        .order_by(AdminLoginActivity.created_at.desc(), AdminLoginActivity.id.desc())
        .limit(1)
    )


# ----------------------------------------------------------------------
# User management (superadmin); no commit, the action boundary commits
# ----------------------------------------------------------------------
def list_admin_users(db: Session) -> list[AdminUser]:
    return list(db.scalars(select(AdminUser).order_by(AdminUser.id.asc())))


def _require_admin(db: Session, username: str) -> AdminUser:
    admin = get_admin_by_username(db, username or "")
    if admin is None:
        raise NotFoundError(f"Admin user not found: {username}")
    return admin


def reset_admin_password(db: Session, *, username: str, password: str) -> AdminUser:
    admin = _require_admin(db, username)
    admin.hashed_password = hash_password(validate_password(password))
    db.flush()
    return admin


def set_admin_active(db: Session, *, username: str, active: bool) -> AdminUser:
    admin = _require_admin(db, username)
    admin.is_active = bool(active)
    db.flush()
    logger.info("admin %s %s", admin.username, "activated" if active else "deactivated")
    return admin


def rename_admin_user(db: Session, *, username: str, new_username: str) -> AdminUser:
    """Login activity follows the rename so last-login stays attached."""
    admin = _require_admin(db, username)
    target = validate_username(new_username)
    if target == admin.username:
        return admin
    if get_admin_by_username(db, target) is not None:
        raise ValidationError(f"Admin user already exists: {target}")

    previous = admin.username
    admin.username = target
    db.execute(
        update(AdminLoginActivity)
        .where(AdminLoginActivity.username == previous)
        .values(username=target)
    )
    db.flush()
    logger.info("admin %s renamed to %s", previous, target)
    return admin
