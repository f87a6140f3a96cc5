# siteadmin/api/v1/endpoints/users.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from siteadmin.api.v1.responses import action_response
from siteadmin.db.session import get_db
from siteadmin.deps.auth import require_superadmin
from siteadmin.models.auth import AdminUser
from siteadmin.schemas.auth import ActiveIn, AdminUserCreateIn, AdminUserOut, PasswordResetIn, RenameIn
from siteadmin.services.admin_actions import (
    create_admin_user_action,
    rename_admin_user_action,
    reset_admin_password_action,
    set_admin_active_action,
)
from siteadmin.services.auth_service import list_admin_users

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=List[AdminUserOut])
def list_users(
    db: Session = Depends(get_db),
    _: AdminUser = Depends(require_superadmin),
):
    return list_admin_users(db)


@router.post("")
def create_user(
    payload: AdminUserCreateIn,
    db: Session = Depends(get_db),
    current_admin: AdminUser = Depends(require_superadmin),
):
    state = create_admin_user_action(
        db, current_admin, username=payload.username, password=payload.password, role=payload.role
    )
    return action_response(state)


@router.post("/{username}/password")
def reset_password(
    username: str,
    payload: PasswordResetIn,
    db: Session = Depends(get_db),
    current_admin: AdminUser = Depends(require_superadmin),
):
    return action_response(reset_admin_password_action(db, current_admin, username=username, password=payload.password))


@router.post("/{username}/active")
def set_active(
    username: str,
    payload: ActiveIn,
    db: Session = Depends(get_db),
    current_admin: AdminUser = Depends(require_superadmin),
):
    return action_response(set_admin_active_action(db, current_admin, username=username, active=payload.active))


@router.post("/{username}/rename")
def rename_user(
    username: str,
    payload: RenameIn,
    db: Session = Depends(get_db),
    current_admin: AdminUser = Depends(require_superadmin),
):
    state = rename_admin_user_action(db, current_admin, username=username, new_username=payload.new_username)
    return action_response(state)
