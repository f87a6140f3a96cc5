# siteadmin/api/v1/auth.py
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from jose import JWTError
from sqlalchemy.orm import Session

from siteadmin.db.session import get_db
from siteadmin.deps.auth import get_current_admin
from siteadmin.models.auth import AdminUser
from siteadmin.schemas.auth import LoginIn, MeOut, RefreshIn, TokenOut
from siteadmin.security.jwt import create_access_token, create_refresh_token, decode_token
from siteadmin.services.auth_service import authenticate_admin, get_last_login, record_login_activity

router = APIRouter(tags=["auth"])  # prefix is set in api/v1/router.py


def _tokens_for(admin: AdminUser) -> TokenOut:
    extra = {"username": admin.username, "role": admin.admin_role.value}
    return TokenOut(
        access_token=create_access_token(admin.id, extra),
        refresh_token=create_refresh_token(admin.id, extra),
    )


@router.post("/login", response_model=TokenOut)
def login(payload: LoginIn, request: Request, db: Session = Depends(get_db)):
    admin = authenticate_admin(db, payload.username, payload.password)
    if not admin:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    if not admin.is_active:
        raise HTTPException(status_code=403, detail="User inactive")

    record_login_activity(db, username=admin.username, request=request)
    db.commit()
    return _tokens_for(admin)


@router.post("/refresh", response_model=TokenOut)
def refresh(body: RefreshIn, db: Session = Depends(get_db)):
    try:
        payload = decode_token(body.refresh_token)
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid refresh token")
    if payload.get("type") != "refresh":
        raise HTTPException(status_code=401, detail="Invalid refresh token")

    try:
        admin = db.get(AdminUser, int(payload.get("sub")))
    except (TypeError, ValueError):
        admin = None
    if not admin or not admin.is_active:
        raise HTTPException(status_code=401, detail="User not found or inactive")
    # role may have changed since the refresh token was issued
    return _tokens_for(admin)


@router.get("/me", response_model=MeOut)
def me(
    current_admin: AdminUser = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    last = get_last_login(db, current_admin.username)
    return MeOut(
        id=current_admin.id,
        username=current_admin.username,
        email=current_admin.email,
        display_name=current_admin.display_name,
        role=current_admin.admin_role.value,
        last_login_at=last.created_at if last else None,
        last_login_ip=last.ip_address if last else None,
    )


@router.post("/logout", status_code=204)
def logout(_: Response):
    # JWT is stateless: the client drops its tokens
    return Response(status_code=204)
