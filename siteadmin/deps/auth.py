# siteadmin/deps/auth.py
from __future__ import annotations

from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError
from sqlalchemy.orm import Session

from siteadmin.db.session import get_db
from siteadmin.models.auth import AdminUser
from siteadmin.security.jwt import decode_token

# Reusable HTTP bearer scheme (non-fatal if header is missing)
_bearer = HTTPBearer(auto_error=False)


def _load_admin_from_sub(db: Session, sub: str | int | None) -> Optional[AdminUser]:
    try:
        uid = int(sub)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    admin = db.get(AdminUser, uid)
    if not admin or not admin.is_active:
        return None
    return admin


def get_current_admin(
    db: Session = Depends(get_db),
    creds: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
) -> AdminUser:
    if not creds or not creds.credentials:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")
    try:
        payload = decode_token(creds.credentials)
    except ExpiredSignatureError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token expired")
    except JWTError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    if payload.get("type") != "access":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token type")

    admin = _load_admin_from_sub(db, payload.get("sub"))
    if not admin:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found or inactive")
    return admin


def require_superadmin(current_admin: AdminUser = Depends(get_current_admin)) -> AdminUser:
    if not current_admin.is_superadmin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Only superadmin can perform this action")
    return current_admin
