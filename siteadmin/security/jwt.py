# siteadmin/security/jwt.py
from __future__ import annotations
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from jose import jwt
from siteadmin.core.settings import settings

ALGO   = settings.JWT_ALGORITHM or "HS256"
SECRET = settings.JWT_SECRET_KEY or "dev-secret"
ACCESS_MIN  = settings.ACCESS_MIN
REFRESH_MIN = settings.REFRESH_MIN

def _utcnow() -> datetime:
    return datetime.now(timezone.utc)

def _exp_ts(minutes: int) -> int:
    # exp as an integer UNIX timestamp (seconds)
    return int((_utcnow() + timedelta(minutes=minutes)).timestamp())

def _iat_ts() -> int:
    return int(_utcnow().timestamp())

def _encode(subject: int | str, token_type: str, minutes: int, extra: Dict[str, Any] | None) -> str:
    payload: Dict[str, Any] = {
        "sub": str(subject),
        "type": token_type,
        "iat": _iat_ts(),
        "exp": _exp_ts(minutes),
    }
    if extra:
        payload.update(extra)
    return jwt.encode(payload, SECRET, algorithm=ALGO)

def create_access_token(subject: int | str, extra: Dict[str, Any] | None = None) -> str:
    return _encode(subject, "access", ACCESS_MIN, extra)

def create_refresh_token(subject: int | str, extra: Dict[str, Any] | None = None) -> str:
    return _encode(subject, "refresh", REFRESH_MIN, extra)

def decode_token(token: str) -> Dict[str, Any]:
    """Raises jose.JWTError (ExpiredSignatureError included); the caller answers 401."""
    return jwt.decode(
        token,
        SECRET,
        algorithms=[ALGO],
        options={"verify_aud": False, "verify_iss": False},
    )
