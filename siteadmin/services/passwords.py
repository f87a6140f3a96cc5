# siteadmin/services/passwords.py
from __future__ import annotations

import hmac

from passlib.context import CryptContext

_pwd = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__truncate_error=False,
)


def hash_password(plain: str) -> str:
    return _pwd.hash(plain)


def is_password_hash(stored: str) -> bool:
    return bool(stored) and stored.startswith(("$2a$", "$2b$", "$2y$"))


def verify_password(plain: str, stored: str) -> bool:
    """
    bcrypt hashes are checked with passlib. Anything else is a legacy
    plaintext password from the first deployment, compared in constant time.
    """
    if not stored:
        return False
    if is_password_hash(stored):
        return _pwd.verify(plain, stored)
    return hmac.compare_digest(plain.encode("utf-8"), stored.encode("utf-8"))
