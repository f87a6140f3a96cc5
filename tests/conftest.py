# tests/conftest.py
from __future__ import annotations

import os

# in-memory database for the whole test run; must be set before siteadmin imports settings
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

import siteadmin.models  # noqa: F401  (populate metadata)
from siteadmin.db.base import Base
from siteadmin.db.session import SessionLocal, engine, get_db
from siteadmin.models.auth import AdminRole, AdminUser
from siteadmin.security.jwt import create_access_token
from siteadmin.services.auth_service import create_admin_user


@pytest.fixture(scope="function")
def db() -> Session:
    """
    Fresh schema per test. Actions commit, so isolation comes from
    recreating the tables rather than from an outer transaction.
    """
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session):
    from siteadmin.main import app  # late import to avoid cycles

    def _get_db():
        yield db

    app.dependency_overrides[get_db] = _get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_db, None)


@pytest.fixture
def admin(db: Session) -> AdminUser:
    user = create_admin_user(db, username="editor", password="editor123", role=AdminRole.admin)
    db.commit()
    return user


@pytest.fixture
def superadmin(db: Session) -> AdminUser:
    user = create_admin_user(db, username="root", password="root123", role=AdminRole.superadmin)
    db.commit()
    return user


def auth_headers(user: AdminUser) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture
def admin_headers(admin: AdminUser) -> dict:
    return auth_headers(admin)


@pytest.fixture
def superadmin_headers(superadmin: AdminUser) -> dict:
    return auth_headers(superadmin)
