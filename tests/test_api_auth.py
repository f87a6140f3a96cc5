from siteadmin.core.settings import settings
from siteadmin.models.auth import AdminLoginActivity, AdminUser
from siteadmin.security.jwt import create_refresh_token

API = settings.API_V1_STR


def test_login_me_and_refresh(client, db, admin):
    r = client.post(f"{API}/auth/login", json={"username": "editor", "password": "editor123"})
    assert r.status_code == 200, r.text
    tokens = r.json()
    assert tokens["token_type"] == "bearer"
    assert db.query(AdminLoginActivity).filter_by(username="editor").count() == 1

    me = client.get(f"{API}/auth/me", headers={"Authorization": f"Bearer {tokens['access_token']}"})
    assert me.status_code == 200
    assert me.json()["username"] == "editor"
    assert me.json()["role"] == "admin"
    assert me.json()["last_login_at"] is not None

    r = client.post(f"{API}/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
    assert r.status_code == 200
    assert r.json()["access_token"]


def test_login_wrong_password(client, admin):
    r = client.post(f"{API}/auth/login", json={"username": "editor", "password": "nope"})
    assert r.status_code == 401


def test_legacy_plaintext_password_still_logs_in(client, db):
    db.add(AdminUser(username="legacy", hashed_password="plain-pass", role="superadmin"))
    db.commit()
    r = client.post(f"{API}/auth/login", json={"username": "legacy", "password": "plain-pass"})
    assert r.status_code == 200


def test_inactive_user_is_rejected(client, db, admin):
    admin.is_active = False
    db.commit()
    r = client.post(f"{API}/auth/login", json={"username": "editor", "password": "editor123"})
    assert r.status_code == 403


def test_refresh_token_is_not_an_access_token(client, admin):
    token = create_refresh_token(admin.id)
    r = client.get(f"{API}/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 401


def test_garbage_token(client):
    r = client.get(f"{API}/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401
