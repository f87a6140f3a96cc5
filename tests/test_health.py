from siteadmin.core.settings import settings


def test_ping(client):
    r = client.get(f"{settings.API_V1_STR}/health/ping")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_db_check(client):
    r = client.get(f"{settings.API_V1_STR}/health/db")
    assert r.status_code == 200
    assert r.json()["database"] == "reachable"
