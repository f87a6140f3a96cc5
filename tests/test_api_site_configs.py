from urllib.parse import quote

from siteadmin.core.settings import settings

API = settings.API_V1_STR


def _url(key: str) -> str:
    return f"{API}/site-configs/{quote(key, safe='')}"


def test_requires_authentication(client):
    assert client.get(f"{API}/site-configs").status_code == 401


def test_save_read_and_list(client, admin_headers):
    r = client.put(_url("测试"), json={"payload": '{"a": 1}'}, headers=admin_headers)
    assert r.status_code == 200, r.text
    assert r.json() == {"status": "success", "message": "Saved"}

    r = client.get(_url("测试"), headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["key"] == "测试"
    assert r.json()["value"]["a"] == 1

    keys = [s["key"] for s in client.get(f"{API}/site-configs", headers=admin_headers).json()]
    assert "测试" in keys
    assert "页面可见性" in keys


def test_missing_config_is_404(client, admin_headers):
    assert client.get(_url("不存在"), headers=admin_headers).status_code == 404


def test_bad_payload_is_400(client, admin_headers):
    r = client.put(_url("测试"), json={"payload": "{nope"}, headers=admin_headers)
    assert r.status_code == 400
    assert r.json()["status"] == "error"
    assert r.json()["code"] == "validation"


def test_history_end_to_end(client, admin_headers, superadmin_headers):
    client.put(_url("测试"), json={"payload": '{"a": 1}'}, headers=admin_headers)
    client.put(_url("测试"), json={"payload": '{"a": 2}'}, headers=admin_headers)

    # history is superadmin only
    assert client.get(f"{_url('测试')}/history", headers=admin_headers).status_code == 403

    r = client.get(f"{_url('测试')}/history", headers=superadmin_headers)
    assert r.status_code == 200
    history = r.json()
    assert len(history) == 2
    newest, first = history
    assert first["previous_value"] is None
    assert {"op": "add", "path": "a", "after": 1} in first["diff"]
    assert {"op": "change", "path": "a", "before": 1, "after": 2} in newest["diff"]


def test_field_endpoint(client, admin_headers):
    client.put(_url("测试"), json={"payload": '{"hero": {"title": "x"}}'}, headers=admin_headers)
    r = client.put(f"{_url('测试')}/fields/hero", json={"value": {"title": "y"}}, headers=admin_headers)
    assert r.status_code == 200, r.text
    assert client.get(_url("测试"), headers=admin_headers).json()["value"]["hero"] == {"title": "y"}
