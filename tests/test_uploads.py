from siteadmin.core.settings import settings

API = settings.API_V1_STR
PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


def test_upload_and_serve_from_database(client, admin_headers):
    r = client.post(
        f"{API}/uploads",
        files={"file": ("logo.png", PNG, "image/png")},
        headers=admin_headers,
    )
    assert r.status_code == 200, r.text
    url = r.json()["url"]
    assert url.startswith(f"{API}/uploads/")

    served = client.get(url)
    assert served.status_code == 200
    assert served.content == PNG
    assert served.headers["content-type"] == "image/png"
    assert "immutable" in served.headers["cache-control"]


def test_rejects_non_images(client, admin_headers):
    r = client.post(
        f"{API}/uploads",
        files={"file": ("notes.txt", b"hello", "text/plain")},
        headers=admin_headers,
    )
    assert r.status_code == 400
    assert r.json() == {"error": "Only image files can be uploaded"}


def test_rejects_large_files(client, admin_headers, monkeypatch):
    monkeypatch.setattr(settings, "UPLOAD_MAX_MB", 1)
    r = client.post(
        f"{API}/uploads",
        files={"file": ("big.png", b"\x00" * (1024 * 1024 + 1), "image/png")},
        headers=admin_headers,
    )
    assert r.status_code == 400
    assert r.json() == {"error": "Image size must not exceed 1MB"}


def test_missing_file(client, admin_headers):
    r = client.post(f"{API}/uploads", headers=admin_headers)
    assert r.status_code == 400
    assert r.json() == {"error": "No file selected"}


def test_unknown_upload_is_404(client):
    assert client.get(f"{API}/uploads/deadbeef").status_code == 404


def test_upload_requires_auth(client):
    r = client.post(f"{API}/uploads", files={"file": ("logo.png", PNG, "image/png")})
    assert r.status_code == 401
