from siteadmin.core.settings import settings

API = settings.API_V1_STR


def test_toggle_home_twice(client, superadmin_headers):
    r = client.post(f"{API}/visibility/pages/home/toggle", headers=superadmin_headers)
    assert r.status_code == 200, r.text
    cfg = client.get(f"{API}/visibility", headers=superadmin_headers).json()
    assert cfg["pages"]["home"]["hidden"] is True

    client.post(f"{API}/visibility/pages/home/toggle", headers=superadmin_headers)
    cfg = client.get(f"{API}/visibility", headers=superadmin_headers).json()
    assert cfg["pages"]["home"]["hidden"] is False
    assert cfg["_meta"]["schema"] == "visibility.v1"


def test_toggles_are_superadmin_only(client, admin_headers):
    r = client.post(f"{API}/visibility/pages/home/toggle", headers=admin_headers)
    assert r.status_code == 403


def test_unknown_page_or_section(client, superadmin_headers):
    r = client.post(f"{API}/visibility/pages/nope/toggle", headers=superadmin_headers)
    assert r.status_code == 404
    assert r.json()["code"] == "not_found"

    r = client.post(f"{API}/visibility/pages/home/sections/nope/toggle", headers=superadmin_headers)
    assert r.status_code == 404


def test_section_and_field_toggles_feed_path_resolution(client, superadmin_headers):
    client.post(f"{API}/visibility/pages/home/sections/hero/toggle", headers=superadmin_headers)
    client.post(f"{API}/visibility/pages/home/fields/toggle", json={"path": "hero.title"}, headers=superadmin_headers)
    client.post(
        f"{API}/visibility/pages/home/fields",
        json={"paths": ["company.cards[]", "inventory.items[]"], "hidden": True},
        headers=superadmin_headers,
    )

    # public endpoint, no auth header
    r = client.get(f"{API}/visibility/resolve", params={"path": "/"})
    assert r.status_code == 200
    body = r.json()
    assert body["pageKey"] == "home"
    assert body["visible"] is True
    assert body["hiddenSections"] == ["hero"]
    assert body["hiddenFields"] == ["company.cards[]", "hero.title", "inventory.items[]"]


def test_bulk_sections(client, superadmin_headers):
    r = client.post(
        f"{API}/visibility/pages/about/sections",
        json={"sections": ["team", "honors"], "hidden": True},
        headers=superadmin_headers,
    )
    assert r.status_code == 200
    sections = client.get(f"{API}/visibility", headers=superadmin_headers).json()["pages"]["about"]["sections"]
    assert sections["team"] is True
    assert sections["honors"] is True
    assert sections["hero"] is False


def test_resolve_unknown_path_is_visible(client):
    body = client.get(f"{API}/visibility/resolve", params={"path": "/nowhere/at/all"}).json()
    assert body["pageKey"] is None
    assert body["visible"] is True


def test_hidden_page_resolves_invisible(client, superadmin_headers):
    client.post(f"{API}/visibility/pages/productDetail/toggle", headers=superadmin_headers)
    body = client.get(f"{API}/visibility/resolve", params={"path": "/products/pump"}).json()
    assert body["pageKey"] == "productDetail"
    assert body["visible"] is False


def test_field_dictionary_and_section_fields(client, superadmin_headers):
    client.put(
        f"{API}/site-configs/%E9%A6%96%E9%A1%B5",
        json={"payload": '{"hero": {"title": "x", "cta": {"enabled": true}}}'},
        headers=superadmin_headers,
    )
    dictionary = client.get(f"{API}/visibility/fields", headers=superadmin_headers).json()
    assert "首页" in dictionary
    assert "页面可见性" not in dictionary

    grouped = client.get(
        f"{API}/visibility/pages/home/sections/hero/fields", headers=superadmin_headers
    ).json()
    assert grouped["copy"] == ["hero.title"]
    assert grouped["button"] == ["hero.cta.enabled"]


def test_page_catalogue(client, admin_headers):
    pages = client.get(f"{API}/visibility/pages", headers=admin_headers).json()
    home = next(p for p in pages if p["key"] == "home")
    assert home["route"] == "/"
    assert [s["key"] for s in home["sections"]][0] == "hero"
