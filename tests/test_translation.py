import json

import httpx
import pytest

from siteadmin.core.errors import TranslationError, ValidationError
from siteadmin.core.settings import settings
from siteadmin.services.translation_service import (
    clean_entries,
    map_locale,
    resolve_endpoint,
    translate_entries,
)

API = settings.API_V1_STR


@pytest.fixture
def endpoint(monkeypatch):
    monkeypatch.setattr(settings, "TRANSLATION_ENDPOINT", "http://translate.local")
    monkeypatch.setattr(settings, "TRANSLATION_API_KEY", "k-123")
    return "http://translate.local/translate"


def _client(handler):
    return httpx.Client(transport=httpx.MockTransport(handler))


def test_resolve_endpoint(endpoint):
    assert resolve_endpoint() == endpoint


def test_map_locale():
    assert map_locale("zh-TW") == "zh"
    assert map_locale("en-US") == "en"
    assert map_locale("pt_BR") == "pt"
    assert map_locale("") == "auto"


def test_clean_entries_validation():
    with pytest.raises(ValidationError):
        clean_entries([])
    with pytest.raises(ValidationError):
        clean_entries([{"text": "  "}])
    assert clean_entries([{"text": " 你好 "}]) == [{"id": "item-0", "text": "你好"}]


def test_translate_entries_skips_source_locale(endpoint):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(json.loads(request.content))
        return httpx.Response(200, json={"translatedText": " Hello "})

    results = translate_entries(
        source_locale="zh-CN",
        target_locales=["zh-CN", "en"],
        entries=[{"id": "hero.title", "text": "你好"}],
        client=_client(handler),
    )
    assert results == [{"id": "hero.title", "translations": {"en": "Hello"}}]
    assert len(seen) == 1
    assert seen[0] == {"q": "你好", "source": "zh", "target": "en", "format": "text", "api_key": "k-123"}


def test_upstream_error_becomes_translation_error(endpoint):
    client = _client(lambda request: httpx.Response(500, text="down"))
    with pytest.raises(TranslationError) as exc:
        translate_entries(source_locale="zh-CN", target_locales=["en"], entries=[{"text": "x"}], client=client)
    assert exc.value.status_code == 502


def test_not_configured(client, admin_headers, monkeypatch):
    monkeypatch.setattr(settings, "TRANSLATION_ENDPOINT", None)
    r = client.post(
        f"{API}/translations",
        json={"sourceLocale": "zh-CN", "targetLocales": ["en"], "entries": [{"text": "你好"}]},
        headers=admin_headers,
    )
    assert r.status_code == 503
    assert r.json()["code"] == "translation"


def test_translation_endpoint_validation(client, admin_headers, endpoint):
    r = client.post(
        f"{API}/translations",
        json={"sourceLocale": "zh-CN", "targetLocales": [], "entries": [{"text": "你好"}]},
        headers=admin_headers,
    )
    assert r.status_code == 400
    assert r.json()["message"] == "Missing target locales"


def test_status(client, admin_headers, endpoint):
    body = client.get(f"{API}/translations/status", headers=admin_headers).json()
    assert body["configured"] is True
    assert [l["code"] for l in body["locales"]] == ["zh-CN", "zh-TW", "en"]
