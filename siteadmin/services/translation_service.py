# siteadmin/services/translation_service.py
"""
Machine translation of localized text through a LibreTranslate endpoint.
Used by the editors to fill in missing locales; results are suggestions and
are never written to a config by this module.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from siteadmin.core.errors import TranslationError, ValidationError
from siteadmin.core.settings import settings

logger = logging.getLogger(__name__)

MAX_ENTRIES = 50
MAX_TEXT_LENGTH = 5000


def resolve_endpoint() -> Optional[str]:
    url = (settings.TRANSLATION_ENDPOINT or "").strip()
    if not url:
        return None
    return url if url.endswith("/translate") else f"{url.rstrip('/')}/translate"


def is_translation_configured() -> bool:
    return resolve_endpoint() is not None


def map_locale(raw: str) -> str:
    value = (raw or "").lower()
    if not value:
        return "auto"
    for prefix in ("zh", "en", "ja", "ko", "de", "fr", "es", "ru", "ar"):
        if value.startswith(prefix):
            return prefix
    return value.replace("_", "-").split("-")[0] or "auto"


def clean_entries(entries: List[Dict[str, Any]]) -> List[Dict[str, str]]:
    if not entries:
        raise ValidationError("Nothing to translate")
    if len(entries) > MAX_ENTRIES:
        raise ValidationError(f"At most {MAX_ENTRIES} entries per request")
    cleaned: List[Dict[str, str]] = []
    for index, entry in enumerate(entries):
        text = entry.get("text")
        if not isinstance(text, str) or not text.strip():
            raise ValidationError(f"Entry {index + 1} is empty")
        if len(text) > MAX_TEXT_LENGTH:
            raise ValidationError(f"Entry {index + 1} exceeds the length limit")
        entry_id = str(entry.get("id") or "").strip() or f"item-{index}"
        cleaned.append({"id": entry_id, "text": text.strip()})
    return cleaned


def translate_entries(
    *,
    source_locale: str,
    target_locales: List[str],
    entries: List[Dict[str, Any]],
    client: Optional[httpx.Client] = None,
) -> List[Dict[str, Any]]:
    """
    Returns ``[{"id": ..., "translations": {locale: text}}]``. The source
    locale is skipped when it also appears among the targets.
    """
    endpoint = resolve_endpoint()
    if endpoint is None:
        raise TranslationError("No translation service is configured", status_code=503)

    targets = [t.strip() for t in target_locales if t and t.strip()]
    if not targets:
        raise ValidationError("Missing target locales")
    cleaned = clean_entries(entries)

    own_client = client is None
    http = client or httpx.Client(timeout=settings.TRANSLATION_TIMEOUT_SECONDS)
    results: List[Dict[str, Any]] = []
    try:
        for entry in cleaned:
            translations: Dict[str, str] = {}
            for target in targets:
                if target == source_locale:
                    continue
                body = {
                    "q": entry["text"],
                    "source": map_locale(source_locale),
                    "target": map_locale(target),
                    "format": "text",
                }
                if settings.TRANSLATION_API_KEY:
                    body["api_key"] = settings.TRANSLATION_API_KEY
                resp = http.post(endpoint, json=body)
                if resp.status_code >= 400:
                    raise TranslationError(
                        "Translation service call failed", status_code=502, details=resp.text[:500]
                    )
                translations[target] = str(resp.json().get("translatedText") or "").strip()
            results.append({"id": entry["id"], "translations": translations})
    except httpx.TimeoutException:
        raise TranslationError("Translation request timed out", status_code=504)
    except httpx.HTTPError as exc:
        logger.warning("translation request failed: %s", exc)
        raise TranslationError("Translation service call failed", status_code=502)
    finally:
        if own_client:
            http.close()
    return results
