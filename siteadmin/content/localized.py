# siteadmin/content/localized.py
"""
Localized values: a mapping locale -> text over SUPPORTED_LOCALES.

Absent locales mean "not configured". Nothing here injects fallback text into
stored data; fallback only happens when reading via ``get_text``.
"""
from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional

from siteadmin.core.errors import ValidationError
from siteadmin.i18n.locales import DEFAULT_LOCALE, SUPPORTED_LOCALES, is_supported_locale

LocalizedValue = dict[str, str]


def is_localized_shape(value: Any) -> bool:
    """
    Structural test used at every tree-walk decision: a dict whose keys are all
    supported locales and whose values are all str or None. ``{}`` qualifies.
    """
    if not isinstance(value, dict):
        return False
    for key, item in value.items():
        if key not in SUPPORTED_LOCALES:
            return False
        if item is not None and not isinstance(item, str):
            return False
    return True


def ensure_localized(raw: Any) -> LocalizedValue:
    """Every supported locale present; non-string or missing entries become ""."""
    source = raw if isinstance(raw, Mapping) else {}
    result: LocalizedValue = {}
    for locale in SUPPORTED_LOCALES:
        item = source.get(locale)
        result[locale] = item if isinstance(item, str) else ""
    return result


def _existing_entries(raw: Any) -> LocalizedValue:
    if not isinstance(raw, Mapping):
        return {}
    return {
        locale: (raw[locale] if isinstance(raw[locale], str) else "")
        for locale in SUPPORTED_LOCALES
        if locale in raw
    }


def get_text(value: Any, locale: str = DEFAULT_LOCALE, fallback: str = "") -> str:
    if isinstance(value, str):
        return value if value.strip() else fallback
    if not isinstance(value, Mapping):
        return fallback

    current = value.get(locale)
    if isinstance(current, str) and current.strip():
        return current
    for candidate in SUPPORTED_LOCALES:
        text = value.get(candidate)
        if isinstance(text, str) and text.strip():
            return text
    return fallback


def set_text(value: Any, locale: str, text: str) -> LocalizedValue:
    if not is_supported_locale(locale):
        raise ValidationError(f"Unsupported locale: {locale}")
    result = _existing_entries(value)
    result[locale] = text
    return result


def serialize_localized(value: Any, preserve_empty: bool = False) -> LocalizedValue:
    result: LocalizedValue = {}
    source = value if isinstance(value, Mapping) else {}
    for locale in SUPPORTED_LOCALES:
        item = source.get(locale)
        text = item.strip() if isinstance(item, str) else ""
        if text or preserve_empty:
            result[locale] = text
    return result


def normalize_localized_field(raw: Any) -> LocalizedValue:
    """Accepts legacy plain strings (stored under the default locale)."""
    if isinstance(raw, str):
        text = raw.strip()
        return {DEFAULT_LOCALE: text} if text else {}
    return serialize_localized(raw)


def missing_locales(raw: Any, required: Optional[Iterable[str]] = None) -> list[str]:
    normalized = normalize_localized_field(raw)
    wanted = list(required) if required is not None else list(SUPPORTED_LOCALES)
    return [locale for locale in wanted if not normalized.get(locale)]
