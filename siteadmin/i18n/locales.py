# siteadmin/i18n/locales.py
from __future__ import annotations

from typing import Optional

# Fixed enumeration order; also the fallback order for localized text.
SUPPORTED_LOCALES: tuple[str, ...] = ("zh-CN", "zh-TW", "en")
DEFAULT_LOCALE = "zh-CN"

LOCALE_LABELS: dict[str, str] = {
    "zh-CN": "简体中文",
    "zh-TW": "繁體中文",
    "en": "English",
}


def is_supported_locale(value: object) -> bool:
    return isinstance(value, str) and value in SUPPORTED_LOCALES


def resolve_locale(value: Optional[str]) -> str:
    """Locale requested at the boundary (query param, header) or the default."""
    if value and value in SUPPORTED_LOCALES:
        return value
    return DEFAULT_LOCALE
