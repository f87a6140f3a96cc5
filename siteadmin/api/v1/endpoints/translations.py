# siteadmin/api/v1/endpoints/translations.py
from __future__ import annotations

from fastapi import APIRouter, Depends

from siteadmin.deps.auth import get_current_admin
from siteadmin.i18n.locales import LOCALE_LABELS, SUPPORTED_LOCALES
from siteadmin.models.auth import AdminUser
from siteadmin.schemas.translation import TranslateIn, TranslateOut
from siteadmin.services.translation_service import is_translation_configured, translate_entries

router = APIRouter()


@router.get("/status")
def translation_status_endpoint(_: AdminUser = Depends(get_current_admin)):
    return {
        "configured": is_translation_configured(),
        "locales": [{"code": code, "label": LOCALE_LABELS[code]} for code in SUPPORTED_LOCALES],
    }


@router.post("", response_model=TranslateOut)
def translate_endpoint(body: TranslateIn, _: AdminUser = Depends(get_current_admin)):
    # TranslationError / ValidationError are mapped by the app-level handler
    results = translate_entries(
        source_locale=body.sourceLocale.strip(),
        target_locales=body.targetLocales,
        entries=[e.model_dump() for e in body.entries],
    )
    return TranslateOut(results=results)
