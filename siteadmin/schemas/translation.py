# siteadmin/schemas/translation.py
from __future__ import annotations
from typing import Dict, List, Optional

from pydantic import BaseModel

from siteadmin.i18n.locales import DEFAULT_LOCALE


class TranslateEntryIn(BaseModel):
    id: Optional[str] = None
    text: str = ""


class TranslateIn(BaseModel):
    sourceLocale: str = DEFAULT_LOCALE
    targetLocales: List[str] = []
    entries: List[TranslateEntryIn] = []


class TranslateResultOut(BaseModel):
    id: str
    translations: Dict[str, str]


class TranslateOut(BaseModel):
    results: List[TranslateResultOut]
