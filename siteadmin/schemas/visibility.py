# siteadmin/schemas/visibility.py
from __future__ import annotations
from typing import List, Optional

from pydantic import BaseModel, Field


class FieldToggleIn(BaseModel):
    path: str = Field(..., min_length=1)


class FieldsVisibilityIn(BaseModel):
    paths: List[str]
    hidden: bool


class SectionsVisibilityIn(BaseModel):
    sections: List[str]
    hidden: bool


class PathVisibilityOut(BaseModel):
    path: str
    pageKey: Optional[str] = None
    visible: bool
    hiddenSections: List[str] = []
    hiddenFields: List[str] = []
    visibleLocales: List[str] = []
