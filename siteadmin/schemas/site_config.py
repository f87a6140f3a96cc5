# siteadmin/schemas/site_config.py
# Pydantic: requests/responses for site configs and their history
from __future__ import annotations
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class SiteConfigSummaryOut(BaseModel):
    key: str
    title: Optional[str] = None
    updatedAt: Optional[str] = None
    adminPath: Optional[str] = None


class SiteConfigOut(BaseModel):
    key: str
    value: Dict[str, Any]


class SiteConfigSaveIn(BaseModel):
    # serialized JSON object, exactly as the editor submits it
    payload: Optional[str] = None
    note: Optional[str] = Field(None, max_length=500)


class SiteConfigFieldIn(BaseModel):
    value: Any = None


class HistoryEntryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    key: str
    action: str
    value: Any
    previous_value: Any = None
    diff: Optional[List[Dict[str, Any]]] = None
    actor_id: Optional[str] = None
    actor_username: Optional[str] = None
    actor_email: Optional[str] = None
    actor_role: Optional[str] = None
    source_path: Optional[str] = None
    note: Optional[str] = None
    created_at: datetime


class DiffLineOut(BaseModel):
    op: str
    path: str
    message: str


class HistoryEntryDetailOut(HistoryEntryOut):
    changes: List[DiffLineOut] = []
    omitted: int = 0


class RestoreIn(BaseModel):
    mode: Literal["current", "previous"] = "current"
