# siteadmin/api/v1/endpoints/history.py
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from siteadmin.api.v1.responses import action_response
from siteadmin.db.session import get_db
from siteadmin.deps.auth import require_superadmin
from siteadmin.models.auth import AdminUser
from siteadmin.schemas.site_config import (
    DiffLineOut,
    HistoryEntryDetailOut,
    HistoryEntryOut,
    RestoreIn,
)
from siteadmin.services.admin_actions import restore_site_config_version_action
from siteadmin.services.history_service import (
    describe_diff,
    get_history_entry,
    list_recent_history,
    summarize_diff,
)

router = APIRouter()


@router.get("/recent", response_model=List[HistoryEntryOut])
def recent_history_endpoint(
    limit: Optional[int] = Query(default=None, ge=1, le=500),
    db: Session = Depends(get_db),
    _: AdminUser = Depends(require_superadmin),
):
    return list_recent_history(db, limit)


@router.get("/{entry_id}", response_model=HistoryEntryDetailOut)
def get_history_entry_endpoint(
    entry_id: int,
    db: Session = Depends(get_db),
    _: AdminUser = Depends(require_superadmin),
):
    entry = get_history_entry(db, entry_id)
    if not entry:
        raise HTTPException(status_code=404, detail="History record not found")

    shown, omitted = summarize_diff(entry.diff)
    out = HistoryEntryDetailOut.model_validate(entry)
    out.changes = [
        DiffLineOut(op=d.get("op", ""), path=d.get("path", ""), message=describe_diff(entry.key, d))
        for d in shown
    ]
    out.omitted = omitted
    return out


@router.post("/{entry_id}/restore")
def restore_history_entry_endpoint(
    entry_id: int,
    body: Optional[RestoreIn] = None,
    db: Session = Depends(get_db),
    current_admin: AdminUser = Depends(require_superadmin),
):
    state = restore_site_config_version_action(db, current_admin, history_id=entry_id, mode=body.mode if body else "current")
    return action_response(state)
