# =============================================================================
# Site config endpoints (list, read, whole-document save, field save, history)
# siteadmin/api/v1/endpoints/site_configs.py
# =============================================================================
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from siteadmin.api.v1.responses import action_response
from siteadmin.core.settings import settings
from siteadmin.db.session import get_db
from siteadmin.deps.auth import get_current_admin, require_superadmin
from siteadmin.models.auth import AdminUser
from siteadmin.schemas.site_config import (
    HistoryEntryOut,
    SiteConfigFieldIn,
    SiteConfigOut,
    SiteConfigSaveIn,
    SiteConfigSummaryOut,
)
from siteadmin.services.admin_actions import (
    update_site_config_action,
    update_site_config_field_action,
)
from siteadmin.services.history_service import list_history
from siteadmin.services.site_config_service import get_site_config, list_site_config_summaries

router = APIRouter()


@router.get("", response_model=List[SiteConfigSummaryOut])
def list_site_configs_endpoint(
    db: Session = Depends(get_db),
    _: AdminUser = Depends(get_current_admin),
):
    return list_site_config_summaries(db)


@router.get("/{key}", response_model=SiteConfigOut)
def get_site_config_endpoint(
    key: str,
    db: Session = Depends(get_db),
    _: AdminUser = Depends(get_current_admin),
):
    value = get_site_config(db, key)
    if value is None:
        raise HTTPException(status_code=404, detail="Config not found")
    return SiteConfigOut(key=key.strip(), value=value)


@router.put("/{key}")
def save_site_config_endpoint(
    key: str,
    body: SiteConfigSaveIn,
    db: Session = Depends(get_db),
    current_admin: AdminUser = Depends(get_current_admin),
):
    state = update_site_config_action(db, current_admin, key=key, payload=body.payload, note=body.note)
    return action_response(state)


@router.put("/{key}/fields/{field}")
def save_site_config_field_endpoint(
    key: str,
    field: str,
    body: SiteConfigFieldIn,
    db: Session = Depends(get_db),
    current_admin: AdminUser = Depends(get_current_admin),
):
    state = update_site_config_field_action(db, current_admin, key=key, field=field, value=body.value)
    return action_response(state)


@router.get("/{key}/history", response_model=List[HistoryEntryOut])
def list_site_config_history_endpoint(
    key: str,
    limit: Optional[int] = Query(default=None, ge=1, le=500),
    db: Session = Depends(get_db),
    _: AdminUser = Depends(require_superadmin),
):
    return list_history(db, key, limit or settings.HISTORY_DEFAULT_LIMIT)
