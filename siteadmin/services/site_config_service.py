# siteadmin/services/site_config_service.py
from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from siteadmin.content.json_tree import deep_copy, normalize_json
from siteadmin.content.localized import get_text
from siteadmin.content.structured_editor import utc_now_iso
from siteadmin.core.errors import ValidationError
from siteadmin.i18n.locales import DEFAULT_LOCALE
from siteadmin.models.site_config import HistoryAction, SiteConfig, SiteConfigHistory
from siteadmin.services.history_service import HistoryActor, diff_json_values, record_history
from siteadmin.utils.payload_guard import enforce_config_size
from siteadmin.visibility.model import create_default_visibility_config
from siteadmin.visibility.pages import VISIBILITY_CONFIG_KEY

logger = logging.getLogger(__name__)


def normalize_key(key: Any) -> str:
    if not isinstance(key, str) or not key.strip():
        raise ValidationError("Invalid config key")
    return key.strip()


def parse_payload(payload: Any) -> dict:
    """JSON text from the editor -> config object."""
    if not isinstance(payload, str):
        raise ValidationError("Missing config payload")
    try:
        parsed = json.loads(payload)
    except ValueError:
        raise ValidationError("Failed to parse JSON, please check the format")
    if not isinstance(parsed, dict):
        raise ValidationError("Config payload must be a JSON object")
    return parsed


def stamp_updated_at(value: Dict[str, Any], *, schema: Optional[str] = None) -> Dict[str, Any]:
    """Copy of ``value`` with ``_meta.updatedAt`` refreshed (and ``_meta.schema`` forced if given)."""
    result = deep_copy(value)
    current = result.get("_meta")
    meta = dict(current) if isinstance(current, dict) else {}
    meta["updatedAt"] = utc_now_iso()
    if schema:
        meta["schema"] = schema
    result["_meta"] = meta
    return result


def get_site_config_raw(db: Session, key: str) -> Optional[Dict[str, Any]]:
    row = db.get(SiteConfig, key.strip())
    return deep_copy(row.value) if row is not None else None


def get_site_config(db: Session, key: str) -> Optional[Dict[str, Any]]:
    """Like the raw read, but the visibility key always has a value (the defaults)."""
    value = get_site_config_raw(db, key)
    if value is None and key.strip() == VISIBILITY_CONFIG_KEY:
        return create_default_visibility_config().to_json()
    return value


def list_site_configs(db: Session) -> Dict[str, Dict[str, Any]]:
    rows = db.scalars(select(SiteConfig).order_by(SiteConfig.key.asc()))
    return {row.key: deep_copy(row.value) for row in rows}


def _summary_title(value: Any) -> Optional[str]:
    if not isinstance(value, dict):
        return None
    hero = value.get("hero")
    if not isinstance(hero, dict) or "title" not in hero:
        return None
    return get_text(hero["title"], DEFAULT_LOCALE) or None


def _summary(key: str, value: Any, title: Optional[str] = None) -> Dict[str, Any]:
    meta = value.get("_meta") if isinstance(value, dict) else None
    meta = meta if isinstance(meta, dict) else {}
    return {
        "key": key,
        "title": title if title is not None else _summary_title(value),
        "updatedAt": meta.get("updatedAt") if isinstance(meta.get("updatedAt"), str) else None,
        "adminPath": meta.get("adminPath") if isinstance(meta.get("adminPath"), str) else None,
    }


def list_site_config_summaries(db: Session) -> List[Dict[str, Any]]:
    """One row per stored config; the visibility config is always listed."""
    summaries = [_summary(key, value) for key, value in list_site_configs(db).items()]
    if not any(s["key"] == VISIBILITY_CONFIG_KEY for s in summaries):
        fallback = create_default_visibility_config().to_json()
        summaries.append(_summary(VISIBILITY_CONFIG_KEY, fallback, title=VISIBILITY_CONFIG_KEY))
    return summaries


def save_site_config(
    db: Session,
    *,
    key: str,
    value: Any,
    actor: Optional[HistoryActor] = None,
    source_path: Optional[str] = None,
    action: str = HistoryAction.UPDATE.value,
    note: Optional[str] = None,
    skip_history: bool = False,
) -> Optional[SiteConfigHistory]:
    """
    Upsert the whole blob for ``key`` and append a history row in the same
    transaction. No commit here; the caller commits or rolls back.

    Returns the history row, or None when none was written (``skip_history``
    or an update identical to what is stored).
    """
    key = normalize_key(key)
    if not isinstance(value, dict):
        raise ValidationError("Config value must be a JSON object")
    try:
        value = normalize_json(value)
    except (TypeError, ValueError):
        raise ValidationError("Config value is not serializable as JSON")
    enforce_config_size(value)

    row = db.get(SiteConfig, key)
    previous = deep_copy(row.value) if row is not None else None

    if row is None:
        row = SiteConfig(key=key, value=value)
        db.add(row)
    else:
        row.value = value
    db.flush()

    if skip_history:
        return None

    diff = diff_json_values(previous, value)
    if not diff and previous is not None and action == HistoryAction.UPDATE.value:
        logger.debug("config %s unchanged; no history entry", key)
        return None

    entry = record_history(
        db,
        key=key,
        value=value,
        previous_value=previous,
        diff=diff,
        action=action,
        actor=actor,
        source_path=source_path,
        note=note,
    )
    logger.info(
        "config %s saved (action=%s, changes=%d, actor=%s)",
        key, action, len(diff), actor.username if actor else None,
    )
    return entry
