# siteadmin/services/history_service.py
"""
Version history for site configs.

Every save appends one row holding the new value, the previous value and a
structural diff computed at write time. Rows are never updated or deleted.
Restoring a version is itself a save (action="restore"), so the log stays
linear and a restore can be undone by restoring again.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Iterable, List, Literal, Optional
from urllib.parse import quote

from sqlalchemy import select
from sqlalchemy.orm import Session

from siteadmin.content.json_tree import canonical_dumps, deep_copy
from siteadmin.core.errors import NotFoundError, ValidationError
from siteadmin.core.settings import settings
from siteadmin.models.site_config import HistoryAction, SiteConfigHistory

logger = logging.getLogger(__name__)

RestoreMode = Literal["current", "previous"]


@dataclass(frozen=True)
class HistoryActor:
    id: Optional[str] = None
    username: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None

    @classmethod
    def from_admin(cls, admin: Any) -> "HistoryActor":
        role = getattr(admin, "admin_role", None)
        return cls(
            id=str(admin.id) if getattr(admin, "id", None) is not None else None,
            username=getattr(admin, "username", None),
            email=getattr(admin, "email", None),
            role=role.value if role is not None else getattr(admin, "role", None),
        )


# ----------------------------------------------------------------------
# Diff
# ----------------------------------------------------------------------
def _join(prefix: str, key: str) -> str:
    return f"{prefix}.{key}" if prefix else key


def _walk(before: Any, after: Any, path: str, out: list[dict]) -> None:
    if isinstance(before, dict) and isinstance(after, dict):
        for key, old in before.items():
            child = _join(path, key)
            if key not in after:
                out.append({"op": "remove", "path": child, "before": deep_copy(old)})
            else:
                _walk(old, after[key], child, out)
        for key, new in after.items():
            if key not in before:
                out.append({"op": "add", "path": _join(path, key), "after": deep_copy(new)})
        return
    # lists and scalars compare atomically
    if canonical_dumps(before) != canonical_dumps(after):
        out.append({"op": "change", "path": path, "before": deep_copy(before), "after": deep_copy(after)})


def diff_json_values(previous: Any, current: Any) -> list[dict]:
    """
    Structural diff between two JSON values.

    Paths are dot-joined object keys (``"hero.title.en"``). Keys only in
    ``current`` yield ``add``, keys only in ``previous`` yield ``remove``,
    anything else that differs yields ``change``. Lists are never descended
    into. A missing previous value counts as ``{}``. The side that does not
    exist is left out of the entry rather than set to null.
    """
    out: list[dict] = []
    _walk({} if previous is None else previous, current, "", out)
    return out


# ----------------------------------------------------------------------
# Store
# ----------------------------------------------------------------------
def record_history(
    db: Session,
    *,
    key: str,
    value: Any,
    previous_value: Any,
    diff: Optional[list],
    action: str = HistoryAction.UPDATE.value,
    actor: Optional[HistoryActor] = None,
    source_path: Optional[str] = None,
    note: Optional[str] = None,
) -> SiteConfigHistory:
    """Appends a row. No commit; the caller owns the transaction."""
    actor = actor or HistoryActor()
    entry = SiteConfigHistory(
        key=key,
        value=deep_copy(value),
        previous_value=deep_copy(previous_value),
        diff=diff,
        action=action,
        actor_id=actor.id,
        actor_username=actor.username,
        actor_email=actor.email,
        actor_role=actor.role,
        source_path=source_path,
        note=note,
    )
    db.add(entry)
    db.flush()
    return entry


def list_history(db: Session, key: str, limit: Optional[int] = None) -> List[SiteConfigHistory]:
    """Newest first."""
    limit = settings.HISTORY_DEFAULT_LIMIT if limit is None else limit
    return list(
        db.scalars(
            select(SiteConfigHistory)
            .where(SiteConfigHistory.key == key.strip())
            .order_by(SiteConfigHistory.created_at.desc(), SiteConfigHistory.id.desc())
            .limit(max(int(limit), 1))
        )
    )


def list_recent_history(db: Session, limit: Optional[int] = None) -> List[SiteConfigHistory]:
    limit = settings.HISTORY_RECENT_LIMIT if limit is None else limit
    return list(
        db.scalars(
            select(SiteConfigHistory)
            .order_by(SiteConfigHistory.created_at.desc(), SiteConfigHistory.id.desc())
            .limit(max(int(limit), 1))
        )
    )


def get_history_entry(db: Session, entry_id: int) -> Optional[SiteConfigHistory]:
    return db.get(SiteConfigHistory, entry_id)


# ----------------------------------------------------------------------
# Restore
# ----------------------------------------------------------------------
def restore_history_entry(
    db: Session,
    *,
    entry_id: Any,
    mode: RestoreMode,
    actor: Optional[HistoryActor] = None,
) -> SiteConfigHistory:
    """
    mode="current": write back the value the entry saved.
    mode="previous": write back the value the entry replaced.
    Appends a new history row (action="restore"); nothing is appended on error.
    """
    from siteadmin.services.site_config_service import save_site_config, stamp_updated_at  # late import: cycle

    try:
        entry_id = int(entry_id)
    except (TypeError, ValueError):
        raise ValidationError("Invalid history entry id")
    if entry_id <= 0:
        raise ValidationError("Invalid history entry id")
    if mode not in ("current", "previous"):
        raise ValidationError(f"Unknown restore mode: {mode}")

    entry = get_history_entry(db, entry_id)
    if entry is None:
        raise NotFoundError("History record not found")

    target = entry.previous_value if mode == "previous" else entry.value
    if target is None:
        raise NotFoundError("This record has no previous value to restore")
    if not isinstance(target, dict):
        raise ValidationError("This record does not hold a restorable config object")

    if mode == "previous":
        note = f"Restored the value before version #{entry.id}"
    else:
        note = f"Restored version #{entry.id}"

    logger.info("restoring %s from history #%s (mode=%s)", entry.key, entry.id, mode)
    return save_site_config(
        db,
        key=entry.key,
        value=stamp_updated_at(target),
        actor=actor,
        source_path=f"/admin/{quote(entry.key, safe='')}",
        action=HistoryAction.RESTORE.value,
        note=note,
    )


def restore_to_version(db: Session, *, entry_id: Any, actor: Optional[HistoryActor] = None) -> SiteConfigHistory:
    return restore_history_entry(db, entry_id=entry_id, mode="current", actor=actor)


def restore_to_previous(db: Session, *, entry_id: Any, actor: Optional[HistoryActor] = None) -> SiteConfigHistory:
    return restore_history_entry(db, entry_id=entry_id, mode="previous", actor=actor)


# ----------------------------------------------------------------------
# Display helpers
# ----------------------------------------------------------------------
SEGMENT_LABELS: dict[str, str] = {
    "hero": "英雄区",
    "sections": "板块",
    "cards": "卡片",
    "title": "标题",
    "description": "描述",
    "eyebrow": "副标题",
    "image": "图片",
    "links": "链接",
    "groups": "分组",
    "categories": "分类",
    "products": "产品",
    "items": "内容项",
    "metrics": "指标",
    "studies": "案例",
    "gallery": "图片库",
    "breadcrumb": "面包屑",
    "sidebar": "侧边栏",
    "heroButtons": "按钮",
    "footer": "页脚",
    "content": "内容",
    "sectionsMeta": "板块信息",
    "navigationGroups": "导航分组",
    "main": "主分组",
    "utility": "快捷分组",
    "label": "标签",
    "value": "数值",
    "slug": "标识",
    "name": "名称",
    "intro": "简介",
    "summary": "摘要",
    "background": "背景信息",
    "highlights": "亮点",
    "deliverables": "交付内容",
    "metricsLabel": "指标名称",
    "metricsValue": "指标数值",
    "updatedAt": "最近更新",
    "adminPath": "管理路径",
    "schema": "数据结构",
}


def build_readable_path(config_key: str, path: str) -> str:
    if not path:
        return f"{config_key} 整体"
    readable = []
    for segment in path.split("."):
        if segment.isdigit():
            readable.append(f"第 {int(segment) + 1} 项")
        else:
            readable.append(SEGMENT_LABELS.get(segment, segment))
    return " › ".join([config_key, *readable])


_MISSING = object()


def format_diff_value(value: Any = _MISSING) -> str:
    if value is _MISSING:
        return "未设置"
    if isinstance(value, str):
        if len(value) > 120:
            return f"{value[:117]}…"
        return value or "空字符串"
    if value is None:
        return "空"
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def describe_diff(config_key: str, entry: dict) -> str:
    location = build_readable_path(config_key, entry.get("path", ""))
    before = format_diff_value(entry["before"]) if "before" in entry else format_diff_value()
    after = format_diff_value(entry["after"]) if "after" in entry else format_diff_value()
    op = entry.get("op")
    if op == "add":
        return f"在「{location}」新增内容：{after}"
    if op == "remove":
        return f"在「{location}」删除内容，原值为：{before}"
    return f"在「{location}」从「{before}」修改为「{after}」"


def summarize_diff(diff: Optional[Iterable[dict]], limit: Optional[int] = None) -> tuple[list[dict], int]:
    """(entries to show, number omitted)."""
    limit = settings.HISTORY_DIFF_DISPLAY_LIMIT if limit is None else limit
    entries = list(diff or [])
    return entries[:limit], max(len(entries) - limit, 0)
