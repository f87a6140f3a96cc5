# siteadmin/services/admin_actions.py
"""
Action boundary for admin mutations.

Each action validates, authorizes, runs the service call, commits, and
reports an ``ActionState``. Service errors become ``status="error"`` with the
error's message; anything unexpected is logged and reported as a generic
persistence failure. Nothing raises past this module.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Optional
from urllib.parse import quote

from sqlalchemy.orm import Session

from siteadmin.content.structured_editor import StructuredConfigEditor
from siteadmin.core.errors import (
    AuthorizationError,
    PersistenceError,
    SiteAdminError,
    ValidationError,
)
from siteadmin.models.auth import AdminUser
from siteadmin.schemas.actions import ActionState
from siteadmin.services import auth_service
from siteadmin.services.history_service import HistoryActor, restore_history_entry
from siteadmin.services.site_config_service import (
    get_site_config_raw,
    normalize_key,
    parse_payload,
    save_site_config,
    stamp_updated_at,
)
from siteadmin.visibility.pages import VISIBILITY_CONFIG_KEY, VISIBILITY_SCHEMA_ID

logger = logging.getLogger(__name__)

SAVE_OK = "Saved"
RESTORE_OK = "Restored the selected history version"


def admin_source_path(key: str) -> str:
    return f"/admin/{quote(key, safe='')}"


def ensure_superadmin(admin: AdminUser) -> None:
    if not admin.is_superadmin:
        raise AuthorizationError("Only superadmin can modify this config")


def _guard(db: Session, operation: Callable[[], Any]) -> tuple[Any, Optional[ActionState]]:
    """(result, None) on success, (None, error state) after a rollback otherwise."""
    try:
        return operation(), None
    except SiteAdminError as exc:
        db.rollback()
        return None, ActionState.failure(exc)
    except Exception:
        db.rollback()
        logger.exception("admin action failed")
        return None, ActionState.failure(PersistenceError())


def run_action(db: Session, operation: Callable[[], Any], success_message: str) -> ActionState:
    def _apply_and_commit() -> None:
        operation()
        db.commit()

    _, failure = _guard(db, _apply_and_commit)
    return failure or ActionState.success(success_message)


def update_site_config_action(
    db: Session,
    admin: AdminUser,
    *,
    key: Any,
    payload: Any,
    note: Optional[str] = None,
) -> ActionState:
    """Whole-document save from a serialized JSON payload."""

    def _save() -> None:
        trimmed = normalize_key(key)
        parsed = parse_payload(payload)
        if trimmed == VISIBILITY_CONFIG_KEY:
            ensure_superadmin(admin)
        schema = VISIBILITY_SCHEMA_ID if trimmed == VISIBILITY_CONFIG_KEY else None
        save_site_config(
            db,
            key=trimmed,
            value=stamp_updated_at(parsed, schema=schema),
            actor=HistoryActor.from_admin(admin),
            source_path=admin_source_path(trimmed),
            note=note,
        )

    return run_action(db, _save, SAVE_OK)


def update_site_config_field_action(
    db: Session,
    admin: AdminUser,
    *,
    key: Any,
    field: str,
    value: Any,
) -> ActionState:
    """Field-dialog save: replaces one top-level field and submits the whole document."""

    def _open_editor() -> StructuredConfigEditor:
        trimmed = normalize_key(key)
        field_name = (field or "").strip()
        if not field_name:
            raise ValidationError("Field name must not be empty")
        editor = StructuredConfigEditor(
            trimmed,
            get_site_config_raw(db, trimmed) or {},
            default_meta={"adminPath": admin_source_path(trimmed)},
        )
        dialog = editor.open_field(field_name)
        dialog.draft = value
        dialog.save()
        return editor

    editor, failure = _guard(db, _open_editor)
    if failure is not None:
        return failure
    return editor.save(lambda k, body: update_site_config_action(db, admin, key=k, payload=body))


def restore_site_config_version_action(
    db: Session,
    admin: AdminUser,
    *,
    history_id: Any,
    mode: str = "current",
) -> ActionState:
    def _restore() -> None:
        ensure_superadmin(admin)
        restore_history_entry(
            db,
            entry_id=history_id,
            mode=mode,  # type: ignore[arg-type]
            actor=HistoryActor.from_admin(admin),
        )

    return run_action(db, _restore, RESTORE_OK)


# ----------------------------------------------------------------------
# Admin users (superadmin only)
# ----------------------------------------------------------------------
def create_admin_user_action(
    db: Session,
    admin: AdminUser,
    *,
    username: str,
    password: str,
    role: str = "admin",
) -> ActionState:
    def _create() -> None:
        ensure_superadmin(admin)
        auth_service.create_admin_user(db, username=username, password=password, role=role)

    return run_action(db, _create, "Admin user created")


def reset_admin_password_action(db: Session, admin: AdminUser, *, username: str, password: str) -> ActionState:
    def _reset() -> None:
        ensure_superadmin(admin)
        auth_service.reset_admin_password(db, username=username, password=password)

    return run_action(db, _reset, "Password updated")


def set_admin_active_action(db: Session, admin: AdminUser, *, username: str, active: bool) -> ActionState:
    def _set_active() -> None:
        ensure_superadmin(admin)
        if not active and (username or "").strip() == admin.username:
            raise ValidationError("You cannot deactivate your own account")
        auth_service.set_admin_active(db, username=username, active=active)

    return run_action(db, _set_active, "Account enabled" if active else "Account disabled")


def rename_admin_user_action(db: Session, admin: AdminUser, *, username: str, new_username: str) -> ActionState:
    def _rename() -> None:
        ensure_superadmin(admin)
        auth_service.rename_admin_user(db, username=username, new_username=new_username)

    return run_action(db, _rename, "Username updated")
