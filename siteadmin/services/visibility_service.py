# siteadmin/services/visibility_service.py
from __future__ import annotations

from typing import Callable, Iterable, Optional

from sqlalchemy.orm import Session

from siteadmin.core.errors import NotFoundError, ValidationError
from siteadmin.models.auth import AdminUser
from siteadmin.schemas.actions import ActionState
from siteadmin.services.admin_actions import admin_source_path, ensure_superadmin, run_action
from siteadmin.services.history_service import HistoryActor
from siteadmin.services.site_config_service import (
    get_site_config_raw,
    list_site_configs,
    save_site_config,
    stamp_updated_at,
)
from siteadmin.visibility import model
from siteadmin.visibility.fields import (
    FieldEntry,
    build_field_dictionary,
    fields_for_page,
    section_category_paths,
)
from siteadmin.visibility.pages import (
    VISIBILITY_CONFIG_KEY,
    VISIBILITY_SCHEMA_ID,
    get_page,
)

Mutation = Callable[[model.VisibilityConfig], model.VisibilityConfig]


def get_visibility_config(db: Session) -> model.VisibilityConfig:
    return model.load_visibility_config(get_site_config_raw(db, VISIBILITY_CONFIG_KEY))


def resolve_path_visibility(db: Session, path: str) -> dict:
    cfg = get_visibility_config(db)
    page_key = model.resolve_page_key_from_path(path)
    return {
        "path": path,
        "pageKey": page_key,
        "visible": True if page_key is None else model.is_visible(cfg, page_key),
        "hiddenSections": sorted(k for k, v in model.hidden_sections(cfg, page_key).items() if v) if page_key else [],
        "hiddenFields": sorted(k for k, v in model.hidden_fields(cfg, page_key).items() if v) if page_key else [],
        "visibleLocales": model.visible_locales(cfg),
    }


def _require_page(page_key: str) -> None:
    if get_page(page_key) is None:
        raise NotFoundError(f"Unknown page: {page_key}")


def _require_section(page_key: str, section_key: str) -> None:
    page = get_page(page_key)
    if page is None:
        raise NotFoundError(f"Unknown page: {page_key}")
    if section_key not in page.section_keys:
        raise NotFoundError(f"Unknown section: {page_key}.{section_key}")


def save_visibility_config(
    db: Session,
    admin: AdminUser,
    cfg: model.VisibilityConfig,
    *,
    note: Optional[str] = None,
) -> None:
    ensure_superadmin(admin)
    save_site_config(
        db,
        key=VISIBILITY_CONFIG_KEY,
        value=stamp_updated_at(cfg.to_json(), schema=VISIBILITY_SCHEMA_ID),
        actor=HistoryActor.from_admin(admin),
        source_path=admin_source_path(VISIBILITY_CONFIG_KEY),
        note=note,
    )


def apply_visibility_change(
    db: Session,
    admin: AdminUser,
    mutate: Mutation,
    *,
    note: Optional[str] = None,
    validate: Optional[Callable[[], None]] = None,
) -> ActionState:
    def _apply() -> None:
        ensure_superadmin(admin)
        if validate is not None:
            validate()
        cfg = mutate(get_visibility_config(db))
        save_visibility_config(db, admin, cfg, note=note)

    return run_action(db, _apply, "Visibility saved")


def toggle_page_action(db: Session, admin: AdminUser, page_key: str) -> ActionState:
    return apply_visibility_change(
        db, admin,
        lambda cfg: model.toggle_page(cfg, page_key),
        validate=lambda: _require_page(page_key),
    )


def toggle_section_action(db: Session, admin: AdminUser, page_key: str, section_key: str) -> ActionState:
    return apply_visibility_change(
        db, admin,
        lambda cfg: model.toggle_section(cfg, page_key, section_key),
        validate=lambda: _require_section(page_key, section_key),
    )


def toggle_field_action(db: Session, admin: AdminUser, page_key: str, field_path: str) -> ActionState:
    def _validate() -> None:
        _require_page(page_key)
        if not (field_path or "").strip():
            raise ValidationError("Field path must not be empty")

    return apply_visibility_change(
        db, admin,
        lambda cfg: model.toggle_field(cfg, page_key, field_path.strip()),
        validate=_validate,
    )


def set_fields_visibility_action(
    db: Session, admin: AdminUser, page_key: str, paths: Iterable[str], hidden: bool
) -> ActionState:
    cleaned = [p.strip() for p in paths if p and p.strip()]
    return apply_visibility_change(
        db, admin,
        lambda cfg: model.set_fields_visibility(cfg, page_key, cleaned, hidden),
        validate=lambda: _require_page(page_key),
    )


def set_sections_visibility_action(
    db: Session, admin: AdminUser, page_key: str, section_keys: Iterable[str], hidden: bool
) -> ActionState:
    keys = list(section_keys)

    def _validate() -> None:
        for key in keys:
            _require_section(page_key, key)

    return apply_visibility_change(
        db, admin,
        lambda cfg: model.set_sections_visibility(cfg, page_key, keys, hidden),
        validate=_validate,
    )


def get_field_dictionary(db: Session) -> dict[str, list[FieldEntry]]:
    return build_field_dictionary(list_site_configs(db))


def get_section_fields(db: Session, page_key: str, section_key: str) -> dict[str, list[str]]:
    _require_section(page_key, section_key)
    return section_category_paths(fields_for_page(get_field_dictionary(db), page_key), section_key)
