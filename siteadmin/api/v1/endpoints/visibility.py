# siteadmin/api/v1/endpoints/visibility.py
from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from siteadmin.api.v1.responses import action_response
from siteadmin.db.session import get_db
from siteadmin.deps.auth import get_current_admin, require_superadmin
from siteadmin.models.auth import AdminUser
from siteadmin.schemas.visibility import (
    FieldsVisibilityIn,
    FieldToggleIn,
    PathVisibilityOut,
    SectionsVisibilityIn,
)
from siteadmin.services import visibility_service
from siteadmin.visibility.pages import VISIBILITY_PAGES

router = APIRouter()


@router.get("")
def get_visibility_endpoint(
    db: Session = Depends(get_db),
    _: AdminUser = Depends(get_current_admin),
):
    return visibility_service.get_visibility_config(db).to_json()


@router.get("/pages")
def list_visibility_pages_endpoint(_: AdminUser = Depends(get_current_admin)):
    return [
        {
            "key": page.key,
            "label": page.label,
            "route": page.route,
            "routePrefix": page.route_prefix,
            "segmentDepth": page.segment_depth,
            "sections": [{"key": s.key, "label": s.label} for s in page.sections],
        }
        for page in VISIBILITY_PAGES
    ]


@router.get("/resolve", response_model=PathVisibilityOut)
def resolve_path_endpoint(path: str = Query(..., min_length=1), db: Session = Depends(get_db)):
    # public: the site asks whether a route may render
    return visibility_service.resolve_path_visibility(db, path)


@router.get("/fields")
def field_dictionary_endpoint(
    db: Session = Depends(get_db),
    _: AdminUser = Depends(require_superadmin),
):
    return visibility_service.get_field_dictionary(db)


@router.get("/pages/{page_key}/sections/{section_key}/fields")
def section_fields_endpoint(
    page_key: str,
    section_key: str,
    db: Session = Depends(get_db),
    _: AdminUser = Depends(require_superadmin),
):
    return visibility_service.get_section_fields(db, page_key, section_key)


@router.post("/pages/{page_key}/toggle")
def toggle_page_endpoint(
    page_key: str,
    db: Session = Depends(get_db),
    current_admin: AdminUser = Depends(require_superadmin),
):
    return action_response(visibility_service.toggle_page_action(db, current_admin, page_key))


@router.post("/pages/{page_key}/sections/{section_key}/toggle")
def toggle_section_endpoint(
    page_key: str,
    section_key: str,
    db: Session = Depends(get_db),
    current_admin: AdminUser = Depends(require_superadmin),
):
    return action_response(visibility_service.toggle_section_action(db, current_admin, page_key, section_key))


@router.post("/pages/{page_key}/sections")
def set_sections_endpoint(
    page_key: str,
    body: SectionsVisibilityIn,
    db: Session = Depends(get_db),
    current_admin: AdminUser = Depends(require_superadmin),
):
    state = visibility_service.set_sections_visibility_action(db, current_admin, page_key, body.sections, body.hidden)
    return action_response(state)


@router.post("/pages/{page_key}/fields/toggle")
def toggle_field_endpoint(
    page_key: str,
    body: FieldToggleIn,
    db: Session = Depends(get_db),
    current_admin: AdminUser = Depends(require_superadmin),
):
    return action_response(visibility_service.toggle_field_action(db, current_admin, page_key, body.path))


@router.post("/pages/{page_key}/fields")
def set_fields_endpoint(
    page_key: str,
    body: FieldsVisibilityIn,
    db: Session = Depends(get_db),
    current_admin: AdminUser = Depends(require_superadmin),
):
    state = visibility_service.set_fields_visibility_action(db, current_admin, page_key, body.paths, body.hidden)
    return action_response(state)
