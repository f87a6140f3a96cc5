# siteadmin/visibility/model.py
"""
Page -> section -> field visibility overrides.

Flags are "hidden" booleans; anything absent is visible. A hidden page hides
all of its sections and fields, a hidden section hides its fields. Every
mutation returns a new ``VisibilityConfig``; inputs are never modified.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping, Optional
from urllib.parse import urlsplit

from siteadmin.content.json_tree import canonical_dumps, deep_copy
from siteadmin.i18n.locales import SUPPORTED_LOCALES
from siteadmin.visibility.pages import (
    VISIBILITY_CONFIG_KEY,
    VISIBILITY_PAGES,
    VISIBILITY_SCHEMA_ID,
    PageDefinition,
)


@dataclass(frozen=True)
class PageState:
    hidden: bool = False
    sections: Mapping[str, bool] = field(default_factory=dict)
    fields: Mapping[str, bool] = field(default_factory=dict)

    def to_json(self) -> dict:
        return {
            "hidden": self.hidden,
            "sections": dict(self.sections),
            "fields": dict(self.fields),
        }


@dataclass(frozen=True)
class VisibilityConfig:
    pages: Mapping[str, PageState] = field(default_factory=dict)
    locales: Mapping[str, bool] = field(default_factory=dict)
    meta: Optional[Mapping[str, Any]] = None

    def page(self, page_key: str) -> PageState:
        return self.pages.get(page_key) or PageState()

    def to_json(self) -> dict:
        data: dict[str, Any] = {"pages": {k: v.to_json() for k, v in self.pages.items()}}
        if self.locales:
            data["locales"] = dict(self.locales)
        if self.meta is not None:
            data["_meta"] = deep_copy(dict(self.meta))
        return data


def _with_page(cfg: VisibilityConfig, page_key: str, state: PageState) -> VisibilityConfig:
    return replace(cfg, pages={**cfg.pages, page_key: state})


# ----------------------------------------------------------------------
# Defaults / normalization
# ----------------------------------------------------------------------
def _default_page_state(definition: PageDefinition) -> PageState:
    return PageState(hidden=False, sections={key: False for key in definition.section_keys}, fields={})


def default_meta() -> dict:
    return {
        "schema": VISIBILITY_SCHEMA_ID,
        "updatedAt": datetime.fromtimestamp(0, tz=timezone.utc).isoformat().replace("+00:00", "Z"),
        "adminPath": f"/admin/{VISIBILITY_CONFIG_KEY}",
    }


def create_default_visibility_config() -> VisibilityConfig:
    return VisibilityConfig(
        pages={d.key: _default_page_state(d) for d in VISIBILITY_PAGES},
        locales={},
        meta=default_meta(),
    )


def _flags(raw: Any) -> dict[str, bool]:
    if not isinstance(raw, Mapping):
        return {}
    return {str(k): v is True for k, v in raw.items()}


def normalize_visibility_config(raw: Any) -> VisibilityConfig:
    """
    Coerce stored JSON into a config over the known pages. Unknown pages are
    dropped and every flag that is not literally ``True`` becomes ``False``.
    """
    fallback = create_default_visibility_config()
    if not isinstance(raw, Mapping):
        return fallback

    pages_raw = raw.get("pages")
    pages: dict[str, PageState] = {}
    for definition in VISIBILITY_PAGES:
        page_raw = pages_raw.get(definition.key) if isinstance(pages_raw, Mapping) else None
        if not isinstance(page_raw, Mapping):
            pages[definition.key] = _default_page_state(definition)
            continue
        section_flags = _flags(page_raw.get("sections"))
        pages[definition.key] = PageState(
            hidden=page_raw.get("hidden") is True,
            sections={key: section_flags.get(key, False) for key in definition.section_keys},
            fields=_flags(page_raw.get("fields")),
        )

    locale_flags = _flags(raw.get("locales"))
    meta = raw.get("_meta")
    return VisibilityConfig(
        pages=pages,
        locales={code: locale_flags[code] for code in SUPPORTED_LOCALES if code in locale_flags},
        meta=deep_copy(dict(meta)) if isinstance(meta, Mapping) else None,
    )


def merge_with_default_visibility(cfg: VisibilityConfig) -> VisibilityConfig:
    fallback = create_default_visibility_config()
    pages = dict(fallback.pages)
    for definition in VISIBILITY_PAGES:
        current = cfg.pages.get(definition.key)
        if current is None:
            continue
        base = fallback.pages[definition.key]
        sections = dict(base.sections)
        for key in base.sections:
            if isinstance(current.sections.get(key), bool):
                sections[key] = current.sections[key]
        fields = {k: v for k, v in current.fields.items() if isinstance(v, bool)}
        pages[definition.key] = PageState(hidden=current.hidden is True, sections=sections, fields=fields)
    meta = {**(fallback.meta or {}), **(cfg.meta or {})}
    return VisibilityConfig(pages=pages, locales=dict(cfg.locales), meta=meta)


def load_visibility_config(raw: Any) -> VisibilityConfig:
    """Stored value (or None) -> normalized config merged over the defaults."""
    if not raw:
        return create_default_visibility_config()
    return merge_with_default_visibility(normalize_visibility_config(raw))


def is_draft_dirty(initial: VisibilityConfig, draft: VisibilityConfig) -> bool:
    return canonical_dumps(initial.to_json()["pages"]) != canonical_dumps(draft.to_json()["pages"]) or (
        dict(initial.locales) != dict(draft.locales)
    )


# ----------------------------------------------------------------------
# Queries
# ----------------------------------------------------------------------
def is_page_hidden(cfg: VisibilityConfig, page_key: str) -> bool:
    return cfg.page(page_key).hidden is True


def is_section_hidden(cfg: VisibilityConfig, page_key: str, section_key: str) -> bool:
    return cfg.page(page_key).sections.get(section_key) is True


def is_field_hidden(cfg: VisibilityConfig, page_key: str, field_path: str) -> bool:
    return cfg.page(page_key).fields.get(field_path) is True


def is_visible(
    cfg: VisibilityConfig,
    page_key: str,
    section_key: Optional[str] = None,
    field_path: Optional[str] = None,
) -> bool:
    if is_page_hidden(cfg, page_key):
        return False
    if section_key is not None and is_section_hidden(cfg, page_key, section_key):
        return False
    if field_path is not None and is_field_hidden(cfg, page_key, field_path):
        return False
    return True


def hidden_sections(cfg: VisibilityConfig, page_key: str) -> dict[str, bool]:
    return {k: v is True for k, v in cfg.page(page_key).sections.items()}


def hidden_fields(cfg: VisibilityConfig, page_key: str) -> dict[str, bool]:
    return {k: v is True for k, v in cfg.page(page_key).fields.items()}


def list_hidden_page_keys(cfg: VisibilityConfig) -> list[str]:
    return [d.key for d in VISIBILITY_PAGES if is_page_hidden(cfg, d.key)]


def visible_locales(cfg: VisibilityConfig) -> list[str]:
    return [code for code in SUPPORTED_LOCALES if cfg.locales.get(code) is not True]


def resolve_page_key_from_path(pathname: str) -> Optional[str]:
    """
    Map a public URL path to a page key. Prefix routes (detail pages) are
    tried first and must match their segment depth; exact routes after that.
    """
    path = urlsplit(pathname or "").path or "/"
    depth = len([s for s in path.split("/") if s])

    for definition in VISIBILITY_PAGES:
        prefix = definition.route_prefix
        if not prefix:
            continue
        if not path.startswith(prefix) or path == prefix:
            continue
        if definition.segment_depth is not None and depth != definition.segment_depth:
            continue
        return definition.key

    for definition in VISIBILITY_PAGES:
        if not definition.route or path != definition.route:
            continue
        if definition.segment_depth is not None and depth != definition.segment_depth:
            continue
        return definition.key
    return None


# ----------------------------------------------------------------------
# Mutations
# ----------------------------------------------------------------------
def toggle_page(cfg: VisibilityConfig, page_key: str) -> VisibilityConfig:
    """Flip page.hidden; section and field flags are kept for when it is shown again."""
    current = cfg.page(page_key)
    return _with_page(cfg, page_key, replace(current, hidden=not current.hidden))


def toggle_section(cfg: VisibilityConfig, page_key: str, section_key: str) -> VisibilityConfig:
    current = cfg.page(page_key)
    sections = {**current.sections, section_key: not (current.sections.get(section_key) is True)}
    return _with_page(cfg, page_key, replace(current, sections=sections))


def toggle_field(cfg: VisibilityConfig, page_key: str, field_path: str) -> VisibilityConfig:
    current = cfg.page(page_key)
    fields = {**current.fields, field_path: not (current.fields.get(field_path) is True)}
    return _with_page(cfg, page_key, replace(current, fields=fields))


def set_fields_visibility(
    cfg: VisibilityConfig, page_key: str, paths: Iterable[str], hidden: bool
) -> VisibilityConfig:
    current = cfg.page(page_key)
    fields = dict(current.fields)
    for path in paths:
        fields[path] = bool(hidden)
    return _with_page(cfg, page_key, replace(current, fields=fields))


def set_sections_visibility(
    cfg: VisibilityConfig, page_key: str, section_keys: Iterable[str], hidden: bool
) -> VisibilityConfig:
    current = cfg.page(page_key)
    sections = dict(current.sections)
    for key in section_keys:
        sections[key] = bool(hidden)
    return _with_page(cfg, page_key, replace(current, sections=sections))


def set_locale_hidden(cfg: VisibilityConfig, locale: str, hidden: bool) -> VisibilityConfig:
    return replace(cfg, locales={**cfg.locales, locale: bool(hidden)})
