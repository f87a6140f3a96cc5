# siteadmin/visibility/fields.py
"""
Field dictionary for the visibility editor: flattens stored configs into
field paths (``hero.title``, ``items[].name``) and groups them into coarse
categories. The categories only drive grouping in the UI, never resolution.
"""
from __future__ import annotations

from typing import Any, Iterable, Literal, Mapping, Optional, TypedDict

from siteadmin.visibility.pages import PAGE_TO_CONFIG_KEY, VISIBILITY_CONFIG_KEY

Category = Literal["copy", "button", "carousel"]

_COPY_HINTS = ("title", "description", "eyebrow", "summary", "copy", "label", "name", "highlight", "text")
_BUTTON_HINTS = ("button", "cta", "link", "href", "action", "actions")
_CAROUSEL_HINTS = ("carousel", "gallery", "slides", "images", "videos", "items", "cards", "[]")


class FieldEntry(TypedDict, total=False):
    path: str
    type: str
    section: Optional[str]
    example: Any


def classify_category(path: str, type_: str) -> Optional[Category]:
    """Substring heuristics, checked copy -> button -> carousel."""
    p = str(path).lower()
    t = str(type_).lower()
    if t == "string" or any(h in p for h in _COPY_HINTS):
        return "copy"
    if any(h in p for h in _BUTTON_HINTS):
        return "button"
    if t == "array" or any(h in p for h in _CAROUSEL_HINTS):
        return "carousel"
    return None


def map_sub_block_to_category(key: str) -> str:
    k = str(key).lower()
    if k == "all":
        return "all"
    if any(h in k for h in ("cta", "button", "actions", "action", "link")):
        return "button"
    if any(h in k for h in ("slides", "gallery", "images", "videos", "items", "cards",
                            "filters", "pagination", "members", "fields")):
        return "carousel"
    if any(h in k for h in ("title", "headline", "desc", "overview", "group", "copy",
                            "stats", "meta", "author", "date", "tags")):
        return "copy"
    return "all"


# (sub-block hints, path hints); first matching row decides
_SUB_BLOCK_RULES: tuple[tuple[tuple[str, ...], tuple[str, ...]], ...] = (
    (("cta", "button", "actions", "action", "link"), ("cta", "button", "link", "action", "href")),
    (("slides", "gallery", "images", "videos"), ("slides", "gallery", "image", "video")),
    (("items", "cards"), ("items", "cards", "list")),
    (("filters",), ("filter", "tags", "category")),
    (("pagination",), ("pagination", "page", "load")),
    (("members",), ("member", "team", "lead")),
    (("fields", "form"), ("field", "form", "input")),
    (("group", "headline", "title"), ("group", "headline", "title")),
    (("nav", "anchors"), ("nav", "anchor")),
    (("tags",), ("tags", "category")),
    (("stats", "milestones"), ("stats", "milestones", "numbers")),
)


def path_matches_sub_block(sub_key: str, path: str) -> bool:
    k = str(sub_key).lower()
    p = str(path).lower()
    if not k or k == "all":
        return True
    for block_hints, path_hints in _SUB_BLOCK_RULES:
        if any(h in k for h in block_hints):
            return any(h in p for h in path_hints)
    if "modulecopy" in k:
        return "module" in p and any(h in p for h in ("copy", "text", "title"))
    if "modulecards" in k:
        return "module" in p and any(h in p for h in ("cards", "items"))
    return k in p


# ----------------------------------------------------------------------
# Flattening
# ----------------------------------------------------------------------
def _detect_type(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return "unknown"


def _example(value: Any) -> Any:
    return value if isinstance(value, (str, int, float, bool)) else None


def _flatten_array(out: list[FieldEntry], items: list, prefix: str, section: Optional[str]) -> None:
    path = f"{prefix}[]"
    if not items:
        out.append({"path": path, "type": "array", "section": section})
        return
    first = items[0]
    kind = _detect_type(first)
    if kind == "object":
        _flatten_object(out, first, path, section)
    elif kind == "array":
        _flatten_array(out, first, path, section)
    else:
        out.append({"path": path, "type": kind, "section": section, "example": _example(first)})


def _flatten_object(out: list[FieldEntry], obj: Mapping[str, Any], prefix: str, section: Optional[str]) -> None:
    for key, value in obj.items():
        if key == "_meta":
            continue
        path = f"{prefix}.{key}" if prefix else key
        owner = section if section is not None else (prefix.split(".")[0] if prefix else key)
        kind = _detect_type(value)
        if kind == "object":
            _flatten_object(out, value, path, owner)
        elif kind == "array":
            _flatten_array(out, value, path, owner)
        else:
            out.append({"path": path, "type": kind, "section": owner, "example": _example(value)})


def flatten_fields(config: Any) -> list[FieldEntry]:
    """Leaf paths of one config, sorted by section then path."""
    if not isinstance(config, Mapping):
        return []
    out: list[FieldEntry] = []
    _flatten_object(out, config, "", None)
    out.sort(key=lambda f: (f.get("section") or "", f["path"]))
    return out


def build_field_dictionary(configs: Mapping[str, Any]) -> dict[str, list[FieldEntry]]:
    """config key -> fields; the visibility config itself is skipped."""
    result: dict[str, list[FieldEntry]] = {}
    for key, value in configs.items():
        if not key or key == VISIBILITY_CONFIG_KEY or not isinstance(value, Mapping):
            continue
        result[key] = flatten_fields(value)
    return result


def fields_for_page(dictionary: Mapping[str, list[FieldEntry]], page_key: str) -> list[FieldEntry]:
    config_key = PAGE_TO_CONFIG_KEY.get(page_key)
    if not config_key:
        return []
    return list(dictionary.get(config_key, []))


def section_category_paths(fields: Iterable[FieldEntry], section_key: str) -> dict[str, list[str]]:
    result: dict[str, list[str]] = {"copy": [], "button": [], "carousel": [], "all": []}
    for entry in fields:
        if str(entry.get("section")) != section_key:
            continue
        path = str(entry["path"])
        category = classify_category(path, str(entry.get("type")))
        if category:
            result[category].append(path)
        result["all"].append(path)
    return result
