# siteadmin/content/json_tree.py
"""
Helpers over the closed JSON value type used by every editor and the diff engine.
"""
from __future__ import annotations

import json
from typing import Any, Literal, Union

JsonValue = Union[str, int, float, bool, None, dict[str, Any], list[Any]]

NodeKind = Literal["string", "number", "boolean", "null", "array", "object"]
NODE_KINDS: tuple[str, ...] = ("string", "number", "boolean", "null", "array", "object")


def deep_copy(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: deep_copy(v) for k, v in value.items()}
    if isinstance(value, list):
        return [deep_copy(v) for v in value]
    return value


def canonical_dumps(value: Any) -> str:
    """
    Serialization used for equality and dirty checks. Key order is kept
    (the same document with reordered keys counts as a change).
    """
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def json_equal(a: Any, b: Any) -> bool:
    return canonical_dumps(a) == canonical_dumps(b)


def detect_kind(value: Any) -> NodeKind:
    # bool first: bool is a subclass of int
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
    raise TypeError(f"not a JSON value: {type(value).__name__}")


def default_for_kind(kind: str) -> Any:
    if kind == "string":
        return ""
    if kind == "number":
        return 0
    if kind == "boolean":
        return False
    if kind == "null":
        return None
    if kind == "array":
        return []
    if kind == "object":
        return {}
    raise ValueError(f"unknown node kind: {kind!r}")


def normalize_json(value: Any) -> Any:
    """Round-trip through JSON so tuples, non-str keys and the like become plain JSON."""
    return json.loads(json.dumps(value, ensure_ascii=False))
