# siteadmin/content/structured_editor.py
"""
Whole-document editor for one site config.

Holds a working ``config`` and a ``baseline`` (the last persisted value).
Nothing reaches storage until ``save`` hands the serialized payload to the
submit callable; a failed save leaves the draft untouched.
"""
from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Callable, Mapping, Optional

from siteadmin.content.json_tree import deep_copy, json_equal
from siteadmin.content.node_editor import EditableNode, ObjectNode, render
from siteadmin.schemas.actions import ActionState

# submit(config_key, json_payload) -> ActionState
SubmitFn = Callable[[str, str], ActionState]


def utc_now_iso(now: Optional[datetime] = None) -> str:
    moment = now or datetime.now(timezone.utc)
    return moment.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def _as_object(value: Any) -> dict:
    if not isinstance(value, dict):
        return {}
    return deep_copy(value)


class FieldDialog:
    """Scoped draft of one top-level field; only ``save`` writes it back."""

    def __init__(self, editor: "StructuredConfigEditor", key: str, draft: Any):
        self.editor = editor
        self.key = key
        self.draft = draft
        self.closed = False

    def _set_draft(self, value: Any) -> None:
        self.draft = value

    def node(self) -> EditableNode:
        return render(self.draft, self._set_draft)

    def save(self) -> dict:
        if self.closed:
            raise RuntimeError("field dialog already closed")
        self.closed = True
        self.editor.config = {**self.editor.config, self.key: self.draft}
        self.editor.active_field = None
        return self.editor.config

    def cancel(self) -> None:
        self.closed = True
        self.editor.active_field = None


class StructuredConfigEditor:
    def __init__(
        self,
        config_key: str,
        initial_config: Any,
        schema_name: Optional[str] = None,
        default_meta: Optional[Mapping[str, Any]] = None,
    ):
        self.config_key = config_key
        self.schema_name = schema_name
        self.default_meta = dict(default_meta or {})
        self.config: dict = _as_object(initial_config)
        self.baseline: dict = deep_copy(self.config)
        self.active_field: Optional[FieldDialog] = None
        self.last_state: ActionState = ActionState.idle()
        self._session_backup: Optional[dict] = None

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def is_dirty(self) -> bool:
        return not json_equal(self.config, self.baseline)

    def _set_config(self, value: dict) -> None:
        self.config = value

    def root(self) -> ObjectNode:
        return ObjectNode(self.config, self._set_config)

    def reset(self) -> dict:
        self.config = deep_copy(self.baseline)
        return self.config

    # ------------------------------------------------------------------
    # Top-level fields
    # ------------------------------------------------------------------
    def add_field(self, name: str, kind: str = "object") -> dict:
        return self.root().add_field(name, kind)

    def rename_field(self, old: str, new: str) -> dict:
        trimmed = (new or "").strip()
        result = self.root().rename_field(old, new)
        if trimmed and self.active_field is not None and self.active_field.key == old:
            self.active_field.key = trimmed
        return result

    def remove_field(self, name: str) -> dict:
        result = self.root().remove_field(name)
        if self.active_field is not None and self.active_field.key == name:
            self.active_field.cancel()
        return result

    def set_field(self, name: str, value: Any) -> dict:
        return self.root().set_field(name, value)

    def open_field(self, key: str) -> FieldDialog:
        current = self.config.get(key)
        draft = deep_copy(current) if key in self.config else {}
        self.active_field = FieldDialog(self, key, draft)
        return self.active_field

    # ------------------------------------------------------------------
    # Whole-document editing session
    # ------------------------------------------------------------------
    def begin_session(self) -> None:
        self._session_backup = deep_copy(self.config)

    def commit_session(self) -> None:
        self._session_backup = None

    def cancel_session(self) -> None:
        if self._session_backup is not None:
            self.config = self._session_backup
        self._session_backup = None

    # ------------------------------------------------------------------
    # Submit
    # ------------------------------------------------------------------
    def build_payload(self, now: Optional[datetime] = None) -> dict:
        payload = deep_copy(self.config)
        current_meta = payload.get("_meta")
        meta = dict(current_meta) if isinstance(current_meta, dict) else {}
        meta["updatedAt"] = utc_now_iso(now)

        schema = meta.get("schema")
        if not isinstance(schema, str) or not schema.strip():
            meta["schema"] = self.schema_name or f"{self.config_key}.v1"
        for meta_key, meta_value in self.default_meta.items():
            if meta_key not in meta:
                meta[meta_key] = deep_copy(meta_value)

        payload["_meta"] = meta
        return payload

    def save(self, submit: SubmitFn, now: Optional[datetime] = None) -> ActionState:
        payload = self.build_payload(now)
        state = submit(self.config_key, json.dumps(payload, ensure_ascii=False))
        self.last_state = state
        if state.ok:
            self.baseline = payload
            self.config = deep_copy(payload)
        return state
