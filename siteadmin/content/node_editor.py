# siteadmin/content/node_editor.py
"""
Schema-less JSON node editor.

``render(value, on_change)`` picks an editor for the value's shape:

    list                        -> ArrayNode
    dict with localized shape   -> LocalizedNode
    any other dict              -> ObjectNode
    str / number / bool / None  -> PrimitiveNode

No operation mutates its input. Each one builds a new value, hands it to
``on_change`` and returns it; the node keeps the new value so operations can
be chained. ``child(...)`` returns a nested node whose changes are written
back through the parent, so a deep edit reaches the root setter.
"""
from __future__ import annotations

from typing import Any, Callable, Optional

from siteadmin.content.json_tree import (
    NODE_KINDS,
    default_for_kind,
    detect_kind,
)
from siteadmin.content.localized import get_text, is_localized_shape
from siteadmin.core.errors import ValidationError
from siteadmin.i18n.locales import SUPPORTED_LOCALES, is_supported_locale

OnChange = Callable[[Any], None]


class EditableNode:
    kind: str = "node"

    def __init__(self, value: Any, on_change: Optional[OnChange] = None):
        self._value = value
        self._on_change = on_change

    @property
    def value(self) -> Any:
        return self._value

    def _emit(self, new_value: Any) -> Any:
        self._value = new_value
        if self._on_change is not None:
            self._on_change(new_value)
        return new_value


def _check_kind(kind: str) -> str:
    if kind not in NODE_KINDS:
        raise ValidationError(f"Unknown value type: {kind}")
    return kind


class ArrayNode(EditableNode):
    kind = "array"

    def __len__(self) -> int:
        return len(self._value)

    def _index(self, index: int) -> int:
        if not 0 <= index < len(self._value):
            raise ValidationError(f"Index out of range: {index}")
        return index

    def replace_item(self, index: int, item: Any) -> list:
        index = self._index(index)
        items = list(self._value)
        items[index] = item
        return self._emit(items)

    def append(self, kind: str = "string") -> list:
        return self._emit([*self._value, default_for_kind(_check_kind(kind))])

    def remove(self, index: int) -> list:
        index = self._index(index)
        return self._emit([item for i, item in enumerate(self._value) if i != index])

    def child(self, index: int) -> EditableNode:
        index = self._index(index)
        return render(self._value[index], lambda v: self.replace_item(index, v))


class LocalizedNode(EditableNode):
    kind = "localized"

    def text(self, locale: str) -> str:
        current = self._value.get(locale)
        return current if isinstance(current, str) else ""

    def display_text(self, locale: str, fallback: str = "") -> str:
        return get_text(self._value, locale, fallback)

    def set_locale(self, locale: str, text: str) -> dict:
        """Blank text removes the locale entry instead of storing ''."""
        if not is_supported_locale(locale):
            raise ValidationError(f"Unsupported locale: {locale}")
        draft = dict(self._value)
        if not text.strip():
            draft.pop(locale, None)
        else:
            draft[locale] = text
        return self._emit(draft)

    def clear_locale(self, locale: str) -> dict:
        return self.set_locale(locale, "")


class ObjectNode(EditableNode):
    kind = "object"

    def keys(self) -> list[str]:
        return list(self._value.keys())

    def set_field(self, name: str, item: Any) -> dict:
        return self._emit({**self._value, name: item})

    def add_field(self, name: str, kind: str = "string") -> dict:
        trimmed = (name or "").strip()
        if not trimmed:
            raise ValidationError("Field name must not be empty")
        if trimmed in self._value:
            raise ValidationError(f"Field already exists: {trimmed}")
        return self._emit({**self._value, trimmed: default_for_kind(_check_kind(kind))})

    def rename_field(self, old: str, new: str) -> dict:
        """Blank or unchanged names are ignored. Key order is preserved."""
        trimmed = (new or "").strip()
        if not trimmed or trimmed == old:
            return self._value
        if trimmed in self._value:
            raise ValidationError(f"Field already exists: {trimmed}")
        if old not in self._value:
            raise ValidationError(f"Unknown field: {old}")
        return self._emit({(trimmed if k == old else k): v for k, v in self._value.items()})

    def remove_field(self, name: str) -> dict:
        return self._emit({k: v for k, v in self._value.items() if k != name})

    def child(self, name: str) -> EditableNode:
        if name not in self._value:
            raise ValidationError(f"Unknown field: {name}")
        return render(self._value[name], lambda v: self.set_field(name, v))


class PrimitiveNode(EditableNode):
    kind = "primitive"

    @property
    def value_kind(self) -> str:
        return detect_kind(self._value)

    def set(self, item: Any) -> Any:
        if isinstance(item, (dict, list)):
            raise ValidationError("Primitive editor only accepts scalar values")
        return self._emit(item)

    def change_kind(self, kind: str) -> Any:
        """Switching type discards the current value in favour of the type's default."""
        if _check_kind(kind) == self.value_kind:
            return self._value
        return self._emit(default_for_kind(kind))


def render(value: Any, on_change: Optional[OnChange] = None) -> EditableNode:
    if isinstance(value, list):
        return ArrayNode(value, on_change)
    if isinstance(value, dict):
        if is_localized_shape(value):
            return LocalizedNode(value, on_change)
        return ObjectNode(value, on_change)
    return PrimitiveNode(value, on_change)


def describe(value: Any, locale: str = SUPPORTED_LOCALES[0]) -> tuple[str, str]:
    """(type label, one-line summary) for field lists."""
    if isinstance(value, list):
        return f"数组 ({len(value)})", (f"包含 {len(value)} 项" if value else "当前为空")
    if isinstance(value, dict):
        if is_localized_shape(value):
            return "多语言文本", get_text(value, locale, "未填写")
        keys = list(value.keys())
        if not keys:
            return f"对象 ({len(keys)})", "当前为空"
        more = "…" if len(keys) > 3 else ""
        return f"对象 ({len(keys)})", f"字段：{'、'.join(keys[:3])}{more}"
    if isinstance(value, bool):
        return "布尔", "true" if value else "false"
    if isinstance(value, (int, float)):
        return "数值", str(value)
    if isinstance(value, str):
        text = value.strip()
        if len(text) > 48:
            return "字符串", f"{text[:48]}…"
        return "字符串", text or "未填写"
    return "Null", "当前值为 null"
