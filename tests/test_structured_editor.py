import json
from datetime import datetime, timezone

import pytest

from siteadmin.content.structured_editor import StructuredConfigEditor
from siteadmin.core.errors import SiteAdminError, ValidationError
from siteadmin.schemas.actions import ActionState

NOW = datetime(2025, 3, 1, 8, 30, tzinfo=timezone.utc)


class FakeSubmit:
    def __init__(self, state=None):
        self.calls = []
        self.state = state or ActionState.success("Saved")

    def __call__(self, key, payload):
        self.calls.append((key, json.loads(payload)))
        return self.state


def test_field_dialog_only_touches_its_field():
    editor = StructuredConfigEditor("首页", {"hero": {"title": "a"}, "footer": {"x": 1}})
    dialog = editor.open_field("hero")
    dialog.node().set_field("title", "b")

    assert editor.config["hero"] == {"title": "a"}
    dialog.save()
    assert editor.config == {"hero": {"title": "b"}, "footer": {"x": 1}}
    assert editor.is_dirty


def test_field_dialog_cancel_discards_draft():
    editor = StructuredConfigEditor("首页", {"hero": {"title": "a"}})
    dialog = editor.open_field("hero")
    dialog.node().set_field("title", "changed")
    dialog.cancel()

    assert editor.config == {"hero": {"title": "a"}}
    assert not editor.is_dirty
    assert editor.active_field is None


def test_open_missing_field_starts_empty():
    editor = StructuredConfigEditor("首页", {})
    assert editor.open_field("seo").draft == {}


def test_rename_moves_active_field():
    editor = StructuredConfigEditor("首页", {"hero": {}, "body": {}})
    dialog = editor.open_field("hero")
    editor.rename_field("hero", "banner")
    assert dialog.key == "banner"
    assert list(editor.config) == ["banner", "body"]

    editor.rename_field("banner", "  ")
    assert dialog.key == "banner"


def test_add_field_defaults_to_object_and_rejects_duplicates():
    editor = StructuredConfigEditor("首页", {"hero": {}})
    editor.add_field("seo")
    assert editor.config["seo"] == {}
    with pytest.raises(ValidationError):
        editor.add_field("hero")


def test_session_cancel_restores_snapshot():
    editor = StructuredConfigEditor("首页", {"hero": {"title": "a"}})
    editor.begin_session()
    editor.set_field("hero", {"title": "b"})
    editor.remove_field("hero")
    editor.cancel_session()
    assert editor.config == {"hero": {"title": "a"}}


def test_build_payload_stamps_meta():
    editor = StructuredConfigEditor(
        "首页",
        {"hero": {}, "_meta": {"adminPath": "/custom"}},
        default_meta={"adminPath": "/admin/x", "owner": "web"},
    )
    payload = editor.build_payload(NOW)
    assert payload["_meta"] == {
        "adminPath": "/custom",
        "updatedAt": "2025-03-01T08:30:00Z",
        "schema": "首页.v1",
        "owner": "web",
    }
    # the working copy is not stamped until a save succeeds
    assert "updatedAt" not in editor.config["_meta"]


def test_explicit_schema_name_wins_over_default():
    editor = StructuredConfigEditor("案例展示", {}, schema_name="cases.v2")
    assert editor.build_payload(NOW)["_meta"]["schema"] == "cases.v2"


def test_successful_save_resets_baseline():
    editor = StructuredConfigEditor("首页", {"hero": {}})
    editor.set_field("hero", {"title": "x"})
    submit = FakeSubmit()

    state = editor.save(submit, NOW)

    assert state.ok
    key, payload = submit.calls[0]
    assert key == "首页"
    assert payload["hero"] == {"title": "x"}
    assert editor.baseline == payload
    assert not editor.is_dirty


def test_failed_save_keeps_draft():
    editor = StructuredConfigEditor("首页", {"hero": {}})
    editor.set_field("hero", {"title": "x"})
    submit = FakeSubmit(ActionState.failure(SiteAdminError("boom")))

    state = editor.save(submit, NOW)

    assert state.status == "error"
    assert state.message == "boom"
    assert editor.config == {"hero": {"title": "x"}}
    assert editor.is_dirty
    assert editor.last_state is state


def test_committed_session_cannot_be_cancelled():
    editor = StructuredConfigEditor("首页", {"hero": {"title": "a"}})
    editor.begin_session()
    editor.set_field("hero", {"title": "b"})
    editor.commit_session()
    editor.cancel_session()
    assert editor.config == {"hero": {"title": "b"}}
