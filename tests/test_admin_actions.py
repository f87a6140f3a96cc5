import pytest
from sqlalchemy.exc import OperationalError

from siteadmin.services import admin_actions
from siteadmin.services.admin_actions import (
    restore_site_config_version_action,
    update_site_config_action,
    update_site_config_field_action,
)
from siteadmin.services.history_service import list_history
from siteadmin.services.site_config_service import get_site_config_raw
from siteadmin.visibility.pages import VISIBILITY_CONFIG_KEY


def test_save_success_commits_and_stamps_meta(db, admin):
    state = update_site_config_action(db, admin, key=" 首页 ", payload='{"hero": {"title": {"en": "Hi"}}}')

    assert state.ok
    assert state.message == "Saved"
    value = get_site_config_raw(db, "首页")
    assert value["hero"] == {"title": {"en": "Hi"}}
    assert value["_meta"]["updatedAt"].endswith("Z")
    entry = list_history(db, "首页")[0]
    assert entry.actor_username == "editor"
    assert entry.actor_role == "admin"
    assert entry.source_path == "/admin/%E9%A6%96%E9%A1%B5"


@pytest.mark.parametrize(
    "key,payload,message",
    [
        ("", '{"a": 1}', "Invalid config key"),
        ("首页", None, "Missing config payload"),
        ("首页", "{bad", "Failed to parse JSON, please check the format"),
        ("首页", "[]", "Config payload must be a JSON object"),
    ],
)
def test_save_validation_errors(db, admin, key, payload, message):
    state = update_site_config_action(db, admin, key=key, payload=payload)
    assert state.status == "error"
    assert state.code == "validation"
    assert state.status_code == 400
    assert state.message == message


def test_visibility_config_requires_superadmin(db, admin, superadmin):
    denied = update_site_config_action(db, admin, key=VISIBILITY_CONFIG_KEY, payload='{"pages": {}}')
    assert denied.status == "error"
    assert denied.status_code == 403
    assert get_site_config_raw(db, VISIBILITY_CONFIG_KEY) is None

    allowed = update_site_config_action(db, superadmin, key=VISIBILITY_CONFIG_KEY, payload='{"pages": {}}')
    assert allowed.ok
    assert get_site_config_raw(db, VISIBILITY_CONFIG_KEY)["_meta"]["schema"] == "visibility.v1"


def test_storage_failure_is_reported_generically(db, admin, monkeypatch):
    def _boom(*args, **kwargs):
        raise OperationalError("INSERT", {}, Exception("disk full"))

    monkeypatch.setattr(admin_actions, "save_site_config", _boom)
    state = update_site_config_action(db, admin, key="首页", payload='{"a": 1}')

    assert state.status == "error"
    assert state.code == "persistence"
    assert state.message == "Save failed, please try again later"
    assert "disk full" not in state.message


def test_field_save_storage_failure_is_reported_generically(db, admin, monkeypatch):
    def _boom(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("connection reset"))

    monkeypatch.setattr(admin_actions, "get_site_config_raw", _boom)
    state = update_site_config_field_action(db, admin, key="首页", field="hero", value={"a": 1})

    assert state.status == "error"
    assert state.code == "persistence"
    assert state.status_code == 503
    assert get_site_config_raw(db, "首页") is None


def test_field_save_replaces_only_that_field(db, admin):
    update_site_config_action(db, admin, key="首页", payload='{"hero": {"title": "a"}, "footer": {"x": 1}}')

    state = update_site_config_field_action(db, admin, key="首页", field="hero", value={"title": "b"})

    assert state.ok
    value = get_site_config_raw(db, "首页")
    assert value["hero"] == {"title": "b"}
    assert value["footer"] == {"x": 1}
    assert value["_meta"]["schema"] == "首页.v1"
    changes = list_history(db, "首页")[0].diff
    assert {"op": "change", "path": "hero.title", "before": "a", "after": "b"} in changes


def test_field_save_rejects_blank_field(db, admin):
    state = update_site_config_field_action(db, admin, key="首页", field="  ", value=1)
    assert state.status == "error"
    assert state.message == "Field name must not be empty"


def test_restore_requires_superadmin(db, admin, superadmin):
    update_site_config_action(db, admin, key="首页", payload='{"a": 1}')
    update_site_config_action(db, admin, key="首页", payload='{"a": 2}')
    first = list_history(db, "首页")[-1]

    denied = restore_site_config_version_action(db, admin, history_id=first.id)
    assert denied.status_code == 403

    state = restore_site_config_version_action(db, superadmin, history_id=first.id)
    assert state.ok
    assert get_site_config_raw(db, "首页")["a"] == 1


def test_restore_previous_without_previous_value(db, superadmin):
    update_site_config_action(db, superadmin, key="首页", payload='{"a": 1}')
    first = list_history(db, "首页")[0]

    state = restore_site_config_version_action(db, superadmin, history_id=first.id, mode="previous")

    assert state.status == "error"
    assert state.status_code == 404
    assert state.message == "This record has no previous value to restore"
    assert len(list_history(db, "首页")) == 1
