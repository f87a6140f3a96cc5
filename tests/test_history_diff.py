from siteadmin.services.history_service import (
    build_readable_path,
    describe_diff,
    diff_json_values,
    format_diff_value,
    summarize_diff,
)


def test_first_save_diffs_against_empty_object():
    assert diff_json_values(None, {"a": 1}) == [{"op": "add", "path": "a", "after": 1}]


def test_change_add_remove_with_dotted_paths():
    before = {"hero": {"title": {"en": "Hi"}, "old": True}, "keep": 1}
    after = {"hero": {"title": {"en": "Hello"}, "new": [1]}, "keep": 1}
    assert diff_json_values(before, after) == [
        {"op": "change", "path": "hero.title.en", "before": "Hi", "after": "Hello"},
        {"op": "remove", "path": "hero.old", "before": True},
        {"op": "add", "path": "hero.new", "after": [1]},
    ]


def test_lists_are_compared_whole():
    diff = diff_json_values({"items": [{"a": 1}, {"a": 2}]}, {"items": [{"a": 1}, {"a": 3}]})
    assert diff == [
        {"op": "change", "path": "items", "before": [{"a": 1}, {"a": 2}], "after": [{"a": 1}, {"a": 3}]}
    ]


def test_identical_values_produce_no_diff():
    value = {"a": {"b": [1, 2]}, "c": None}
    assert diff_json_values(value, {"a": {"b": [1, 2]}, "c": None}) == []


def test_type_changes_are_changes():
    assert diff_json_values({"a": 1}, {"a": True}) == [{"op": "change", "path": "a", "before": 1, "after": True}]
    assert diff_json_values({"a": {"x": 1}}, {"a": "x"}) == [
        {"op": "change", "path": "a", "before": {"x": 1}, "after": "x"}
    ]


def test_readable_path():
    assert build_readable_path("首页", "hero.cards.0.title") == "首页 › 英雄区 › 卡片 › 第 1 项 › 标题"
    assert build_readable_path("首页", "") == "首页 整体"
    assert build_readable_path("首页", "custom") == "首页 › custom"


def test_describe_diff_messages():
    assert describe_diff("首页", {"op": "add", "path": "hero", "after": "x"}) == "在「首页 › 英雄区」新增内容：x"
    assert describe_diff("首页", {"op": "remove", "path": "hero", "before": None}) == "在「首页 › 英雄区」删除内容，原值为：空"
    assert describe_diff("首页", {"op": "change", "path": "hero", "before": "", "after": 2}) == (
        "在「首页 › 英雄区」从「空字符串」修改为「2」"
    )


def test_format_diff_value_truncates_long_strings():
    assert format_diff_value() == "未设置"
    assert format_diff_value("x" * 200) == "x" * 117 + "…"
    assert format_diff_value({"a": [1]}) == '{"a":[1]}'


def test_summarize_diff_limits_entries():
    diff = [{"op": "add", "path": str(i), "after": i} for i in range(10)]
    shown, omitted = summarize_diff(diff, limit=6)
    assert len(shown) == 6
    assert omitted == 4
    assert summarize_diff(None) == ([], 0)
