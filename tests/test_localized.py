import pytest

from siteadmin.content.localized import (
    ensure_localized,
    get_text,
    is_localized_shape,
    missing_locales,
    normalize_localized_field,
    serialize_localized,
    set_text,
)
from siteadmin.core.errors import ValidationError
from siteadmin.i18n.locales import resolve_locale


def test_get_text_falls_back_to_first_non_blank_locale():
    assert get_text({"zh-CN": "", "en": "Hello"}, "zh-CN", "fallback") == "Hello"
    assert get_text({"zh-CN": "你好", "en": "Hello"}, "en") == "Hello"


def test_get_text_whitespace_counts_as_missing():
    assert get_text({"zh-CN": "   ", "en": "\t"}, "zh-CN", "fallback") == "fallback"
    assert get_text(None, "en", "x") == "x"
    assert get_text(42, "en", "x") == "x"


def test_get_text_accepts_plain_strings():
    assert get_text("plain", "en") == "plain"
    assert get_text("  ", "en", "fb") == "fb"


def test_ensure_localized_fills_every_locale():
    assert ensure_localized({"en": "Hi", "zh-CN": 3}) == {"zh-CN": "", "zh-TW": "", "en": "Hi"}
    assert ensure_localized("oops") == {"zh-CN": "", "zh-TW": "", "en": ""}


def test_set_text_does_not_mutate_and_keeps_existing_entries():
    original = {"zh-CN": "你好"}
    updated = set_text(original, "en", "Hello")
    assert updated == {"zh-CN": "你好", "en": "Hello"}
    assert original == {"zh-CN": "你好"}


def test_set_text_rejects_unknown_locale():
    with pytest.raises(ValidationError):
        set_text({}, "fr", "Bonjour")


def test_serialize_drops_blank_unless_preserved():
    raw = {"zh-CN": "  你好 ", "zh-TW": "", "en": None}
    assert serialize_localized(raw) == {"zh-CN": "你好"}
    assert serialize_localized(raw, preserve_empty=True) == {"zh-CN": "你好", "zh-TW": "", "en": ""}


def test_normalize_accepts_legacy_string():
    assert normalize_localized_field(" 标题 ") == {"zh-CN": "标题"}
    assert normalize_localized_field("") == {}


def test_missing_locales():
    assert missing_locales({"zh-CN": "你好", "en": " "}) == ["zh-TW", "en"]
    assert missing_locales({"zh-CN": "你好"}, required=["zh-CN"]) == []


def test_localized_shape_detection():
    assert is_localized_shape({"zh-CN": "a", "en": None})
    assert is_localized_shape({})
    assert not is_localized_shape({"zh-CN": "a", "title": "b"})
    assert not is_localized_shape({"en": 1})
    assert not is_localized_shape(["en"])


def test_resolve_locale_defaults_unknown_codes():
    assert resolve_locale("en") == "en"
    assert resolve_locale("fr") == "zh-CN"


@pytest.mark.parametrize("raw", [{"zh-CN": " a ", "en": ""}, "legacy", None, {"zh-TW": "b", "x": "y"}])
def test_serialize_after_normalize_is_idempotent(raw):
    once = serialize_localized(normalize_localized_field(raw))
    assert serialize_localized(normalize_localized_field(once)) == once


@pytest.mark.parametrize("locale", ["zh-CN", "zh-TW", "en"])
def test_get_text_reads_back_set_text(locale):
    assert get_text(set_text({"zh-CN": "原文"}, locale, "新"), locale) == "新"
