from __future__ import annotations

import pytest
from pydantic import ValidationError

from translation_editor.config import settings
from translation_editor.exceptions import EmptyLocalesError
from translation_editor.options import TranslationsEditorOptions, resolve_options


def test_resolve_options_defaults() -> None:
    options = resolve_options(locales=["en"])
    assert options.allow_add is False
    assert options.allow_delete is False
    assert options.prototype_name == "__protname__"
    assert options.locale_field_name == "lang"
    assert options.null_locale_enabled is False
    assert options.auto_remove_empty_translations is True
    assert options.auto_remove_ignore_fields == ["created_at", "updated_at"]
    assert options.all_errors is False
    assert options.options == {}


def test_locales_are_stripped_and_deduplicated() -> None:
    options = resolve_options(locales=[" en", "fr", "en", ""])
    assert options.locales == ["en", "fr"]


def test_empty_locales_fail_fast() -> None:
    with pytest.raises(EmptyLocalesError) as excinfo:
        resolve_options(locales=[]).require_locales()
    assert "at least a single locale" in str(excinfo.value)
    assert isinstance(excinfo.value, ValueError)


def test_default_locales_come_from_settings(monkeypatch) -> None:
    monkeypatch.setattr(settings, "default_locales", ["lt", "en"])
    assert TranslationsEditorOptions().locales == ["lt", "en"]


def test_unknown_option_is_rejected() -> None:
    with pytest.raises(ValidationError):
        resolve_options(locales=["en"], allow_rename=True)


def test_editor_locales_put_null_locale_first() -> None:
    options = resolve_options(locales=["en", "fr"], null_locale_enabled=True)
    assert options.editor_locales == [None, "en", "fr"]
    assert resolve_options(locales=["en"]).editor_locales == ["en"]


def test_item_locale_path_is_accepted() -> None:
    assert resolve_options(locales=["en"], locale_field_name="[lang]").locale_field_name == "[lang]"


def test_nested_locale_paths_are_rejected() -> None:
    for path in ("language.code", "[language.code]", "[lang][code]", "", "[]"):
        with pytest.raises(ValidationError) as excinfo:
            resolve_options(locales=["en"], locale_field_name=path)
        assert "locale_field_name" in str(excinfo.value)
