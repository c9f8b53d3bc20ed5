from __future__ import annotations

from translation_editor.config import EditorSettings


def test_default_locales_accept_comma_separated_env(monkeypatch) -> None:
    monkeypatch.setenv("TRANSLATION_EDITOR_DEFAULT_LOCALES", "en, fr;de")
    config = EditorSettings(_env_file=None)
    assert config.default_locales == ["en", "fr", "de"]


def test_default_locales_accept_json_list() -> None:
    config = EditorSettings(_env_file=None, default_locales='["en", "lt"]')
    assert config.default_locales == ["en", "lt"]


def test_defaults_match_cookie_contract() -> None:
    config = EditorSettings(_env_file=None)
    assert config.cookie_name == "current_selected_translation_lang"
    assert config.all_locales_value == "__all__"
    assert config.auto_remove_ignore_fields == ["created_at", "updated_at"]
    assert config.default_locales == []


def test_default_locale_unwraps_brackets() -> None:
    config = EditorSettings(_env_file=None, default_locale="['de']")
    assert config.default_locale == "de"

    config = EditorSettings(_env_file=None, default_locale="  ")
    assert config.default_locale == "en"
