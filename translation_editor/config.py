from typing import Any, List
import json

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _parse_string_list(value: Any) -> List[str]:
    """Accepts a list, a JSON list, or a comma/semicolon separated string."""
    if value is None:
        return []
    if isinstance(value, str):
        text = value.strip()
        parsed = None
        if text.startswith("["):
            try:
                parsed = json.loads(text)
            except ValueError:
                parsed = None
        items = parsed if isinstance(parsed, list) else text.strip("[]").replace(";", ",").split(",")
    elif isinstance(value, (list, tuple, set)):
        items = value
    else:
        items = [value]
    cleaned = (str(item).strip(" '\"") for item in items)
    return [item for item in cleaned if item]


class EditorSettings(BaseSettings):
    # Locale used for titles when no request is bound to the editor.
    default_locale: str = "en"
    # Keep Any here so env parser doesn't force JSON for list fields.
    default_locales: Any = []
    cookie_name: str = "current_selected_translation_lang"
    all_locales_value: str = "__all__"
    null_locale_key: str = "__null__"
    auto_remove_ignore_fields: Any = ["created_at", "updated_at"]

    @field_validator("default_locales", "auto_remove_ignore_fields", mode="before")
    @classmethod
    def _split_lists(cls, value: Any) -> List[str]:
        return _parse_string_list(value)

    @field_validator("default_locale", mode="before")
    @classmethod
    def _normalize_default_locale(cls, value: Any) -> str:
        locales = _parse_string_list(value)
        return locales[0] if locales else "en"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="TRANSLATION_EDITOR_",
        extra="ignore",
    )


settings = EditorSettings()
