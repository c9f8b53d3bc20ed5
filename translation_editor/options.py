from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from translation_editor.config import settings
from translation_editor.exceptions import EmptyLocalesError
from translation_editor.i18n import dedupe


def default_editor_locales() -> List[str]:
    """Locales used when the caller does not pass any (normally none)."""
    return list(settings.default_locales)


def _default_ignore_fields() -> List[str]:
    return list(settings.auto_remove_ignore_fields)


class TranslationsEditorOptions(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    allow_add: bool = False
    allow_delete: bool = False
    prototype: bool = False
    prototype_name: str = "__protname__"
    # Keyword arguments passed to every per-locale sub-form.
    options: Dict[str, Any] = Field(default_factory=dict)
    # List of all locales to manage, should be passed by the caller.
    locales: List[str] = Field(default_factory=default_editor_locales)
    # Locale attribute of the translation entity, "[lang]" for mapping keys.
    locale_field_name: str = "lang"
    null_locale_enabled: bool = False
    null_locale_selected: bool = False
    auto_remove_empty_translations: bool = True
    auto_remove_ignore_fields: List[str] = Field(default_factory=_default_ignore_fields)
    error_bubbling: bool = False
    all_errors: bool = False

    @field_validator("locales", mode="before")
    @classmethod
    def _normalize_locales(cls, value: Any) -> List[str]:
        if value is None:
            return []
        if isinstance(value, str):
            value = [value]
        return list(dedupe(str(code).strip() for code in value if str(code or "").strip()))

    @field_validator("auto_remove_ignore_fields", mode="before")
    @classmethod
    def _normalize_ignore_fields(cls, value: Any) -> List[str]:
        if value is None:
            return []
        if isinstance(value, str):
            value = [value]
        return list(dedupe(str(name) for name in value))

    @field_validator("locale_field_name")
    @classmethod
    def _single_step_locale_path(cls, value: str) -> str:
        # Nested paths such as "language.code" are not supported.
        name = value[1:-1] if value.startswith("[") and value.endswith("]") else value
        if not name or "." in name or "[" in name or "]" in name:
            raise ValueError(
                f"locale_field_name must be a single attribute or '[key]', got {value!r}"
            )
        return value

    @property
    def editor_locales(self) -> List[Optional[str]]:
        """Managed locales, with the null locale first when it is enabled."""
        locales: List[Optional[str]] = list(self.locales)
        if self.null_locale_enabled:
            locales.insert(0, None)
        return locales

    def require_locales(self) -> "TranslationsEditorOptions":
        if not self.locales:
            raise EmptyLocalesError()
        return self


def resolve_options(**overrides: Any) -> TranslationsEditorOptions:
    return TranslationsEditorOptions.model_validate(overrides)
