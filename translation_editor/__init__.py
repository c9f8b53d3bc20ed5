"""Form-field extension for editing the translations of an entity per locale."""

from .exceptions import EmptyLocalesError, TranslationEditorError
from .formsets import BaseTranslationsFormSet, translations_formset_factory
from .options import TranslationsEditorOptions, resolve_options
from .sorting import LocaleSlot, TranslationDataSorter

__all__ = [
    "BaseTranslationsFormSet",
    "EmptyLocalesError",
    "LocaleSlot",
    "TranslationDataSorter",
    "TranslationEditorError",
    "TranslationsEditorOptions",
    "resolve_options",
    "translations_formset_factory",
]
