from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from django.forms import BaseForm
from django.forms.formsets import BaseFormSet, formset_factory
from django.utils import translation
from sqlalchemy.orm import Session

from translation_editor.config import settings
from translation_editor.errors import ErrorTree, collect_error_tree
from translation_editor.i18n import editor_text
from translation_editor.languages import locale_titles, selected_locale
from translation_editor.options import TranslationsEditorOptions, resolve_options
from translation_editor.sorting import LocaleSlot, TranslationDataSorter, is_blank

logger = logging.getLogger(__name__)

DJANGO_PROTOTYPE_INDEX = "__prefix__"


class BaseTranslationsFormSet(BaseFormSet):
    """
    Collection of per-locale sub-forms editing the translations of an entity.

    One sub-form is built for every configured locale, existing translations
    are matched by locale and missing ones are created from the prototype's
    ``data_class``.
    """

    editor_options: TranslationsEditorOptions
    template_name = "translation_editor/translations_editor.html"

    session: Optional[Session] = None
    translator: Any = None
    translator_hub: Any = None

    def __init__(
        self,
        data=None,
        files=None,
        translations: Any = (),
        *,
        request: Any = None,
        session: Optional[Session] = None,
        translator: Any = None,
        **kwargs: Any,
    ) -> None:
        options = self.editor_options.require_locales()
        if session is not None:
            self.session = session
        if translator is not None:
            self.translator = translator
        self.request = request

        self.sorter = TranslationDataSorter(
            options.locale_field_name,
            self.get_data_class(),
            options.locales,
            options.null_locale_enabled,
            self.session,
            options.auto_remove_ignore_fields,
        )
        self.slots: List[LocaleSlot] = self.sorter.sort(translations)
        self._blank_submissions: set[int] = set()

        kwargs.setdefault("initial", [self._entity_initial(slot.entity) for slot in self.slots])
        kwargs["form_kwargs"] = {**options.options, **(kwargs.get("form_kwargs") or {})}
        super().__init__(data, files, **kwargs)

    @classmethod
    def get_default_prefix(cls) -> str:
        return "translations"

    @classmethod
    def get_data_class(cls) -> type:
        data_class = getattr(cls.form, "data_class", None)
        if data_class is None:
            data_class = getattr(getattr(cls.form, "Meta", None), "model", None)
        return data_class or dict

    def set_translator(self, translator: Any) -> None:
        self.translator = translator

    def set_session(self, session: Optional[Session]) -> None:
        self.session = session
        self.sorter.session = session

    def set_request(self, request: Any) -> None:
        self.request = request

    def request_locale(self) -> str:
        if self.request is None:
            return settings.default_locale
        return (
            getattr(self.request, "LANGUAGE_CODE", None)
            or translation.get_language()
            or settings.default_locale
        )

    def get_translator(self) -> Any:
        if self.translator is None and self.translator_hub is not None:
            self.translator = self.translator_hub.get_translator_by_locale(self.request_locale())
        return self.translator

    def _entity_initial(self, entity: Any) -> Dict[str, Any]:
        locale_attribute = self.sorter.locale_attribute
        return {
            name: self.sorter.read_value(entity, name)
            for name in self.form.base_fields
            if name != locale_attribute
        }

    def initial_form_count(self) -> int:
        return len(self.slots)

    def total_form_count(self) -> int:
        return len(self.slots)

    def add_prefix(self, index) -> str:
        if index == DJANGO_PROTOTYPE_INDEX:
            return "%s-%s" % (self.prefix, self.editor_options.prototype_name)
        if isinstance(index, int) and 0 <= index < len(self.slots):
            return "%s-%s" % (self.prefix, self.slots[index].key)
        return super().add_prefix(index)

    def _submitted_blank(self, index: int) -> bool:
        prefix = self.add_prefix(index)
        skipped = set(self.editor_options.auto_remove_ignore_fields) | {self.sorter.locale_attribute}
        for name, field in self.form.base_fields.items():
            if name in skipped:
                continue
            value = field.widget.value_from_datadict(self.data, self.files, "%s-%s" % (prefix, name))
            if not is_blank(value):
                return False
        return True

    def _construct_form(self, i, **kwargs) -> BaseForm:
        if (
            self.is_bound
            and self.editor_options.auto_remove_empty_translations
            and i < len(self.slots)
            and self._submitted_blank(i)
        ):
            # Blank translations are dropped on save, they are not validated.
            self._blank_submissions.add(i)
            kwargs["initial"] = {}
            kwargs["empty_permitted"] = True
        return super()._construct_form(i, **kwargs)

    @property
    def forms_by_locale(self) -> Dict[Optional[str], BaseForm]:
        return {slot.locale: form for slot, form in zip(self.slots, self.forms)}

    def save(self) -> List[Any]:
        """
        Writes the submitted values onto the translation entities.

        Returns the kept translations in locale order followed by the
        translations of locales the editor does not manage.
        """
        if not self.is_valid():
            raise ValueError(
                "The translations could not be saved because the data didn't validate."
            )

        options = self.editor_options
        deleted = {id(form) for form in self.deleted_forms}
        locale_attribute = self.sorter.locale_attribute
        kept: List[Any] = []

        for index, (slot, form) in enumerate(zip(self.slots, self.forms)):
            entity = slot.entity
            if id(form) in deleted or index in self._blank_submissions:
                self.sorter.remove(entity)
                continue

            for name, value in form.cleaned_data.items():
                if name == locale_attribute or name in ("DELETE", "ORDER"):
                    continue
                self.sorter.write_value(entity, name, value)
            self.sorter.write_locale(entity, slot.locale)

            if options.auto_remove_empty_translations and self.sorter.is_empty(entity):
                self.sorter.remove(entity)
                continue
            kept.append(entity)

        logger.info(
            "Saved translations class=%s kept=%s removed=%s",
            self.sorter.data_class.__name__,
            len(kept),
            len(self.slots) - len(kept),
        )
        return kept + list(self.sorter.extras)

    def get_locale_titles(self) -> Dict[str, str]:
        return locale_titles(self.editor_options.locales, self.request_locale())

    def collect_errors(self, titles: Optional[Dict[str, str]] = None) -> ErrorTree:
        options = self.editor_options
        if not options.all_errors or len(options.locales) < 2:
            return ErrorTree()

        labels = dict(titles if titles is not None else self.get_locale_titles())
        labels[settings.null_locale_key] = editor_text(self.get_translator())["null_locale"]
        return collect_error_tree(self, self.get_translator(), labels)

    def get_selected_locale(self) -> str:
        """Key of the single tab opened on render."""
        options = self.editor_options
        choices = list(options.locales)
        default = None
        if options.null_locale_enabled:
            choices.insert(0, settings.null_locale_key)
            if options.null_locale_selected:
                default = settings.null_locale_key
        return selected_locale(self.request, choices, default)

    def get_context(self) -> Dict[str, Any]:
        context = super().get_context()
        options = self.editor_options
        titles = self.get_locale_titles()
        text = editor_text(self.get_translator())

        context.update(
            multipart=self.is_multipart(),
            null_locale_enabled=options.null_locale_enabled,
            null_locale_selected=options.null_locale_selected,
            locale_titles=titles,
            current_selected_lang=self.get_selected_locale(),
            form_all_errors=self.collect_errors(titles),
            error_bubbling=options.error_bubbling,
            editor_text=text,
            locale_forms=[
                (slot.key, titles.get(slot.key, text["null_locale"]), form)
                for slot, form in zip(self.slots, self.forms)
            ],
            all_locales_value=settings.all_locales_value,
            cookie_name=settings.cookie_name,
            null_locale_key=settings.null_locale_key,
            prototype=self.empty_form if options.prototype and options.allow_add else None,
        )
        return context


def translations_formset_factory(
    form: type[BaseForm],
    formset: type[BaseTranslationsFormSet] = BaseTranslationsFormSet,
    **options: Any,
) -> type[BaseTranslationsFormSet]:
    """Builds a translations editor for the ``form`` prototype, fails fast without locales."""
    resolved = resolve_options(**options).require_locales()
    editor = formset_factory(
        form,
        formset=formset,
        extra=0,
        can_order=False,
        can_delete=resolved.allow_delete,
        can_delete_extra=False,
        max_num=len(resolved.editor_locales),
    )
    editor.editor_options = resolved
    logger.debug(
        "Built translations editor form=%s locales=%s null_locale=%s",
        form.__name__,
        resolved.locales,
        resolved.null_locale_enabled,
    )
    return editor
