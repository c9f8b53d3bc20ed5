from __future__ import annotations

import logging
from collections.abc import Mapping, MutableMapping, Sized
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Sequence

from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import Session

from translation_editor.config import settings

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class LocaleSlot:
    locale: Optional[str]
    entity: Any
    is_new: bool = False

    @property
    def key(self) -> str:
        return self.locale if self.locale is not None else settings.null_locale_key


def is_blank(value: Any) -> bool:
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, Sized):
        return len(value) == 0
    return False


class TranslationDataSorter:
    """
    Orders translation entities by the editor locales.

    Missing locales get a new ``data_class`` instance, entities of locales the
    editor does not manage are kept aside in ``extras``.
    """

    def __init__(
        self,
        locale_field_name: str,
        data_class: type,
        locales: Sequence[Optional[str]],
        null_locale_enabled: bool = False,
        session: Optional[Session] = None,
        ignore_fields: Iterable[str] = (),
    ) -> None:
        self.locale_field_name = locale_field_name
        self.data_class = data_class
        self.locales = [code for code in locales if code is not None]
        self.null_locale_enabled = null_locale_enabled
        self.session = session
        self.ignore_fields = set(ignore_fields)
        self.extras: List[Any] = []
        self._mapper = sa_inspect(data_class, raiseerr=False)

    @property
    def _item_key(self) -> Optional[str]:
        name = self.locale_field_name
        if name.startswith("[") and name.endswith("]"):
            return name[1:-1]
        return None

    @property
    def locale_attribute(self) -> str:
        return self._item_key or self.locale_field_name

    def read_locale(self, entity: Any) -> Optional[str]:
        """
        Locale of ``entity``: ``"lang"`` reads the attribute, or the item when
        the entity is a mapping; ``"[lang]"`` always reads the item. Nested
        paths such as ``"language.code"`` are not supported.
        """
        key = self._item_key
        if key is not None:
            return entity.get(key) if isinstance(entity, Mapping) else None
        if isinstance(entity, Mapping):
            return entity.get(self.locale_field_name)
        return getattr(entity, self.locale_field_name, None)

    def write_locale(self, entity: Any, locale: Optional[str]) -> None:
        key = self._item_key
        if key is not None:
            if not isinstance(entity, MutableMapping):
                raise TypeError(
                    f"Locale path {self.locale_field_name!r} needs a mapping, got {type(entity).__name__}"
                )
            entity[key] = locale
        elif isinstance(entity, MutableMapping):
            entity[self.locale_field_name] = locale
        else:
            setattr(entity, self.locale_field_name, locale)

    def _create(self, locale: Optional[str]) -> Any:
        entity = self.data_class()
        self.write_locale(entity, locale)
        return entity

    def sort(self, translations: Any) -> List[LocaleSlot]:
        if translations is None:
            translations = ()
        elif isinstance(translations, Mapping):
            translations = translations.values()

        targets: List[Optional[str]] = list(self.locales)
        if self.null_locale_enabled:
            targets.insert(0, None)

        by_locale: dict[Optional[str], Any] = {}
        self.extras = []
        for entity in translations:
            locale = self.read_locale(entity)
            if locale is None and not self.null_locale_enabled:
                self.extras.append(entity)
            elif locale not in targets or locale in by_locale:
                self.extras.append(entity)
            else:
                by_locale[locale] = entity

        slots: List[LocaleSlot] = []
        for locale in targets:
            if locale in by_locale:
                slots.append(LocaleSlot(locale=locale, entity=by_locale[locale]))
            else:
                slots.append(LocaleSlot(locale=locale, entity=self._create(locale), is_new=True))

        logger.debug(
            "Sorted translations class=%s locales=%s created=%s extras=%s",
            getattr(self.data_class, "__name__", self.data_class),
            targets,
            sum(1 for slot in slots if slot.is_new),
            len(self.extras),
        )
        return slots

    def data_fields(self, entity: Any) -> List[str]:
        if self._mapper is not None:
            names = []
            for attr in self._mapper.column_attrs:
                if any(
                    getattr(column, "primary_key", False) or getattr(column, "foreign_keys", None)
                    for column in attr.columns
                ):
                    continue
                names.append(attr.key)
        elif isinstance(entity, Mapping):
            names = list(entity.keys())
        else:
            names = [name for name in vars(entity) if not name.startswith("_")]

        skipped = self.ignore_fields | {self.locale_attribute}
        return [name for name in names if name not in skipped]

    def read_value(self, entity: Any, name: str) -> Any:
        if isinstance(entity, Mapping):
            return entity.get(name)
        return getattr(entity, name, None)

    def write_value(self, entity: Any, name: str, value: Any) -> None:
        if isinstance(entity, MutableMapping):
            entity[name] = value
        else:
            setattr(entity, name, value)

    def is_empty(self, entity: Any) -> bool:
        return all(is_blank(self.read_value(entity, name)) for name in self.data_fields(entity))

    def remove(self, entity: Any) -> None:
        if self.session is None:
            return
        state = sa_inspect(entity, raiseerr=False)
        if state is None:
            return
        if state.persistent:
            self.session.delete(entity)
            logger.info(
                "Removed empty translation class=%s locale=%s",
                type(entity).__name__,
                self.read_locale(entity),
            )
        elif state.pending:
            self.session.expunge(entity)
            logger.debug(
                "Expunged pending empty translation class=%s locale=%s",
                type(entity).__name__,
                self.read_locale(entity),
            )
