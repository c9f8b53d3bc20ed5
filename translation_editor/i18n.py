from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

from fluent_compiler.bundle import FluentBundle
from fluentogram import FluentTranslator, TranslatorHub
from fluentogram.exceptions import KeyNotFoundError

from translation_editor.config import settings

logger = logging.getLogger(__name__)

_LOCALES_DIR = Path(__file__).resolve().parent / "locales"
_FALLBACK_LOCALE = "en"

EDITOR_TEXT_DEFAULTS: Dict[str, str] = {
    "all": "All languages",
    "null_locale": "Default",
    "errors": "Please correct the errors in the translations below.",
}

_EDITOR_TEXT_KEYS: Dict[str, str] = {
    "all": "translations-editor-all",
    "null_locale": "translations-editor-null-locale",
    "errors": "translations-editor-errors",
}


def dedupe(sequence: Iterable[str]) -> Tuple[str, ...]:
    seen: List[str] = []
    for item in sequence:
        if item not in seen:
            seen.append(item)
    return tuple(seen)


def _base_language(locale_code: str) -> str:
    return locale_code.replace("-", "_").split("_", 1)[0].lower()


def _fallback_chain(locale_code: str, root_locale: str) -> Tuple[str, ...]:
    return dedupe((locale_code, _base_language(locale_code), root_locale, _FALLBACK_LOCALE))


def packaged_locales() -> List[str]:
    return sorted(
        path.parent.parent.name for path in _LOCALES_DIR.glob("*/LC_MESSAGES/editor.ftl")
    )


def _translation_file(locale_code: str) -> Path:
    candidate = _LOCALES_DIR / locale_code / "LC_MESSAGES" / "editor.ftl"
    if candidate.exists():
        return candidate
    fallback = _LOCALES_DIR / _FALLBACK_LOCALE / "LC_MESSAGES" / "editor.ftl"
    if not fallback.exists():
        raise FileNotFoundError(
            f"Missing translation files for {locale_code!r} and fallback {_FALLBACK_LOCALE!r}"
        )
    return fallback


def _build_translator(locale_code: str) -> FluentTranslator:
    filenames = [str(_translation_file(locale_code))]
    translator = FluentBundle.from_files(
        locale=locale_code.replace("_", "-"),
        filenames=filenames,
        use_isolating=False,
    )
    return FluentTranslator(locale=locale_code, translator=translator)


def create_translator_hub(
    locales: Optional[Iterable[str]] = None,
    root_locale: Optional[str] = None,
) -> TranslatorHub:
    """Hub over the packaged editor strings, one translator per locale."""
    root = (root_locale or settings.default_locale or _FALLBACK_LOCALE).strip()
    codes = list(dedupe(code.strip() for code in (locales or packaged_locales()) if code.strip()))
    if root not in codes:
        codes.append(root)

    fallback_map: Dict[str, Tuple[str, ...]] = {}
    for locale_code in codes:
        fallback_map[locale_code] = _fallback_chain(locale_code, root)

    needed = dedupe(code for chain in fallback_map.values() for code in chain)
    translators = [_build_translator(locale_code) for locale_code in sorted(needed)]

    return TranslatorHub(
        fallback_map,
        translators,
        root_locale=root,
    )


def translate(translator: Any, key: str, default: Optional[str] = None) -> Optional[str]:
    """Looks ``key`` up with a fluentogram runner, ``default`` when it is missing."""
    if translator is None:
        return default
    try:
        value = translator.get(key)
    except (KeyError, KeyNotFoundError):
        logger.debug("Missing translation key=%s", key)
        value = None
    return value or default


def editor_text(translator: Any = None) -> Dict[str, str]:
    return {
        name: translate(translator, key, EDITOR_TEXT_DEFAULTS[name])
        for name, key in _EDITOR_TEXT_KEYS.items()
    }
