"""
Locale titles and the remembered locale selection of the editor.

Titles are resolved with Babel in the language of the current request, the
selection is kept client side in a cookie.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Optional, Sequence

from babel import Locale, UnknownLocaleError

from translation_editor.config import settings

logger = logging.getLogger(__name__)

COOKIE_MAX_AGE = 365 * 24 * 60 * 60


def _parse_locale(code: str) -> Locale:
    return Locale.parse(code, sep="-" if "-" in code else "_")


def locale_display_name(locale: str, display_locale: Optional[str] = None) -> str:
    """
    Name of ``locale`` written in ``display_locale``.

    Args:
        locale: Locale identifier, e.g. 'fr' or 'pt_BR'
        display_locale: Locale of the reader, defaults to the configured one

    Returns:
        Display name, or the identifier itself when Babel does not know it

    Examples:
        >>> locale_display_name('fr', 'en')
        'French'
        >>> locale_display_name('de', 'de')
        'Deutsch'
    """
    try:
        parsed = _parse_locale(locale)
    except (UnknownLocaleError, ValueError) as e:
        logger.warning("Unknown locale for display name locale=%s error=%s", locale, e)
        return locale

    try:
        reader = _parse_locale(display_locale or settings.default_locale)
    except (UnknownLocaleError, ValueError) as e:
        logger.warning(
            "Unknown display locale, using default display_locale=%s error=%s",
            display_locale,
            e,
        )
        reader = _parse_locale(settings.default_locale)

    return parsed.get_display_name(reader) or locale


def locale_titles(locales: Iterable[str], display_locale: Optional[str] = None) -> Dict[str, str]:
    return {code: locale_display_name(code, display_locale) for code in locales}


def selected_locale(request: Any, locales: Sequence[str], default: Optional[str] = None) -> str:
    """
    Locale tab to open, read from the selection cookie of ``request``.

    Falls back to ``default`` (the first locale when not given) without a
    request, without the cookie, or when the cookie names an unknown tab.
    """
    if default is None:
        default = locales[0]
    if request is None:
        return default

    cookies = getattr(request, "COOKIES", None) or {}
    current = cookies.get(settings.cookie_name)
    if current is None:
        return default
    if current != settings.all_locales_value and current not in locales:
        logger.debug("Ignoring stale locale selection cookie value=%s", current)
        return default
    return current


def remember_selected_locale(response: Any, locale: str) -> None:
    response.set_cookie(
        settings.cookie_name,
        locale,
        max_age=COOKIE_MAX_AGE,
        samesite="Lax",
    )
