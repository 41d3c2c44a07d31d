"""
Localization utilities using Python's gettext.

Messages shown to the user are wrapped with `_()` so the tool itself can be
translated. Catalogs are looked up in the `locales` resource directory under
the `potx` domain; when none is found the text is returned unchanged.
"""
from __future__ import annotations

import gettext
import os
from typing import Optional

from babel import Locale, UnknownLocaleError

from PyPotx.Helpers.Resources import GetResourcePath

_translator: Optional[gettext.NullTranslations] = None
_domain = 'potx'


def _get_locale_dir() -> str:
    return GetResourcePath('locales')


def initialize_localization(language_code: Optional[str] = None) -> None:
    """
    Initialize the gettext translation system.

    Falls back to NullTranslations when no catalog exists for the language.
    """
    global _translator

    if language_code is None:
        language_code = os.getenv('POTX_UI_LANGUAGE', 'en')

    try:
        _translator = gettext.translation(_domain, localedir=_get_locale_dir(), languages=[language_code])
    except OSError:
        _translator = gettext.NullTranslations()


def _(text: str) -> str:
    """Return translated string for the active language."""
    if _translator:
        return _translator.gettext(text)
    return text


def normalise_locale_code(language_code: str) -> str:
    """
    Validate a language tag with Babel and return it in canonical form (e.g. 'pt_BR').

    Raises ValueError if Babel does not recognise the language.
    """
    try:
        locale = Locale.parse(language_code.strip().replace('-', '_'))
    except (UnknownLocaleError, TypeError) as e:
        raise ValueError(str(e))
    return str(locale)


def get_locale_display_name(locale_code: str) -> str:
    """
    Get the English display name for a locale code using Babel,
    or the code itself if Babel does not recognise it.
    """
    try:
        return Locale.parse(locale_code.replace('-', '_')).english_name or locale_code
    except (UnknownLocaleError, ValueError, TypeError):
        return locale_code
