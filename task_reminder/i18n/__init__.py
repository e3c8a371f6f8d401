# -*- coding: utf-8 -*-
"""
Internationalization (i18n) for Task Reminder.

User-facing messages (validation alerts, alarm dialog, audio notices) are
looked up through tr(). English and German are bundled; the system locale
picks the default.
"""

import logging
from typing import Optional

from PySide6.QtCore import QLocale

from task_reminder.i18n.translations import TRANSLATIONS

logger = logging.getLogger(__name__)

SUPPORTED_LANGUAGES = ["en", "de"]

_current_language = "en"


def detect_system_language() -> str:
    """Return 'de' for a German system locale, 'en' otherwise."""
    name = QLocale.system().name()  # e.g. "de_DE"
    if name.startswith("de"):
        return "de"
    return "en"


def set_language(lang: Optional[str] = None) -> str:
    """
    Set the UI language and Qt's default locale.

    'auto' or None follows the system. Unknown codes fall back to English.
    """
    global _current_language
    if lang in (None, "auto"):
        lang = detect_system_language()
    if lang not in SUPPORTED_LANGUAGES:
        logger.warning(f"Unsupported language '{lang}', using English")
        lang = "en"
    _current_language = lang

    if lang == "de":
        QLocale.setDefault(QLocale(QLocale.German))
    else:
        QLocale.setDefault(QLocale(QLocale.English))
    return lang


def tr(key: str, **kwargs) -> str:
    """
    Get the translated string for the given key.

    Missing keys fall back to English, then to the key itself.
    """
    text = TRANSLATIONS.get(_current_language, {}).get(key)
    if text is None:
        text = TRANSLATIONS["en"].get(key, key)

    if kwargs:
        try:
            text = text.format(**kwargs)
        except (KeyError, ValueError):
            logger.debug(f"Could not format translation '{key}' with {kwargs}")

    return text

