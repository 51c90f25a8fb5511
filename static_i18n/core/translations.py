"""Translation table loading.

One flat JSON object per locale, stored as ``<translations_dir>/<locale>.json``.
Tables are self-contained: there is no fallback between locales.
"""

import json
from pathlib import Path
from typing import Optional

from static_i18n.core.errors import MissingTranslationFile
from static_i18n.core.registry import LocaleRegistry


def translation_path(locale: str, translations_dir: Path) -> Path:
    """Path of the translation file for a locale."""
    return Path(translations_dir) / f"{locale}.json"


def load_translations(
    locale: str,
    translations_dir: Path,
    registry: Optional[LocaleRegistry] = None
) -> dict[str, str]:
    """
    Load the translation table for one locale.

    Args:
        locale: Locale code (e.g., "cs")
        translations_dir: Directory holding one JSON file per locale
        registry: When given, the locale must be registered in it

    Returns:
        Mapping of dotted translation key to translated string

    Raises:
        UnknownLocaleError: The locale is not in the registry
        MissingTranslationFile: The file is missing, unreadable or not a flat
            object of strings
    """
    if registry is not None:
        registry.require(locale)

    path = translation_path(locale, translations_dir)

    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise MissingTranslationFile(locale, path) from e
    except OSError as e:
        raise MissingTranslationFile(locale, path, reason=f"unreadable ({e})") from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise MissingTranslationFile(locale, path, reason=f"is not valid JSON ({e})") from e

    if not isinstance(data, dict):
        raise MissingTranslationFile(locale, path, reason="is not a JSON object")

    # Flat tables only: nested objects would silently never match a marker key
    for key, value in data.items():
        if not isinstance(value, str):
            raise MissingTranslationFile(
                locale, path, reason=f"has a non-string value for {key!r}"
            )

    return data
