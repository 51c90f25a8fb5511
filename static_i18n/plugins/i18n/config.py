"""Locale configuration for the site.

Add a language by extending the lists and maps below and adding
<TRANSLATIONS_DIR>/<locale>.json.
"""

from pathlib import Path

DEFAULT_LOCALE = "en"

LOCALES = ["en", "cs"]

# URL path prefixes; the default locale is served at the root
PATH_MAP = {
    "en": "",
    "cs": "/cs",
}

# <html lang="..."> values
LANG_MAP = {
    "en": "en",
    "cs": "cs",
}

# <meta property="og:locale"> values
OG_LOCALE_MAP = {
    "en": "en_US",
    "cs": "cs_CZ",
}

# Used for canonical URLs, hreflang alternates and the sitemap
DOMAIN = "https://example.com"

# One <locale>.json file per locale
TRANSLATIONS_DIR = Path("src/i18n")

# Output directory of the site build
DIST_DIR = Path("dist")
