"""Shared fixtures: a two-locale registry, an annotated template and translation files."""

import json

import pytest

from static_i18n.core.registry import LocaleRegistry


TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title data-i18n="seo.title">Jane Doe - Developer</title>
    <meta name="description" data-i18n-content="seo.description" content="Developer portfolio">
    <meta property="og:locale" content="en_US">
    <meta property="og:url" content="https://example.test/">
    <meta property="twitter:url" content="https://example.test/">
    <link rel="canonical" href="https://example.test/">
    <script type="application/ld+json">
    {"@context": "https://schema.org", "@type": "Person", "name": "Jane Doe", "jobTitle": "Developer", "description": "Builds things", "worksFor": {"@type": "Organization", "name": "Freelance"}}
    </script>
</head>
<body>
    <nav>
        <a href="#about" data-i18n="nav.home">Home</a>
        <button class="menu" data-i18n-aria-label="nav.toggle" aria-label="Toggle menu"></button>
    </nav>
    <h1 class="glitch" data-i18n-data-text="hero.title" data-text="Hello" data-i18n="hero.title">Hello</h1>
    <a data-i18n-href="links.cv" href="/cv-en.pdf" data-i18n="links.cv_label">Download CV</a>
    <p data-i18n="hero.missing">Stays as authored</p>
</body>
</html>
"""

EN_TRANSLATIONS = {
    "nav.home": "Home",
    "seo.title_about": "About | Jane Doe",
    "seo.title_projects": "Projects | Jane Doe",
    "seo.title_contact": "Contact | Jane Doe",
}

CS_TRANSLATIONS = {
    "nav.home": "Domů",
    "nav.toggle": 'Přepnout "menu"',
    "seo.title": "Jana Doe - Vývojářka",
    "seo.description": "Portfolio & projekty",
    "hero.title": "Ahoj",
    "links.cv": "/cv-cs.pdf",
    "links.cv_label": "Stáhnout CV",
    "schema.jobTitle": "Vývojářka",
    "schema.worksFor": "Na volné noze",
    "seo.title_about": "O mně | Jana Doe",
    "seo.title_projects": "Projekty | Jana Doe",
}


@pytest.fixture
def registry():
    """Registry with English at the root and Czech under /cs."""
    return LocaleRegistry(
        default_locale="en",
        locales=("en", "cs"),
        path_map={"en": "", "cs": "/cs"},
        domain="https://example.test",
        lang_map={"en": "en", "cs": "cs"},
        og_locale_map={"en": "en_US", "cs": "cs_CZ"},
    )


@pytest.fixture
def template():
    return TEMPLATE


@pytest.fixture
def cs_translations():
    return dict(CS_TRANSLATIONS)


@pytest.fixture
def translations_dir(tmp_path):
    """Directory with en.json and cs.json."""
    directory = tmp_path / "i18n"
    directory.mkdir()
    (directory / "en.json").write_text(json.dumps(EN_TRANSLATIONS), encoding="utf-8")
    (directory / "cs.json").write_text(
        json.dumps(CS_TRANSLATIONS, ensure_ascii=False), encoding="utf-8"
    )
    return directory


@pytest.fixture
def locale_config_file(tmp_path):
    """JSON locale config equivalent to the registry fixture."""
    path = tmp_path / "locales.json"
    path.write_text(json.dumps({
        "default_locale": "en",
        "locales": ["en", "cs"],
        "path_map": {"en": "", "cs": "/cs"},
        "lang_map": {"en": "en", "cs": "cs"},
        "og_locale_map": {"en": "en_US", "cs": "cs_CZ"},
        "domain": "https://example.test",
    }), encoding="utf-8")
    return path


@pytest.fixture
def dist_dir(tmp_path, template):
    """Build output directory holding the template as index.html."""
    directory = tmp_path / "dist"
    directory.mkdir()
    (directory / "index.html").write_text(template, encoding="utf-8")
    return directory
