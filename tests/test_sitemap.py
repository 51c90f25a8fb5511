"""Tests for static_i18n.core.sitemap module."""

import xml.etree.ElementTree as ET
from datetime import date

import pytest

from static_i18n.core.registry import LocaleRegistry
from static_i18n.core.sitemap import SITEMAP_NS, XHTML_NS, generate_sitemap

NS = {"sm": SITEMAP_NS, "xhtml": XHTML_NS}


@pytest.fixture
def three_locales():
    return LocaleRegistry(
        default_locale="en",
        locales=("en", "cs", "de"),
        path_map={"en": "", "cs": "/cs", "de": "/de"},
        domain="https://example.test",
        lang_map={"en": "en", "cs": "cs", "de": "de-DE"},
    )


class TestGenerateSitemap:
    """Tests for generate_sitemap()."""

    def test_well_formed_with_declaration(self, registry):
        """Output is a parseable sitemap with an XML declaration."""
        sitemap = generate_sitemap(registry, today=date(2024, 5, 1))
        assert sitemap.startswith('<?xml version="1.0" encoding="UTF-8"?>\n<urlset')
        root = ET.fromstring(sitemap.encode("utf-8"))
        assert root.tag == f"{{{SITEMAP_NS}}}urlset"

    @pytest.mark.parametrize("fixture_name", ["registry", "three_locales"])
    def test_entry_and_alternate_counts(self, request, fixture_name):
        """|locales| url entries, each with |locales| + 1 alternate links."""
        registry = request.getfixturevalue(fixture_name)
        root = ET.fromstring(generate_sitemap(registry).encode("utf-8"))
        urls = root.findall("sm:url", NS)

        assert len(urls) == len(registry.locales)
        for url in urls:
            assert len(url.findall("xhtml:link", NS)) == len(registry.locales) + 1

    def test_locs_and_priorities(self, three_locales):
        """Exactly the default locale has priority 1.0."""
        root = ET.fromstring(generate_sitemap(three_locales).encode("utf-8"))
        entries = [
            (url.find("sm:loc", NS).text, url.find("sm:priority", NS).text)
            for url in root.findall("sm:url", NS)
        ]
        assert entries == [
            ("https://example.test/", "1.0"),
            ("https://example.test/cs/", "0.9"),
            ("https://example.test/de/", "0.9"),
        ]

    def test_alternates(self, three_locales):
        """Alternates use each locale's language value plus x-default."""
        root = ET.fromstring(generate_sitemap(three_locales).encode("utf-8"))
        links = root.find("sm:url", NS).findall("xhtml:link", NS)

        assert [(link.get("hreflang"), link.get("href")) for link in links] == [
            ("en", "https://example.test/"),
            ("cs", "https://example.test/cs/"),
            ("de-DE", "https://example.test/de/"),
            ("x-default", "https://example.test/"),
        ]
        assert all(link.get("rel") == "alternate" for link in links)

    def test_lastmod(self, registry):
        """lastmod is the build date in ISO format."""
        root = ET.fromstring(generate_sitemap(registry, today=date(2024, 5, 1)).encode("utf-8"))
        assert {url.find("sm:lastmod", NS).text for url in root.findall("sm:url", NS)} == {
            "2024-05-01"
        }

    def test_lastmod_defaults_to_today(self, registry):
        """Without a date, today's date is used."""
        assert f"<lastmod>{date.today().isoformat()}</lastmod>" in generate_sitemap(registry)

    def test_namespace_prefixes(self, registry):
        """Sitemap elements are unprefixed and alternates use the xhtml prefix."""
        sitemap = generate_sitemap(registry)
        assert 'xmlns="http://www.sitemaps.org/schemas/sitemap/0.9"' in sitemap
        assert 'xmlns:xhtml="http://www.w3.org/1999/xhtml"' in sitemap
        assert "<xhtml:link " in sitemap
