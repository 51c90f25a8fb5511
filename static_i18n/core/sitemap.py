"""Multilingual sitemap generation."""

import xml.etree.ElementTree as ET
from datetime import date
from typing import Optional

from static_i18n.core.metadata import hreflang_links
from static_i18n.core.registry import LocaleRegistry

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
XHTML_NS = "http://www.w3.org/1999/xhtml"

DEFAULT_PRIORITY = "1.0"
LOCALE_PRIORITY = "0.9"

ET.register_namespace("", SITEMAP_NS)
ET.register_namespace("xhtml", XHTML_NS)


def generate_sitemap(registry: LocaleRegistry, today: Optional[date] = None) -> str:
    """
    Build sitemap.xml listing every locale with its hreflang alternates.

    Args:
        registry: Locale registry
        today: Date written to <lastmod> (defaults to today)

    Returns:
        The sitemap document, with XML declaration
    """
    lastmod = (today or date.today()).isoformat()
    alternates = hreflang_links(registry)

    urlset = ET.Element(f"{{{SITEMAP_NS}}}urlset")

    for locale in registry.locales:
        url = ET.SubElement(urlset, f"{{{SITEMAP_NS}}}url")
        ET.SubElement(url, f"{{{SITEMAP_NS}}}loc").text = registry.canonical_url(locale)

        for hreflang, href in alternates:
            ET.SubElement(url, f"{{{XHTML_NS}}}link", {
                "rel": "alternate",
                "hreflang": hreflang,
                "href": href,
            })

        ET.SubElement(url, f"{{{SITEMAP_NS}}}lastmod").text = lastmod
        priority = DEFAULT_PRIORITY if registry.is_default(locale) else LOCALE_PRIORITY
        ET.SubElement(url, f"{{{SITEMAP_NS}}}priority").text = priority

    ET.indent(urlset, space="  ")
    body = ET.tostring(urlset, encoding="unicode")
    return f'<?xml version="1.0" encoding="UTF-8"?>\n{body}\n'
