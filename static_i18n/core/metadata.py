"""Locale-specific document metadata.

Single-value fields (``<html lang>``, og:locale, canonical and og/twitter
URLs) are rewritten in place; hreflang alternates and the SEO title data
are injected right before ``</head>``.
"""

import json
import re
from typing import Callable, Optional

from static_i18n.core.errors import MissingHeadError
from static_i18n.core.markers import Attribute, Tag, iter_tags
from static_i18n.core.registry import LocaleRegistry

HEAD_END_PATTERN = re.compile(r"</head\s*>", re.IGNORECASE)

SEO_DATA_ID = "i18n-seo-data"

# Keys exposed to the title-swapping script, in output order
SEO_TITLE_KEYS = {
    "title_about": "seo.title_about",
    "title_projects": "seo.title_projects",
    "title_contact": "seo.title_contact",
}


def _attr_equals(tag: Tag, name: str, value: str) -> bool:
    attribute = tag.get(name)
    return attribute is not None and (attribute.value or "").lower() == value


def _set_attribute(
    html: str,
    predicate: Callable[[Tag], bool],
    attr: str,
    value: str
) -> str:
    """Set ``attr`` on the first start tag matching ``predicate``.

    A document without a matching tag is returned unchanged.
    """
    for tag in iter_tags(html):
        if tag.closing or not predicate(tag):
            continue
        attribute = tag.get(attr)
        if attribute is None:
            continue
        return _replace_value(html, attribute, value)
    return html


def _replace_value(html: str, attribute: Attribute, value: str) -> str:
    """Replace an attribute value, keeping its quotes; bare and empty values get double quotes.

    Values set here come from the locale config and never contain quotes.
    """
    if attribute.quote:
        return html[:attribute.value_start] + value + html[attribute.value_end:]
    if attribute.value is None:
        return f'{html[:attribute.end]}="{value}"{html[attribute.end:]}'
    return f'{html[:attribute.value_start]}"{value}"{html[attribute.value_end:]}'


def _meta_property(name: str) -> Callable[[Tag], bool]:
    # twitter:* tags are commonly written with name= instead of property=
    return lambda tag: tag.name == "meta" and (
        _attr_equals(tag, "property", name) or _attr_equals(tag, "name", name)
    )


def set_html_lang(html: str, locale: str, registry: LocaleRegistry) -> str:
    """Set <html lang="..."> to the locale's language value."""
    lang = registry.html_lang(locale)

    for tag in iter_tags(html):
        if tag.closing or tag.name != "html":
            continue
        attribute = tag.get("lang")
        if attribute is None:
            insert_at = tag.start + len("<html")
            return f'{html[:insert_at]} lang="{lang}"{html[insert_at:]}'
        return _replace_value(html, attribute, lang)

    return html


def set_og_locale(html: str, locale: str, registry: LocaleRegistry) -> str:
    """Set <meta property="og:locale" content="...">."""
    return _set_attribute(html, _meta_property("og:locale"), "content", registry.og_locale(locale))


def set_canonical_url(html: str, locale: str, registry: LocaleRegistry) -> str:
    """Point <link rel="canonical"> at the locale's canonical URL."""
    return _set_attribute(
        html,
        lambda tag: tag.name == "link" and _attr_equals(tag, "rel", "canonical"),
        "href",
        registry.canonical_url(locale),
    )


def set_meta_urls(html: str, locale: str, registry: LocaleRegistry) -> str:
    """Point og:url and twitter:url at the locale's canonical URL."""
    url = registry.canonical_url(locale)
    html = _set_attribute(html, _meta_property("og:url"), "content", url)
    html = _set_attribute(html, _meta_property("twitter:url"), "content", url)
    return html


def _insert_before_head_end(html: str, block: str) -> str:
    match = HEAD_END_PATTERN.search(html)
    if not match:
        raise MissingHeadError("Document has no </head>; cannot inject locale metadata")
    return f"{html[:match.start()]}{block}\n{html[match.start():]}"


def hreflang_links(registry: LocaleRegistry) -> list[tuple[str, str]]:
    """(hreflang, href) pairs: one per locale plus x-default."""
    links = [
        (registry.html_lang(locale), registry.canonical_url(locale))
        for locale in registry.locales
    ]
    links.append(("x-default", registry.canonical_url(registry.default_locale)))
    return links


def inject_hreflang_tags(html: str, registry: LocaleRegistry) -> str:
    """Insert <link rel="alternate" hreflang="..."> tags before </head>."""
    tags = [
        f'    <link rel="alternate" hreflang="{lang}" href="{url}">'
        for lang, url in hreflang_links(registry)
    ]
    return _insert_before_head_end(html, "\n".join(tags))


def seo_data(translations: dict[str, str]) -> dict[str, str]:
    return {name: translations.get(key, "") for name, key in SEO_TITLE_KEYS.items()}


def inject_seo_data(html: str, translations: dict[str, str]) -> str:
    """Embed the translated section titles as a JSON script element before </head>."""
    payload = json.dumps(seo_data(translations), ensure_ascii=False, separators=(",", ":"))
    payload = payload.replace("</", "<\\/")
    script = f'    <script id="{SEO_DATA_ID}" type="application/json">{payload}</script>'
    return _insert_before_head_end(html, script)


def rewrite_metadata(
    html: str,
    locale: str,
    registry: LocaleRegistry,
    translations: Optional[dict[str, str]] = None
) -> str:
    """
    Apply every locale-specific metadata change.

    Args:
        html: Document to rewrite
        locale: Target locale code
        registry: Locale registry
        translations: When given, the SEO title data is injected as well

    Raises:
        MissingHeadError: The document has no </head>
    """
    registry.require(locale)

    html = set_html_lang(html, locale, registry)
    html = set_og_locale(html, locale, registry)
    html = set_canonical_url(html, locale, registry)
    html = set_meta_urls(html, locale, registry)
    html = inject_hreflang_tags(html, registry)

    if translations is not None:
        html = inject_seo_data(html, translations)

    return html
