"""Build-time i18n plugin.

Renders the bundle's HTML page once per locale. The default locale's page
replaces the original; every other locale is emitted as
``<prefix>/index.html``. A multilingual sitemap.xml is emitted last.
"""

from datetime import date
from pathlib import Path
from typing import Optional

from static_i18n.core.bundle import Bundle
from static_i18n.core.markers import apply_markers, marker_keys, strip_markers
from static_i18n.core.metadata import rewrite_metadata
from static_i18n.core.registry import LocaleRegistry
from static_i18n.core.sitemap import generate_sitemap
from static_i18n.core.structured_data import update_structured_data
from static_i18n.core.translations import load_translations
from static_i18n.plugins.base import BuildPlugin
from static_i18n.plugins.i18n import config

SITEMAP_FILE = "sitemap.xml"


def process_html(
    html: str,
    locale: str,
    registry: LocaleRegistry,
    translations: dict[str, str]
) -> str:
    """Produce the final page for one locale from the source document."""
    html = apply_markers(html, translations)
    html = rewrite_metadata(html, locale, registry, translations)
    html = update_structured_data(html, translations)
    return strip_markers(html)


class I18nPlugin(BuildPlugin):
    """Localizes the bundle's HTML page into every configured locale."""

    def __init__(
        self,
        registry: Optional[LocaleRegistry] = None,
        translations_dir: Optional[Path] = None,
        today: Optional[date] = None
    ):
        self.registry = registry or LocaleRegistry.from_config(config)
        self.translations_dir = Path(translations_dir or config.TRANSLATIONS_DIR)
        self.today = today

    @property
    def name(self) -> str:
        return "i18n"

    def _find_html(self, bundle: Bundle) -> Optional[str]:
        html_assets = bundle.html_assets()
        if "index.html" in html_assets:
            return "index.html"
        return html_assets[0] if html_assets else None

    def generate_bundle(self, bundle: Bundle) -> None:
        """Emit one page per locale plus sitemap.xml."""
        html_file = self._find_html(bundle)
        if html_file is None:
            print("No HTML asset in bundle, skipping localization")
            return

        source = bundle[html_file]
        registry = self.registry

        # Every table is loaded up front so a bad file fails the build before any page is emitted
        tables = {
            locale: load_translations(locale, self.translations_dir, registry)
            for locale in registry.locales
        }

        keys = {key for kind_keys in marker_keys(source).values() for key in kind_keys}

        print(f"Localizing {html_file} into {len(registry.locales)} locales...")

        for locale in registry.locales:
            translations = tables[locale]
            output = process_html(source, locale, registry, translations)

            file_name = registry.output_path(locale) or html_file
            bundle.emit_file(file_name, output)

            translated = len([key for key in keys if key in translations])
            print(f"  [{locale}] {file_name} ({translated}/{len(keys)} keys translated)")

        bundle.emit_file(SITEMAP_FILE, generate_sitemap(registry, today=self.today))
        print(f"  Saved: {SITEMAP_FILE}")

    def run(self, dist_dir: Path) -> Bundle:
        """Localize an already built output directory in place."""
        bundle = super().run(dist_dir)
        print(f"\nDone! Wrote {len(bundle.emitted)} files to {dist_dir}")
        return bundle
