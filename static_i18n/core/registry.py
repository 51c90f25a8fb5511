"""Locale registry: which locales a site is built for and where each one is served."""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from static_i18n.core.errors import ConfigurationError, UnknownLocaleError


@dataclass(frozen=True)
class LocaleRegistry:
    """Static description of every locale the site is rendered in.

    The default locale is served at the domain root (empty path prefix);
    every other locale lives under its own prefix, e.g. ``/cs``.
    """

    default_locale: str
    locales: tuple[str, ...]
    path_map: dict[str, str]
    domain: str
    lang_map: dict[str, str] = field(default_factory=dict)
    og_locale_map: dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        # Frozen dataclass, so normalise through object.__setattr__
        object.__setattr__(self, "locales", tuple(self.locales))
        object.__setattr__(self, "domain", self.domain.rstrip("/"))
        self._validate()

    def _validate(self) -> None:
        if not self.locales:
            raise ConfigurationError("At least one locale must be configured")

        if len(set(self.locales)) != len(self.locales):
            raise ConfigurationError(f"Duplicate locale codes in {list(self.locales)}")

        if self.default_locale not in self.locales:
            raise ConfigurationError(
                f"Default locale {self.default_locale!r} is not one of {list(self.locales)}"
            )

        if not self.domain:
            raise ConfigurationError("A domain is required for canonical URLs")

        seen_prefixes: set[str] = set()
        for locale in self.locales:
            if locale not in self.path_map:
                raise ConfigurationError(f"No path prefix configured for {locale!r}")

            prefix = self.path_map[locale]
            if locale == self.default_locale:
                if prefix != "":
                    raise ConfigurationError(
                        f"Default locale {locale!r} must be served at the root, got {prefix!r}"
                    )
            elif not prefix.startswith("/") or prefix.endswith("/"):
                raise ConfigurationError(
                    f"Path prefix for {locale!r} must start and not end with '/', got {prefix!r}"
                )

            if prefix in seen_prefixes:
                raise ConfigurationError(f"Path prefix {prefix!r} is used more than once")
            seen_prefixes.add(prefix)

    @classmethod
    def from_config(cls, config) -> "LocaleRegistry":
        """Build a registry from a module (or object) of upper-case constants."""
        return cls(
            default_locale=config.DEFAULT_LOCALE,
            locales=tuple(config.LOCALES),
            path_map=dict(config.PATH_MAP),
            domain=config.DOMAIN,
            lang_map=dict(getattr(config, "LANG_MAP", {})),
            og_locale_map=dict(getattr(config, "OG_LOCALE_MAP", {})),
        )

    @classmethod
    def from_file(cls, path: Path) -> "LocaleRegistry":
        """Build a registry from a JSON file.

        Expected keys: default_locale, locales, path_map, domain and
        optionally lang_map and og_locale_map.
        """
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Cannot read locale config {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Locale config {path} must be a JSON object")

        try:
            return cls(
                default_locale=data["default_locale"],
                locales=tuple(data["locales"]),
                path_map=dict(data["path_map"]),
                domain=data["domain"],
                lang_map=dict(data.get("lang_map", {})),
                og_locale_map=dict(data.get("og_locale_map", {})),
            )
        except KeyError as e:
            raise ConfigurationError(f"Locale config {path} is missing {e}") from e
        except (AttributeError, TypeError, ValueError) as e:
            raise ConfigurationError(f"Locale config {path} is invalid: {e}") from e

    def require(self, locale: str) -> str:
        """Return ``locale`` if it is registered, otherwise raise."""
        if locale not in self.locales:
            raise UnknownLocaleError(locale)
        return locale

    def is_default(self, locale: str) -> bool:
        return locale == self.default_locale

    def path_prefix(self, locale: str) -> str:
        return self.path_map[self.require(locale)]

    def canonical_url(self, locale: str) -> str:
        """Absolute URL the locale is served at, always with a trailing slash."""
        return f"{self.domain}{self.path_prefix(locale)}/"

    def html_lang(self, locale: str) -> str:
        return self.lang_map.get(self.require(locale), locale)

    def og_locale(self, locale: str) -> str:
        return self.og_locale_map.get(self.require(locale), locale)

    def output_path(self, locale: str) -> Optional[str]:
        """File name of the locale's page inside the build output.

        Returns None for the default locale, whose page replaces the
        original document.
        """
        if self.is_default(locale):
            return None
        return f"{self.path_prefix(locale).lstrip('/')}/index.html"
