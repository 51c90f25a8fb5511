"""Errors raised by the localization pipeline."""


class I18nBuildError(Exception):
    """Base class for errors that abort a localized build."""


class ConfigurationError(I18nBuildError):
    """The locale configuration is invalid."""


class UnknownLocaleError(ConfigurationError):
    """A locale code is not part of the registry."""

    def __init__(self, locale: str):
        self.locale = locale
        super().__init__(f"Unknown locale: {locale!r}")


class MissingTranslationFile(ConfigurationError):
    """A locale's translation file is missing, unreadable or malformed."""

    def __init__(self, locale: str, path, reason: str = "not found"):
        self.locale = locale
        self.path = path
        super().__init__(f"Translation file for {locale!r} {reason}: {path}")


class MissingHeadError(I18nBuildError):
    """The document has no </head> to inject alternate links into."""
