"""Build-time localization of static HTML pages."""

__version__ = "0.1.0"
