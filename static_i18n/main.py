"""CLI entry point for static site localization."""

import argparse
import sys
from pathlib import Path

from static_i18n.core.errors import I18nBuildError
from static_i18n.core.markers import marker_keys
from static_i18n.core.registry import LocaleRegistry
from static_i18n.core.sitemap import generate_sitemap
from static_i18n.plugins.i18n import config
from static_i18n.plugins.i18n.plugin import I18nPlugin


def load_registry(args) -> LocaleRegistry:
    """Registry from --config if given, otherwise from the site config module."""
    if args.config:
        return LocaleRegistry.from_file(args.config)
    return LocaleRegistry.from_config(config)


def build_command(args):
    """Handle the build subcommand."""
    registry = load_registry(args)
    plugin = I18nPlugin(registry=registry, translations_dir=args.translations)
    plugin.run(args.dist)


def sitemap_command(args):
    """Handle the sitemap subcommand."""
    sitemap = generate_sitemap(load_registry(args))

    if args.output is None:
        sys.stdout.write(sitemap)
        return

    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(sitemap, encoding="utf-8")
    print(f"Saved: {args.output}")


def keys_command(args):
    """Handle the keys subcommand."""
    if not args.template.exists():
        raise I18nBuildError(f"Template not found: {args.template}")

    keys = marker_keys(args.template.read_text(encoding="utf-8"))

    for kind, kind_keys in keys.items():
        if not kind_keys:
            continue
        print(f"{kind.marker_attr} ({len(kind_keys)}):")
        for key in kind_keys:
            print(f"  {key}")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Build-time localization of static HTML pages",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Localize the site build in dist/
  python -m static_i18n.main build dist

  # Print the sitemap for a custom locale config
  python -m static_i18n.main sitemap -c locales.json

  # List translation keys used by a template
  python -m static_i18n.main keys index.html
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Build subcommand
    build_parser = subparsers.add_parser(
        "build",
        help="Localize a built site directory in place"
    )
    build_parser.add_argument(
        "dist",
        nargs="?",
        type=Path,
        default=config.DIST_DIR,
        help=f"Build output directory (default: {config.DIST_DIR})"
    )
    build_parser.add_argument(
        "-t", "--translations",
        type=Path,
        default=config.TRANSLATIONS_DIR,
        help=f"Directory of <locale>.json files (default: {config.TRANSLATIONS_DIR})"
    )
    build_parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help="JSON locale config (default: built-in site config)"
    )
    build_parser.set_defaults(func=build_command)

    # Sitemap subcommand
    sitemap_parser = subparsers.add_parser(
        "sitemap",
        help="Generate sitemap.xml only"
    )
    sitemap_parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help="JSON locale config (default: built-in site config)"
    )
    sitemap_parser.add_argument(
        "-o", "--output",
        type=Path,
        default=None,
        help="Output file (default: stdout)"
    )
    sitemap_parser.set_defaults(func=sitemap_command)

    # Keys subcommand
    keys_parser = subparsers.add_parser(
        "keys",
        help="List the translation keys referenced by a template"
    )
    keys_parser.add_argument(
        "template",
        type=Path,
        help="HTML template to scan"
    )
    keys_parser.set_defaults(func=keys_command)

    args = parser.parse_args(argv)

    # If no command specified, show help
    if not args.command:
        parser.print_help()
        return

    try:
        args.func(args)
    except I18nBuildError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
