"""Tests for the command line interface."""

import pytest

from static_i18n.main import main


class TestBuildCommand:
    """Tests for `build`."""

    def test_build(self, dist_dir, translations_dir, locale_config_file, capsys):
        """Localizes the directory and reports progress."""
        main(["build", str(dist_dir), "-t", str(translations_dir), "-c", str(locale_config_file)])

        assert (dist_dir / "cs" / "index.html").exists()
        assert (dist_dir / "sitemap.xml").exists()
        out = capsys.readouterr().out
        assert "[cs] cs/index.html" in out
        assert "Done!" in out

    def test_build_error_exits(self, dist_dir, tmp_path, locale_config_file, capsys):
        """Configuration errors are reported on stderr with exit status 1."""
        with pytest.raises(SystemExit) as exc_info:
            main(["build", str(dist_dir), "-t", str(tmp_path / "none"), "-c", str(locale_config_file)])

        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err


class TestSitemapCommand:
    """Tests for `sitemap`."""

    def test_prints_to_stdout(self, locale_config_file, capsys):
        """Without -o the sitemap goes to stdout."""
        main(["sitemap", "-c", str(locale_config_file)])
        out = capsys.readouterr().out
        assert out.startswith('<?xml version="1.0" encoding="UTF-8"?>')
        assert "<loc>https://example.test/cs/</loc>" in out

    def test_writes_file(self, locale_config_file, tmp_path):
        """-o writes the sitemap to a file."""
        output = tmp_path / "out" / "sitemap.xml"
        main(["sitemap", "-c", str(locale_config_file), "-o", str(output)])
        assert "<urlset" in output.read_text(encoding="utf-8")

    def test_config_not_an_object(self, tmp_path, capsys):
        """A config file that is not a JSON object exits with an error message."""
        path = tmp_path / "locales.json"
        path.write_text("[]", encoding="utf-8")
        with pytest.raises(SystemExit) as exc_info:
            main(["sitemap", "-c", str(path)])

        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err


class TestKeysCommand:
    """Tests for `keys`."""

    def test_lists_keys(self, dist_dir, capsys):
        """Keys are grouped by marker attribute."""
        main(["keys", str(dist_dir / "index.html")])
        out = capsys.readouterr().out
        assert "data-i18n (5):" in out
        assert "data-i18n-href (1):" in out
        assert "  links.cv" in out

    def test_missing_template(self, tmp_path, capsys):
        """A missing template is an error."""
        with pytest.raises(SystemExit):
            main(["keys", str(tmp_path / "missing.html")])
        assert "Template not found" in capsys.readouterr().err


def test_no_command_prints_help(capsys):
    """Running without a subcommand shows usage."""
    main([])
    assert "usage:" in capsys.readouterr().out
