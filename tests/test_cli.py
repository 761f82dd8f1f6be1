"""Tests for the urlvariants command line interface."""

import json
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from typer.testing import CliRunner

from urlvariants import __version__
from urlvariants.cli import app


URLS = """\
# crawl output
https://example.com/about
https://example.com/en/about
https://example.com/es/sobre-nosotros

https://example.com/es/productos
https://example.com/fr/produits
"""


class TestCli(unittest.TestCase):
    """Test CLI commands end to end."""

    def setUp(self):
        """Isolate from any user config file."""
        self.runner = CliRunner()
        self.temp_dir = tempfile.TemporaryDirectory()
        self.temp_path = Path(self.temp_dir.name)

        patcher = patch(
            "urlvariants.core.config.get_default_config_path",
            return_value=self.temp_path / "absent.yaml",
        )
        patcher.start()
        self.addCleanup(patcher.stop)

    def tearDown(self):
        self.temp_dir.cleanup()

    def _urls_file(self, content: str = URLS) -> str:
        path = self.temp_path / "urls.txt"
        path.write_text(content, encoding="utf-8")
        return str(path)

    # ------------------------------------------------------------------------
    # detect
    # ------------------------------------------------------------------------

    def test_detect_text(self):
        """Test tab separated detection output."""
        result = self.runner.invoke(app, ["detect", self._urls_file()])

        self.assertEqual(result.exit_code, 0)
        lines = result.stdout.splitlines()
        self.assertEqual(len(lines), 5)
        self.assertEqual(lines[0], "-\tnone\thttps://example.com/about")
        self.assertEqual(lines[2], "es\tpath\thttps://example.com/sobre-nosotros")

    def test_detect_json(self):
        """Test JSON detection output."""
        result = self.runner.invoke(
            app,
            ["detect", "--format", "json"],
            input="https://es.example.com/about\n",
        )

        self.assertEqual(result.exit_code, 0)
        data = json.loads(result.stdout)
        self.assertEqual(data, [{
            "url": "https://es.example.com/about",
            "base_url": "https://example.com/about",
            "locale": "es",
            "signal": "subdomain",
            "position": None,
        }])

    def test_detect_skips_invalid_urls(self):
        """Test that invalid lines do not abort detection."""
        result = self.runner.invoke(
            app,
            ["detect"],
            input="http://[::1\nhttps://example.com/en/about\n",
        )

        self.assertEqual(result.exit_code, 0)
        self.assertIn("en\tpath\thttps://example.com/about", result.stdout)

    # ------------------------------------------------------------------------
    # group
    # ------------------------------------------------------------------------

    def test_group_text(self):
        """Test one URL per group in first-seen order."""
        result = self.runner.invoke(app, ["group", self._urls_file()])

        self.assertEqual(result.exit_code, 0)
        self.assertEqual(result.stdout.splitlines(), [
            "https://example.com/en/about",
            "https://example.com/es/productos",
        ])

    def test_group_priority_option(self):
        """Test repeatable and comma separated priorities."""
        result = self.runner.invoke(
            app,
            ["group", self._urls_file(), "-p", "fr,es", "-p", "en"],
        )

        self.assertEqual(result.exit_code, 0)
        self.assertEqual(result.stdout.splitlines(), [
            "https://example.com/es/sobre-nosotros",
            "https://example.com/fr/produits",
        ])

    def test_group_counts(self):
        """Test occurrence counts in text output."""
        result = self.runner.invoke(app, ["group", self._urls_file(), "--counts"])

        self.assertEqual(result.exit_code, 0)
        self.assertEqual(result.stdout.splitlines(), [
            "3\thttps://example.com/en/about",
            "2\thttps://example.com/es/productos",
        ])

    def test_group_json(self):
        """Test JSON group output."""
        result = self.runner.invoke(app, ["group", self._urls_file(), "-f", "json"])

        self.assertEqual(result.exit_code, 0)
        data = json.loads(result.stdout)
        self.assertEqual([entry["key"] for entry in data], [
            "example.com/about",
            "example.com/product",
        ])
        self.assertEqual(data[0]["variants"], 3)

    def test_group_survives_undecodable_bytes(self):
        """Test that a line with invalid UTF-8 does not abort the run."""
        path = self.temp_path / "mixed.txt"
        path.write_bytes(
            b"https://example.com/en/about\n"
            b"https://example.com/\xff\xfe/x\n"
            b"https://example.com/es/sobre-nosotros\n"
        )

        for args, stdin in (
            (["group", str(path)], None),
            (["group"], path.read_bytes()),
        ):
            with self.subTest(args=args):
                result = self.runner.invoke(app, args, input=stdin)

                self.assertEqual(result.exit_code, 0)
                lines = result.stdout.splitlines()
                self.assertEqual(lines[0], "https://example.com/en/about")
                self.assertNotIn("https://example.com/es/sobre-nosotros", lines)
                self.assertEqual(len(lines), 2)

    def test_detect_survives_undecodable_bytes(self):
        """Test that detection continues past a line with invalid UTF-8."""
        result = self.runner.invoke(
            app,
            ["detect"],
            input=b"\xff\n https://example.com/es/productos \n",
        )

        self.assertEqual(result.exit_code, 0)
        self.assertIn("es\tpath\thttps://example.com/productos", result.stdout)

    def test_group_uses_config_file(self):
        """Test priority and format from a config file."""
        config = self.temp_path / "config.yaml"
        config.write_text("locale:\n  priority: [es]\noutput:\n  format: json\n")

        result = self.runner.invoke(app, ["group", self._urls_file(), "-c", str(config)])

        self.assertEqual(result.exit_code, 0)
        data = json.loads(result.stdout)
        self.assertEqual(data[0]["url"], "https://example.com/es/sobre-nosotros")

    def test_group_invalid_config(self):
        """Test that an invalid config exits with an error."""
        config = self.temp_path / "config.yaml"
        config.write_text("output:\n  format: xml\n")

        result = self.runner.invoke(app, ["group", self._urls_file(), "-c", str(config)])

        self.assertEqual(result.exit_code, 1)

    def test_group_scored(self):
        """Test representative selection by score."""
        result = self.runner.invoke(
            app,
            ["group", "--scored", "-p", "de"],
            input="https://example.com/fr/contact\nhttps://example.com/contact\n",
        )

        self.assertEqual(result.exit_code, 0)
        self.assertEqual(result.stdout.splitlines(), ["https://example.com/contact"])

    # ------------------------------------------------------------------------
    # compare / version
    # ------------------------------------------------------------------------

    def test_compare(self):
        """Test pairwise variant checks."""
        same = self.runner.invoke(
            app,
            ["compare", "https://example.com/en/about", "https://example.com/es/sobre-nosotros"],
        )
        different = self.runner.invoke(
            app,
            ["compare", "https://example.com/en/about", "https://example.com/en/contact"],
        )

        self.assertEqual(same.exit_code, 0)
        self.assertEqual(same.stdout.strip(), "true")
        self.assertEqual(different.stdout.strip(), "false")

    def test_compare_invalid_url(self):
        """Test exit code on unparseable input."""
        result = self.runner.invoke(app, ["compare", "http://[::1", "https://example.com/"])

        self.assertEqual(result.exit_code, 2)

    def test_version(self):
        """Test version output."""
        result = self.runner.invoke(app, ["version"])

        self.assertEqual(result.exit_code, 0)
        self.assertIn(__version__, result.stdout)


if __name__ == "__main__":
    unittest.main()
