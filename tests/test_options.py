"""
Configuration tests

Tests IncludeOptions defaults and validation, YAML options files,
environment-backed AppSettings, and the reload decision helper.
"""

import pytest
from pathlib import Path
import tempfile

from pydantic import ValidationError

from htmlinclude.config.settings import AppSettings
from htmlinclude.lib.errors import OptionsError
from htmlinclude.lib.watch import reload_isRequired
from htmlinclude.models.options import Alias, IncludeOptions


class TestIncludeOptions:
    """Test the options model"""

    def test_defaults(self):
        """Defaults match the documented configuration surface"""
        options = IncludeOptions()
        assert options.extensions == (".html", ".svg")
        assert options.delimiters == ("{{", "}}")
        assert options.allow_absolute_paths is False
        assert options.watch is True
        assert options.aliases == ()
        assert options.root_get() == Path.cwd()

    def test_frozen(self):
        """Options cannot be changed after creation"""
        options = IncludeOptions()
        with pytest.raises(ValidationError):
            options.watch = False

    def test_camel_case_names(self):
        """camelCase option names are accepted"""
        options = IncludeOptions(allowAbsolutePaths=True, rootDir="/site")
        assert options.allow_absolute_paths is True
        assert options.root_get() == Path("/site")

    def test_alias_mapping(self):
        """Aliases may be given as a mapping"""
        options = IncludeOptions(aliases={"@": "src", "~": "lib"})
        assert options.aliases == (
            Alias(find="@", replacement="src"),
            Alias(find="~", replacement="lib"),
        )

    def test_empty_delimiter_rejected(self):
        """Delimiters must not be empty"""
        with pytest.raises(ValidationError):
            IncludeOptions(delimiters=("{{", ""))

    def test_empty_extensions_rejected(self):
        """At least one extension is required"""
        with pytest.raises(ValidationError):
            IncludeOptions(extensions=())


class TestYAMLOptions:
    """Test loading options files"""

    def test_load(self):
        """All keys of an options file are applied"""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "htmlinclude.yaml"
            path.write_text(
                "extensions: ['.html', '.htm']\n"
                "delimiters: ['[[', ']]']\n"
                "allowAbsolutePaths: true\n"
                "watch: false\n"
                "aliases:\n"
                "  '@parts': src/partials\n"
            )
            options = IncludeOptions.options_fromYAML(path)

        assert options.extensions == (".html", ".htm")
        assert options.delimiters == ("[[", "]]")
        assert options.allow_absolute_paths is True
        assert options.watch is False
        assert options.aliases == (Alias(find="@parts", replacement="src/partials"),)

    def test_empty_file_gives_defaults(self):
        """An empty file is a valid options file"""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "empty.yaml"
            path.write_text("")
            assert IncludeOptions.options_fromYAML(path) == IncludeOptions()

    def test_overrides(self):
        """Keyword overrides win over the file"""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "o.yaml"
            path.write_text("watch: false\n")
            options = IncludeOptions.options_fromYAML(path, watch=True)
        assert options.watch is True

    def test_missing_file(self):
        """A missing file raises OptionsError"""
        with pytest.raises(OptionsError):
            IncludeOptions.options_fromYAML(Path("/nonexistent/htmlinclude.yaml"))

    def test_not_a_mapping(self):
        """Top-level lists are rejected"""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "list.yaml"
            path.write_text("- a\n- b\n")
            with pytest.raises(OptionsError):
                IncludeOptions.options_fromYAML(path)

    def test_invalid_yaml(self):
        """Unparsable YAML raises OptionsError"""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "bad.yaml"
            path.write_text("extensions: [.html\n")
            with pytest.raises(OptionsError):
                IncludeOptions.options_fromYAML(path)

    def test_invalid_values(self):
        """Validation errors become OptionsError"""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "bad.yaml"
            path.write_text("delimiters: ['{{', '']\n")
            with pytest.raises(OptionsError):
                IncludeOptions.options_fromYAML(path)


class TestAppSettings:
    """Test environment-backed settings"""

    def test_from_environment(self, monkeypatch):
        """HTMLINCLUDE_ variables configure the settings"""
        monkeypatch.setenv("HTMLINCLUDE_WATCH", "false")
        monkeypatch.setenv("HTMLINCLUDE_DELIMITER_OPEN", "<%")
        monkeypatch.setenv("HTMLINCLUDE_EXTENSIONS", '[".htm"]')
        settings = AppSettings()
        assert settings.watch is False
        assert settings.delimiter_open == "<%"
        assert settings.extensions == [".htm"]

    def test_options_from_settings(self):
        """Settings fields map onto options"""
        settings = AppSettings(
            extensions=[".htm"],
            delimiter_open="[[",
            delimiter_close="]]",
            allow_absolute_paths=True,
            watch=False,
        )
        options = IncludeOptions.options_fromSettings(settings, root_dir=Path("/site"))
        assert options.extensions == (".htm",)
        assert options.delimiters == ("[[", "]]")
        assert options.allow_absolute_paths is True
        assert options.watch is False
        assert options.root_dir == Path("/site")

    def test_options_file_setting(self):
        """An options file named in the settings takes precedence"""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "htmlinclude.yaml"
            path.write_text("extensions: ['.svg']\n")
            settings = AppSettings(options_file=str(path), extensions=[".html"])
            options = IncludeOptions.options_fromSettings(settings)
        assert options.extensions == (".svg",)


class TestReloadDecision:
    """Test the hot-reload helper"""

    def test_allowed_extension_triggers_reload(self):
        """Changes to includable files trigger a reload"""
        assert reload_isRequired("/site/card.html", IncludeOptions())

    def test_other_extension_ignored(self):
        """Other files do not"""
        assert not reload_isRequired("/site/app.js", IncludeOptions())

    def test_watch_off(self):
        """Nothing triggers with watch disabled"""
        assert not reload_isRequired("/site/card.html", IncludeOptions(watch=False))

    def test_restricted_to_watch_files(self):
        """With a watch set only its members trigger"""
        watched = {Path("/site/card.html")}
        assert reload_isRequired(Path("/site/card.html"), IncludeOptions(), watched)
        assert not reload_isRequired(Path("/site/other.html"), IncludeOptions(), watched)
