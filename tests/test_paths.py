"""
Path resolver tests

Tests relative, rooted and aliased include paths and the extension
allow-list.
"""

import os
import pytest
from pathlib import Path

from htmlinclude.lib.paths import path_resolve, extension_check, alias_apply
from htmlinclude.lib.errors import DisallowedExtensionError
from htmlinclude.models.options import Alias


BASE = Path("/site/pages")
ROOT = Path("/site")


class TestRelativePaths:
    """Test resolution against the including file's directory"""

    def test_sibling_file(self):
        """Plain names resolve next to the including file"""
        assert path_resolve("card.html", BASE, root_dir=ROOT) == Path("/site/pages/card.html")

    def test_parent_segments_normalized(self):
        """'..' segments are collapsed"""
        assert path_resolve("../shared/nav.html", BASE, root_dir=ROOT) == Path("/site/shared/nav.html")

    def test_dot_prefix(self):
        """Explicit './' gives the same result"""
        assert path_resolve("./card.html", BASE) == Path("/site/pages/card.html")

    def test_allow_absolute_relative_request(self):
        """Relative requests resolve the same way with absolute paths allowed"""
        resolved = path_resolve("parts/card.html", BASE, allow_absolute=True, root_dir=ROOT)
        assert resolved == Path("/site/pages/parts/card.html")


class TestRootedPaths:
    """Test leading-slash paths"""

    def test_rooted_at_root_dir(self):
        """A leading '/' resolves against the root directory"""
        assert path_resolve("/card.html", BASE, root_dir=ROOT) == Path("/site/card.html")

    def test_rooted_ignores_allow_absolute(self):
        """Rooted paths never escape the root directory"""
        resolved = path_resolve("/etc/card.html", BASE, allow_absolute=True, root_dir=ROOT)
        assert resolved == Path("/site/etc/card.html")

    def test_rooted_defaults_to_cwd(self):
        """Without root_dir the working directory is used"""
        expected = Path(os.path.abspath(os.path.join(os.getcwd(), "card.html")))
        assert path_resolve("/card.html", BASE) == expected


class TestAliases:
    """Test alias rewriting"""

    def test_alias_absolute_replacement(self):
        """An alias with an absolute replacement"""
        aliases = (Alias(find="@parts", replacement="/site/partials"),)
        resolved = path_resolve("@parts/card.html", BASE, aliases=aliases, root_dir=ROOT)
        assert resolved == Path("/site/partials/card.html")

    def test_alias_relative_replacement_uses_root(self):
        """Relative replacements resolve against the root, not the base directory"""
        aliases = (Alias(find="~", replacement="src"),)
        resolved = path_resolve("~/card.html", BASE, aliases=aliases, root_dir=Path("/proj"))
        assert resolved == Path("/proj/src/card.html")

    def test_alias_requires_separator(self):
        """The prefix must be followed by '/'"""
        aliases = (Alias(find="@parts", replacement="/site/partials"),)
        assert alias_apply("@partsx/card.html", aliases) is None
        resolved = path_resolve("@partsx/card.html", BASE, aliases=aliases, root_dir=ROOT)
        assert resolved == Path("/site/pages/@partsx/card.html")

    def test_first_alias_wins(self):
        """Aliases are tried in order"""
        aliases = (
            Alias(find="@", replacement="/first"),
            Alias(find="@", replacement="/second"),
        )
        assert alias_apply("@/x.html", aliases) == "/first/x.html"


class TestExtensionCheck:
    """Test the extension allow-list"""

    def test_allowed(self):
        """Allowed suffixes pass through"""
        path = Path("/site/icon.svg")
        assert extension_check(path, (".html", ".svg")) == path

    def test_rejected(self):
        """Other suffixes raise"""
        with pytest.raises(DisallowedExtensionError) as excinfo:
            extension_check(Path("/site/logo.png"), (".html", ".svg"))
        assert excinfo.value.path == Path("/site/logo.png")
        assert "extension not allowed" in str(excinfo.value)

    def test_multi_part_extension(self):
        """Suffixes are matched as plain string endings"""
        path = Path("/site/nav.inc.html")
        assert extension_check(path, (".inc.html",)) == path
