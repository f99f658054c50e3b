"""Tests for external specifier matching."""

import pytest

from pnp_plugin.externals import ExternalPattern
from pnp_plugin.externals import is_external
from pnp_plugin.externals import parse_externals


class TestParseExternals:
    """Tests for parse_externals."""

    def test_exact_entry(self):
        """Entries without a wildcard stay exact."""
        (pattern,) = parse_externals(["react"])
        assert pattern == ExternalPattern(exact="react")
        assert not pattern.is_wildcard

    def test_wildcard_entry(self):
        """Entries with a wildcard split into prefix and suffix."""
        (pattern,) = parse_externals(["@scope/*-plugin"])
        assert pattern.is_wildcard
        assert pattern.prefix == "@scope/"
        assert pattern.suffix == "-plugin"

    def test_leading_and_trailing_wildcards(self):
        """Wildcard may be at either end."""
        leading, trailing = parse_externals(["*.png", "left-*"])
        assert (leading.prefix, leading.suffix) == ("", ".png")
        assert (trailing.prefix, trailing.suffix) == ("left-", "")

    def test_preserves_order(self):
        patterns = parse_externals(["a", "b*", "c"])
        assert [p.exact for p in patterns] == ["a", None, "c"]

    def test_empty(self):
        assert parse_externals([]) == ()


class TestIsExternal:
    """Tests for is_external."""

    @pytest.mark.parametrize("specifier", ["react", "./local", "/abs/file.js", "..", "@scope/pkg"])
    def test_exact_match(self, specifier):
        """An entry always matches itself."""
        assert is_external(specifier, parse_externals([specifier]))

    def test_bare_package_covers_deep_imports(self):
        """Marking a package external also externalizes its subpaths."""
        externals = parse_externals(["react"])
        assert is_external("react/jsx-runtime", externals)
        assert is_external("react/sub/path", externals)

    def test_bare_package_requires_separator(self):
        """Prefix must be followed by a slash."""
        externals = parse_externals(["react"])
        assert not is_external("react-dom", externals)
        assert not is_external("reactother", externals)

    @pytest.mark.parametrize("entry", ["/abs", "./local", "../up", ".", ".."])
    def test_paths_do_not_cover_subpaths(self, entry):
        """Relative and absolute entries only match exactly."""
        assert not is_external(f"{entry}/child", parse_externals([entry]))

    def test_wildcard_match(self):
        externals = parse_externals(["a*z"])
        assert is_external("abz", externals)
        assert is_external("abcdz", externals)

    def test_wildcard_empty_middle(self):
        """The wildcard may match an empty string."""
        assert is_external("az", parse_externals(["a*z"]))

    def test_wildcard_length_check(self):
        """Prefix and suffix cannot overlap in the candidate."""
        externals = parse_externals(["a*a"])
        assert not is_external("a", externals)
        assert is_external("aa", externals)

    def test_wildcard_mismatch(self):
        externals = parse_externals(["a*z"])
        assert not is_external("a", externals)
        assert not is_external("bz", externals)
        assert not is_external("ab", externals)

    def test_wildcard_prefix_package(self):
        externals = parse_externals(["left-*"])
        assert is_external("left-pad", externals)
        assert not is_external("right-pad", externals)

    def test_any_pattern_matches(self):
        externals = parse_externals(["lodash", "*.css"])
        assert is_external("lodash/fp", externals)
        assert is_external("./styles.css", externals)
        assert not is_external("./styles.scss", externals)

    def test_no_patterns(self):
        assert not is_external("anything", ())
