"""Tests for brace expansion and glob matching."""

import pytest

from layerguard.scanning import GlobMatcher, expand_braces, glob_to_regex


class TestExpandBraces:
    """{a,b} alternatives."""

    def test_simple_group(self):
        """A single group expands in order."""
        assert expand_braces("**/*.{ts,java,cs}") == ["**/*.ts", "**/*.java", "**/*.cs"]

    def test_multiple_groups(self):
        """Groups combine left to right."""
        assert expand_braces("{a,b}/{x,y}") == ["a/x", "a/y", "b/x", "b/y"]

    def test_nested_group(self):
        """Nested groups are expanded recursively."""
        assert expand_braces("{a,{b,c}}.ts") == ["a.ts", "b.ts", "c.ts"]

    def test_duplicates_removed(self):
        """Repeated alternatives appear once."""
        assert expand_braces("{a,a,b}") == ["a", "b"]

    def test_group_without_comma_is_literal(self):
        """`{a}` is not an alternative list."""
        assert expand_braces("x{a}y") == ["x{a}y"]

    def test_no_braces(self):
        """Plain patterns pass through."""
        assert expand_braces("src/**/*.ts") == ["src/**/*.ts"]


class TestGlobMatcher:
    """Matching on POSIX relative paths."""

    @pytest.mark.parametrize(
        "path",
        [
            "domain/User.ts",
            "src/domain/User.ts",
            "src/domain/entities/User.java",
            "a/b/domain/c/d/User.cs",
        ],
    )
    def test_double_star_matches_any_depth(self, path):
        """** matches zero or more directories on both sides."""
        assert GlobMatcher("**/domain/**/*.{ts,java,cs}").matches(path)

    @pytest.mark.parametrize(
        "path",
        [
            "src/domain/User.tsx",
            "src/domainx/User.ts",
            "src/mydomain/User.ts",
            "src/domain",
        ],
    )
    def test_double_star_rejects(self, path):
        """Directory names must match exactly; extensions must match."""
        assert not GlobMatcher("**/domain/**/*.{ts,java,cs}").matches(path)

    def test_star_stays_in_segment(self):
        """* never crosses a slash."""
        matcher = GlobMatcher("src/*.ts")
        assert matcher.matches("src/a.ts")
        assert not matcher.matches("src/nested/a.ts")

    def test_question_mark(self):
        """? matches one character."""
        matcher = GlobMatcher("v?.ts")
        assert matcher.matches("v1.ts")
        assert not matcher.matches("v10.ts")

    def test_character_class(self):
        """[abc] and [!abc] classes."""
        assert GlobMatcher("[ab].ts").matches("a.ts")
        assert not GlobMatcher("[!ab].ts").matches("a.ts")
        assert GlobMatcher("[!ab].ts").matches("c.ts")

    def test_trailing_double_star_matches_everything_below(self):
        """A trailing ** matches all descendants (used by exclude patterns)."""
        matcher = GlobMatcher("**/node_modules/**")
        assert matcher.matches("node_modules/")
        assert matcher.matches("web/node_modules/react/index.js")
        assert not matcher.matches("src/index.js")

    def test_leading_dot_slash_ignored(self):
        """./ prefixes are stripped."""
        assert GlobMatcher("./src/*.ts").matches("src/a.ts")

    def test_regex_is_anchored(self):
        """Translated regexes match whole paths."""
        regex = glob_to_regex("*.ts")
        assert regex.startswith("^") and regex.endswith("$")
